"""
Capability a type implements to own its JSON shape directly.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..core.values import JsonValue


class JsonSerializable(ABC):
    """Self-describing capability.

    A type implementing this supplies its own conversion to and from the
    value model, taking precedence over structural mapping. It is the hook for
    types that must read several historical document shapes.
    """

    @abstractmethod
    def to_json(self) -> JsonValue:
        """Convert this instance to a JSON value."""

    @classmethod
    @abstractmethod
    def from_json(cls, value: JsonValue) -> Any:
        """Build an instance from a JSON value."""

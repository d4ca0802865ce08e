"""
Per-type converters and the registry the object mapper consults first.

A converter owns the JSON shape of one host type. Types whose natural JSON
form differs from their field layout (vectors, colours, pixel buffers,
version numbers) register one instead of relying on structural mapping.
"""

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Optional, TypeVar, Union

from ..core.values import JsonString, JsonValue
from ..security.exceptions import DuplicateConverterError, TypeMismatch

T = TypeVar("T")


class JsonConverter(ABC, Generic[T]):
    """Bidirectional mapping between a host type and one JSON value variant.

    Subclasses set ``target_type`` (the host type) and ``value_type`` (the
    JsonValue subclass produced and accepted) and implement ``to_json`` and
    ``from_json``.
    """

    target_type: ClassVar[type] = object
    value_type: ClassVar[type[JsonValue]] = JsonValue

    @abstractmethod
    def to_json(self, obj: T) -> JsonValue:
        """Convert a host object to its JSON value."""

    @abstractmethod
    def from_json(self, value: Any) -> T:
        """Convert a value of ``value_type`` back to a host object."""

    def from_value(self, value: JsonValue) -> T:
        """Check the value variant, then convert."""
        if not isinstance(value, self.value_type):
            raise TypeMismatch(
                f"{type(self).__name__} expects {self.value_type.__name__}, "
                f"got {type(value).__name__}"
            )
        return self.from_json(value)


class EnumConverter(JsonConverter[enum.Enum]):
    """Maps enum members to the String holding their name."""

    value_type = JsonString

    def __init__(self, enum_type: type[enum.Enum]):
        if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
            raise TypeError(f"{enum_type!r} is not an Enum type")
        self.enum_type = enum_type

    @property
    def target_type(self) -> type:  # type: ignore[override]
        return self.enum_type

    def to_json(self, obj: enum.Enum) -> JsonValue:
        if not isinstance(obj, self.enum_type):
            raise TypeMismatch(f"{obj!r} is not a member of {self.enum_type.__name__}")
        return JsonString(obj.name)

    def from_json(self, value: JsonString) -> enum.Enum:
        try:
            return self.enum_type[value.value]
        except KeyError:
            raise TypeMismatch(
                f"{value.value!r} is not a member of {self.enum_type.__name__}"
            ) from None


RegistryEntry = Union[JsonConverter[Any], tuple[type, JsonConverter[Any]]]


class ConverterRegistry:
    """Immutable mapping from exact host type to converter.

    Built from converters (registered under their ``target_type``) or explicit
    ``(type, converter)`` pairs. Registering a type twice raises
    DuplicateConverterError.
    """

    def __init__(self, entries: Iterable[RegistryEntry] = ()):
        converters: dict[type, JsonConverter[Any]] = {}
        for entry in entries:
            if isinstance(entry, tuple):
                host_type, converter = entry
            else:
                host_type, converter = entry.target_type, entry
            if not isinstance(converter, JsonConverter):
                raise TypeError(f"{converter!r} is not a JsonConverter")
            if host_type in converters:
                raise DuplicateConverterError(
                    f"A converter for {host_type.__name__} is already registered"
                )
            converters[host_type] = converter
        self._converters = MappingProxyType(converters)

    def lookup(self, host_type: type) -> Optional[JsonConverter[Any]]:
        """Get the converter for exactly this type, if any."""
        return self._converters.get(host_type)

    def extended(self, *entries: RegistryEntry) -> "ConverterRegistry":
        """Return a new registry with additional entries."""
        return ConverterRegistry([*self._converters.items(), *entries])

    def without(self, host_type: type) -> "ConverterRegistry":
        """Return a new registry with the converter for ``host_type`` removed."""
        return ConverterRegistry(
            item for item in self._converters.items() if item[0] is not host_type
        )

    def __contains__(self, host_type: object) -> bool:
        return host_type in self._converters

    def __len__(self) -> int:
        return len(self._converters)

    def __iter__(self) -> Iterator[type]:
        return iter(self._converters)

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self._converters)
        return f"ConverterRegistry([{names}])"


EMPTY_REGISTRY = ConverterRegistry()

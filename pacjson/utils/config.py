"""
Configuration and limits for pacjson parsing and object mapping.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ParseLimits:
    """Limits guarding the parser against hostile or runaway input."""

    max_input_size: int = 10 * 1024 * 1024
    max_string_length: int = 1024 * 1024
    max_nesting_depth: int = 100

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_string_length <= 0:
            raise ValueError("max_string_length must be positive")
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")


@dataclass
class ErrorReporting:
    """Settings for error reporting and debugging."""

    include_position: bool = True
    include_context: bool = True
    max_error_context: int = 50


@dataclass
class ParseConfig:
    """Configuration for the text parser."""

    limits: ParseLimits = field(default_factory=ParseLimits)
    error_reporting: ErrorReporting = field(default_factory=ErrorReporting)

    # Flat accessors
    @property
    def include_position(self) -> bool:
        """Whether to include position information in errors."""
        return self.error_reporting.include_position

    @property
    def include_context(self) -> bool:
        """Whether to include context excerpts in errors."""
        return self.error_reporting.include_context

    @property
    def max_error_context(self) -> int:
        """Maximum characters of context around an error."""
        return self.error_reporting.max_error_context


@dataclass
class MapperConfig:
    """Configuration for the object mapper."""

    # Allow composites without a converter to be mapped field by field
    structural_mapping: bool = True
    warn_on_unused_keys: bool = True
    logger: Optional[logging.Logger] = None

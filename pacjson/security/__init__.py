"""
Security components for pacjson.
"""

from .exceptions import (
    ErrorContext,
    ErrorReporter,
    ErrorSuggestionEngine,
    PacJsonError,
    ParseError,
    SecurityError,
)
from .limits import LimitValidator

__all__ = [
    "ErrorContext",
    "ErrorReporter",
    "ErrorSuggestionEngine",
    "LimitValidator",
    "PacJsonError",
    "ParseError",
    "SecurityError",
]

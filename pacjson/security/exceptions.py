"""
Exception hierarchy and error reporting for pacjson.

Every error raised by the parser, emitter and object mapper derives from
PacJsonError. Errors raised while reading text carry a line/column position
and an excerpt of the offending line with a caret under the failing column.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.scanner import Position


@dataclass
class ErrorContext:
    """Excerpt of the source text surrounding an error."""

    text: str
    position: Position
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class PacJsonError(Exception):
    """Base exception for all pacjson errors."""

    def __init__(
        self,
        message: str,
        position: Optional[Position] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = list(suggestions) if suggestions else []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        head, _, details = self.message.partition("\n")
        if self.position is not None:
            head += f" at line {self.position.line}, column {self.position.column}"
        parts = [head]
        if details:
            parts.append(details)
        if self.context is not None:
            parts.append("Context:")
            parts.append(f"  {self.context.line_text}")
            parts.append(f"  {self.context.column_indicator}")
        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(parts)


class ParseError(PacJsonError):
    """Malformed JSON text."""

    # Character index of the failure in the parsed text, when known
    offset: Optional[int] = None


class NumericError(ParseError):
    """A numeric literal is well formed but cannot be represented."""


class NumericOverflow(NumericError):
    """A numeric literal exceeds the representable range."""


class NumericUnderflow(NumericError):
    """A non-zero numeric literal rounds to zero."""


class SecurityError(PacJsonError):
    """A configured parsing limit was exceeded."""


class EmitError(PacJsonError):
    """A value cannot be written as JSON text."""


class MappingError(PacJsonError):
    """Base class for object mapper failures.

    ``path`` locates the failing member from the root, e.g. ``$.layers[2].name``.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message, suggestions=suggestions)


class TypeMismatch(MappingError):
    """A value variant is incompatible with the requested type."""


class MissingField(MappingError):
    """An object lacks a key required by the target type."""


class CircularTypeReference(MappingError):
    """A type refers back to itself along one expansion path."""


class UnsupportedShape(MappingError):
    """A value has no viable mapping to or from JSON."""


class DuplicateKeyError(PacJsonError, ValueError):
    """A key was added twice to one object."""


class DuplicateConverterError(PacJsonError, ValueError):
    """A converter was registered twice for one type."""


class ErrorReporter:
    """Builds positioned errors with context excerpts for one input text."""

    def __init__(self, text: str, max_context: int = 50):
        self.text = text
        self.lines = text.split("\n")
        self.max_context = max_context

    def create_parse_error(
        self,
        message: str,
        position: Position,
        suggestions: Optional[list[str]] = None,
        error_class: type[ParseError] = ParseError,
    ) -> ParseError:
        """Create a ParseError (or subclass) with context at the given position."""
        return error_class(
            message,
            position=position,
            context=self._build_context(position),
            suggestions=suggestions,
        )

    def create_security_error(
        self, message: str, position: Optional[Position] = None
    ) -> SecurityError:
        """Create a SecurityError, with context when a position is known."""
        context = self._build_context(position) if position is not None else None
        return SecurityError(message, position=position, context=context)

    def _build_context(self, position: Position) -> ErrorContext:
        line_index = min(max(position.line - 1, 0), max(len(self.lines) - 1, 0))
        line_text = self.lines[line_index] if self.lines else ""
        col = min(max(position.column - 1, 0), len(line_text))

        half = self.max_context // 2
        start = max(0, col - half)
        end = min(len(line_text), col + half)
        excerpt = line_text[start:end]
        indicator = " " * (col - start) + "^"

        return ErrorContext(
            text=self.text,
            position=position,
            context_before=line_text[start:col],
            context_after=line_text[col:end],
            error_char=line_text[col] if col < len(line_text) else "",
            line_text=excerpt,
            column_indicator=indicator,
        )


class ErrorSuggestionEngine:
    """Produces human-readable hints for common mistakes."""

    @staticmethod
    def suggest_for_unexpected_token(token: str) -> list[str]:
        """Suggest fixes for an unexpected character."""
        if token == "":
            return ["The input ended early; check for a missing value or bracket"]
        if token == "'":
            return ["Strings must use double quotes, not single quotes"]
        if token == '"':
            return [
                "Check for a missing comma before this quote",
                "Check that the previous string is closed",
            ]
        if token in "]}":
            return ["Remove the trailing comma before the closing bracket"]
        return [f"Unexpected character {token!r}; expected a JSON value"]

    @staticmethod
    def suggest_for_unclosed_structure(kind: str) -> list[str]:
        """Suggest fixes for an unterminated list or object."""
        if kind == "object":
            return ["Add the missing '}' to close the object"]
        if kind == "array":
            return ["Add the missing ']' to close the list"]
        return ['Add the missing \'"\' to close the string']

    @staticmethod
    def suggest_for_invalid_value(value: str) -> list[str]:
        """Suggest fixes for a literal that is not valid JSON."""
        lowered = value.lower()
        if lowered in ("true", "false", "null") and value != lowered:
            return [f"Literals are lowercase: use '{lowered}'"]
        if value in ("None", "undefined"):
            return ["Use 'null' for an absent value"]
        if lowered in ("nan", "infinity", "-infinity"):
            return ["NaN and Infinity cannot be represented in JSON"]
        return []

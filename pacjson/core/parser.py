"""
Recursive descent parser producing the immutable value model.

At each value position the parser tries the variants in a fixed order
(null, bool, int, float, string, list, object) and returns the first that
succeeds. When none does, the failures of every variant are combined into a
single ParseError. An integer outside the 64-bit range is retried as a float;
float overflow and underflow are raised as soon as they are found and are
never masked by a later variant.
"""

import logging
import math
from collections.abc import Callable
from typing import Optional, TextIO, Union

import regex  # type: ignore[import-untyped]

from ..security.exceptions import (
    ErrorReporter,
    ErrorSuggestionEngine,
    NumericError,
    NumericOverflow,
    NumericUnderflow,
    ParseError,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import (
    FALSE_LITERAL,
    INT64_MAX,
    INT64_MIN,
    JSON_ESCAPE_MAP,
    NULL_LITERAL,
    TRUE_LITERAL,
)
from .scanner import Scanner
from .values import (
    FALSE,
    NULL,
    TRUE,
    JsonFloat,
    JsonInt,
    JsonList,
    JsonObject,
    JsonString,
    JsonValue,
    ListBuilder,
    ObjectBuilder,
)

logger = logging.getLogger(__name__)

# Integers take only a non-negative exponent
INT_PATTERN = regex.compile(r"(-?)([0-9]+)(?:[eE]\+?([0-9]+))?")
FLOAT_PATTERN = regex.compile(r"(-?)([0-9]+)(?:\.([0-9]*))?(?:[eE]([+-]?[0-9]+))?")
STRING_CHUNK_PATTERN = regex.compile(r'[^"\\]*')
HEX4_PATTERN = regex.compile(r"[0-9a-fA-F]{4}")

# Longest digit run that can still fit in a signed 64-bit integer
_MAX_INT_DIGITS = 19


class Parser:
    """Parses one JSON text into a JsonValue tree."""

    def __init__(self, text: str, config: Optional[ParseConfig] = None):
        self.config = config or ParseConfig()
        self.scanner = Scanner(text)
        self.reporter = ErrorReporter(text, self.config.max_error_context)
        self.validator = LimitValidator(self.config.limits)

        self._variants: tuple[tuple[str, Callable[[], JsonValue]], ...] = (
            ("null", self.parse_null),
            ("bool", self.parse_bool),
            ("int", self.parse_int),
            ("float", self.parse_float),
            ("string", self.parse_string),
            ("list", self.parse_list),
            ("object", self.parse_object),
        )

    @property
    def text(self) -> str:
        return self.scanner.text

    def parse(self) -> JsonValue:
        """Parse the whole text as one value, allowing surrounding whitespace."""
        self.validator.reset()
        self.validator.validate_input_size(self.text)
        self.scanner.skip_whitespace()
        if self.scanner.at_end():
            raise self._error("Empty input: expected a JSON value", self.scanner.pos)

        value = self.parse_value()

        self.scanner.skip_whitespace()
        if not self.scanner.at_end():
            raise self._error(
                "Extra data after the top-level value",
                self.scanner.pos,
                ["Only one top-level value is allowed; remove the trailing text"],
            )
        return value

    def raw_decode(self, index: int = 0) -> tuple[JsonValue, int]:
        """Parse one value starting at ``index``; return it and the index after it."""
        self.validator.reset()
        self.validator.validate_input_size(self.text)
        self.scanner.pos = index
        self.scanner.skip_whitespace()
        value = self.parse_value()
        return value, self.scanner.pos

    def parse_value(self) -> JsonValue:
        """Try each value variant in order at the current position."""
        start = self.scanner.pos
        failures: list[tuple[str, ParseError]] = []

        for name, attempt in self._variants:
            try:
                return attempt()
            except NumericError as exc:
                # An out-of-range integer may still be a float
                if name != "int":
                    raise
                failures.append((name, exc))
                self.scanner.pos = start
            except ParseError as exc:
                failures.append((name, exc))
                self.scanner.pos = start

        raise self._combine_failures(failures, start)

    # Literals

    def parse_null(self) -> JsonValue:
        start = self.scanner.pos
        if not self.scanner.startswith(NULL_LITERAL):
            raise self._error(f"Expected '{NULL_LITERAL}'", start)
        self.scanner.advance(len(NULL_LITERAL))
        return NULL

    def parse_bool(self) -> JsonValue:
        start = self.scanner.pos
        if self.scanner.startswith(TRUE_LITERAL):
            self.scanner.advance(len(TRUE_LITERAL))
            return TRUE
        if self.scanner.startswith(FALSE_LITERAL):
            self.scanner.advance(len(FALSE_LITERAL))
            return FALSE
        raise self._error(f"Expected '{TRUE_LITERAL}' or '{FALSE_LITERAL}'", start)

    # Numbers

    def parse_int(self) -> JsonValue:
        """Parse an integer literal with an optional non-negative exponent."""
        start = self.scanner.pos
        match = INT_PATTERN.match(self.text, start)
        if match is None:
            raise self._error("Expected an integer", start)

        end = match.end()
        following = self.text[end : end + 1]
        if following == ".":
            raise self._error("Integer literal cannot have a fractional part", end)
        if following in ("e", "E"):
            if self.text[end + 1 : end + 2] == "-":
                raise self._error(
                    "Integer literal cannot have a negative exponent", end
                )
            raise self._error("Malformed exponent in integer literal", end)

        sign, digits, exponent_digits = match.groups()
        if len(digits.lstrip("0")) > _MAX_INT_DIGITS:
            raise self._overflow(f"Integer literal {match.group()} is too large", start)

        value = int(digits.lstrip("0") or "0")
        if sign:
            value = -value
        if not INT64_MIN <= value <= INT64_MAX:
            raise self._overflow(f"Integer literal {match.group()} is too large", start)

        if exponent_digits is not None and value != 0:
            if len(exponent_digits.lstrip("0")) > _MAX_INT_DIGITS:
                raise self._overflow(f"Exponent of {match.group()} is too large", start)
            for _ in range(int(exponent_digits.lstrip("0") or "0")):
                value *= 10
                if not INT64_MIN <= value <= INT64_MAX:
                    raise self._overflow(
                        f"Integer literal {match.group()} is too large", start
                    )

        self.scanner.pos = end
        return JsonInt(value)

    def parse_float(self) -> JsonValue:
        """Parse a floating point literal with an optional signed exponent."""
        start = self.scanner.pos
        match = FLOAT_PATTERN.match(self.text, start)
        if match is None:
            raise self._error("Expected a number", start)

        end = match.end()
        following = self.text[end : end + 1]
        if following == ".":
            if match.group(4) is not None:
                raise self._error("Exponent cannot be followed by a decimal point", end)
            raise self._error("Number cannot have more than one decimal point", end)
        if following in ("e", "E"):
            raise self._error("Malformed exponent in number", end)

        literal = match.group()
        value = float(literal)
        if math.isinf(value):
            raise self._overflow(f"Number {literal} is too large", start)
        mantissa = match.group(2) + (match.group(3) or "")
        if value == 0.0 and mantissa.strip("0"):
            raise self._error(
                f"Number {literal} is too small to represent",
                start,
                error_class=NumericUnderflow,
            )

        self.scanner.pos = end
        return JsonFloat(value)

    # Strings

    def parse_string(self) -> JsonString:
        """Parse a double-quoted string, decoding escape sequences."""
        start = self.scanner.pos
        text = self.text
        if self.scanner.peek() != '"':
            raise self._error("Expected '\"' to start a string", start)

        pos = start + 1
        chunks: list[str] = []
        while True:
            match = STRING_CHUNK_PATTERN.match(text, pos)
            chunks.append(match.group())
            pos = match.end()

            if pos >= len(text):
                raise self._error(
                    "Unterminated string",
                    start,
                    ErrorSuggestionEngine.suggest_for_unclosed_structure("string"),
                )
            if text[pos] == '"':
                pos += 1
                break

            escape = text[pos + 1 : pos + 2]
            if escape == "":
                raise self._error(
                    "Unterminated string",
                    start,
                    ErrorSuggestionEngine.suggest_for_unclosed_structure("string"),
                )
            if escape == "u":
                decoded, pos = self._decode_unicode_escape(pos)
                chunks.append(decoded)
            elif escape in JSON_ESCAPE_MAP:
                chunks.append(JSON_ESCAPE_MAP[escape])
                pos += 2
            else:
                raise self._error(
                    f"Invalid escape sequence '\\{escape}'",
                    pos,
                    ["Escape a literal backslash as '\\\\'"],
                )

        value = "".join(chunks)
        self.validator.validate_string_length(value, self.scanner.position_at(start))
        self.scanner.pos = pos
        return JsonString(value)

    def _decode_unicode_escape(self, pos: int) -> tuple[str, int]:
        """Decode ``\\uXXXX`` at ``pos``, joining an adjacent surrogate pair."""
        text = self.text
        if HEX4_PATTERN.fullmatch(text, pos + 2, pos + 6) is None:
            raise self._error(
                "Invalid unicode escape: expected exactly four hex digits", pos
            )
        code = int(text[pos + 2 : pos + 6], 16)
        pos += 6

        if 0xD800 <= code <= 0xDBFF and text.startswith("\\u", pos):
            if HEX4_PATTERN.fullmatch(text, pos + 2, pos + 6) is not None:
                low = int(text[pos + 2 : pos + 6], 16)
                if 0xDC00 <= low <= 0xDFFF:
                    code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    pos += 6
        return chr(code), pos

    # Containers

    def parse_list(self) -> JsonList:
        start = self.scanner.pos
        if self.scanner.peek() != "[":
            raise self._error("Expected '[' to start a list", start)
        self.scanner.advance()
        self.validator.enter_structure(self.scanner.position_at(start))
        try:
            builder = ListBuilder()
            self.scanner.skip_whitespace()
            if self.scanner.peek() == "]":
                self.scanner.advance()
                return builder.build()

            while True:
                self.scanner.skip_whitespace()
                builder.add(self.parse_value())
                self.scanner.skip_whitespace()

                char = self.scanner.peek()
                if char == "]":
                    self.scanner.advance()
                    return builder.build()
                if char == ",":
                    comma = self.scanner.pos
                    self.scanner.advance()
                    self.scanner.skip_whitespace()
                    if self.scanner.peek() == "]":
                        raise self._error(
                            "Trailing comma in list",
                            comma,
                            ErrorSuggestionEngine.suggest_for_unexpected_token("]"),
                        )
                    continue
                if char == "":
                    raise self._error(
                        "Unterminated list",
                        start,
                        ErrorSuggestionEngine.suggest_for_unclosed_structure("array"),
                    )
                raise self._error(
                    "Expected ',' or ']' in list",
                    self.scanner.pos,
                    ErrorSuggestionEngine.suggest_for_unexpected_token(char),
                )
        finally:
            self.validator.exit_structure()

    def parse_object(self) -> JsonObject:
        start = self.scanner.pos
        if self.scanner.peek() != "{":
            raise self._error("Expected '{' to start an object", start)
        self.scanner.advance()
        self.validator.enter_structure(self.scanner.position_at(start))
        try:
            builder = ObjectBuilder()
            self.scanner.skip_whitespace()
            if self.scanner.peek() == "}":
                self.scanner.advance()
                return builder.build()

            while True:
                self.scanner.skip_whitespace()
                key_start = self.scanner.pos
                key = self._parse_object_key(start)
                if key in builder:
                    raise self._error(
                        f"Duplicate key {key!r} in object",
                        key_start,
                        ["Object keys must be unique"],
                    )
                self._expect_colon()
                self.scanner.skip_whitespace()
                builder.add(key, self.parse_value())
                self.scanner.skip_whitespace()

                char = self.scanner.peek()
                if char == "}":
                    self.scanner.advance()
                    return builder.build()
                if char == ",":
                    comma = self.scanner.pos
                    self.scanner.advance()
                    self.scanner.skip_whitespace()
                    if self.scanner.peek() == "}":
                        raise self._error(
                            "Trailing comma in object",
                            comma,
                            ErrorSuggestionEngine.suggest_for_unexpected_token("}"),
                        )
                    continue
                if char == "":
                    raise self._error(
                        "Unterminated object",
                        start,
                        ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
                    )
                raise self._error(
                    "Expected ',' or '}' in object",
                    self.scanner.pos,
                    ErrorSuggestionEngine.suggest_for_unexpected_token(char),
                )
        finally:
            self.validator.exit_structure()

    def _parse_object_key(self, object_start: int) -> str:
        char = self.scanner.peek()
        if char == "":
            raise self._error(
                "Unterminated object",
                object_start,
                ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
            )
        if char != '"':
            raise self._error(
                "Expected a double-quoted string key",
                self.scanner.pos,
                ErrorSuggestionEngine.suggest_for_unexpected_token(char),
            )
        return self.parse_string().value

    def _expect_colon(self) -> None:
        self.scanner.skip_whitespace()
        if self.scanner.peek() != ":":
            raise self._error(
                "Expected ':' after object key",
                self.scanner.pos,
                ["Separate each key from its value with ':'"],
            )
        self.scanner.advance()

    # Errors

    def _error(
        self,
        message: str,
        index: int,
        suggestions: Optional[list[str]] = None,
        error_class: type[ParseError] = ParseError,
    ) -> ParseError:
        position = (
            self.scanner.position_at(index) if self.config.include_position else None
        )
        if position is not None and self.config.include_context:
            error = self.reporter.create_parse_error(
                message, position, suggestions, error_class
            )
        else:
            error = error_class(message, position=position, suggestions=suggestions)
        error.offset = index
        return error

    def _overflow(self, message: str, index: int) -> ParseError:
        return self._error(message, index, error_class=NumericOverflow)

    def _combine_failures(
        self, failures: list[tuple[str, ParseError]], start: int
    ) -> ParseError:
        """Merge the failure of every variant into one descriptive error."""
        furthest = max(failures, key=lambda item: item[1].offset or 0)[1]
        lines = ["Cannot parse a JSON value"]
        for name, exc in failures:
            where = ""
            if exc.position is not None:
                where = f" (line {exc.position.line}, column {exc.position.column})"
            head, _, details = exc.message.partition("\n")
            lines.append(f"  {name}: {head}{where}")
            if details and exc is furthest:
                lines.extend("  " + line for line in details.split("\n"))

        suggestions = list(furthest.suggestions)
        if furthest.offset == start:
            word = self._word_at(start)
            suggestions = ErrorSuggestionEngine.suggest_for_invalid_value(
                word
            ) or ErrorSuggestionEngine.suggest_for_unexpected_token(
                self.text[start : start + 1]
            )
        logger.debug("No value variant matched at index %d", start)
        return self._error(
            "\n".join(lines), furthest.offset or start, suggestions
        )

    def _word_at(self, index: int) -> str:
        end = index
        text = self.text
        while end < len(text) and (text[end].isalnum() or text[end] == "-"):
            end += 1
        return text[index:end]


def parse(
    text: Union[str, TextIO], config: Optional[ParseConfig] = None
) -> JsonValue:
    """
    Parse JSON text into a JsonValue tree.

    Args:
        text: The JSON text, or an already-open text stream to read it from
        config: Optional ParseConfig with limits and error reporting settings

    Returns:
        The parsed value

    Raises:
        ParseError: If the text is malformed or has trailing data
        NumericOverflow: If a number is too large to represent
        NumericUnderflow: If a non-zero number is too small to represent
        SecurityError: If a configured limit is exceeded
    """
    if hasattr(text, "read"):
        text = text.read()
    if not isinstance(text, str):
        raise TypeError(
            f"Input must be a str or text stream, not {type(text).__name__}"
        )
    return Parser(text, config).parse()


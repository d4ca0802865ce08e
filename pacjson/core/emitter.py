"""
Writes JsonValue trees as JSON text, compact or tab-indented.
"""

import math

from ..security.exceptions import EmitError
from .constants import (
    COMPACT_ITEM_SEPARATOR,
    EMIT_ESCAPE_MAP,
    FALSE_LITERAL,
    KEY_SEPARATOR,
    NULL_LITERAL,
    PRETTY_INDENT,
    PRETTY_ITEM_SEPARATOR,
    PRINTABLE_ASCII_MAX,
    PRINTABLE_ASCII_MIN,
    TRUE_LITERAL,
)
from .values import (
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonList,
    JsonNull,
    JsonObject,
    JsonString,
    JsonValue,
)


def escape_string(value: str) -> str:
    """Quote and escape a string; non-printable and non-ASCII become \\uXXXX."""
    parts = ['"']
    for char in value:
        short = EMIT_ESCAPE_MAP.get(char)
        if short is not None:
            parts.append(short)
            continue
        code = ord(char)
        if PRINTABLE_ASCII_MIN <= code <= PRINTABLE_ASCII_MAX:
            parts.append(char)
        elif code > 0xFFFF:
            code -= 0x10000
            high, low = 0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)
            parts.append(f"\\u{high:04X}\\u{low:04X}")
        else:
            parts.append(f"\\u{code:04X}")
    parts.append('"')
    return "".join(parts)


def format_float(value: float) -> str:
    """Format a finite float so it always reads back as a float."""
    if not math.isfinite(value):
        raise EmitError(f"Cannot write non-finite number {value!r} as JSON")
    text = repr(value)
    if "." not in text:
        mantissa, sep, exponent = text.partition("e")
        text = f"{mantissa}.0{sep}{exponent}"
    return text


class Emitter:
    """Converts a value tree to text.

    Compact output separates items with ``", "`` and keys with ``": "``.
    Pretty output puts each item on its own line, indented one tab per
    nesting level, with the closing bracket aligned with the line of its
    opener. Empty containers are written ``[ ]`` and ``{ }`` when pretty. A
    list marked single-line is written compactly, nested containers included.
    """

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def emit(self, value: JsonValue) -> str:
        parts: list[str] = []
        self._write(value, 0, parts)
        return "".join(parts)

    def _write(self, value: JsonValue, depth: int, out: list[str]) -> None:
        if isinstance(value, JsonNull):
            out.append(NULL_LITERAL)
        elif isinstance(value, JsonBool):
            out.append(TRUE_LITERAL if value.value else FALSE_LITERAL)
        elif isinstance(value, JsonInt):
            out.append(str(value.value))
        elif isinstance(value, JsonFloat):
            out.append(format_float(value.value))
        elif isinstance(value, JsonString):
            out.append(escape_string(value.value))
        elif isinstance(value, JsonList):
            self._write_list(value, depth, out)
        elif isinstance(value, JsonObject):
            self._write_object(value, depth, out)
        else:
            raise EmitError(f"Unknown JSON value type: {type(value).__name__}")

    def _write_list(self, value: JsonList, depth: int, out: list[str]) -> None:
        if not value:
            out.append("[ ]" if self.pretty else "[]")
            return
        if not self.pretty or not value.separate_lines:
            # Items of a single-line list are written compactly
            writer = _COMPACT_EMITTER if self.pretty else self
            out.append("[")
            for index, item in enumerate(value):
                if index:
                    out.append(COMPACT_ITEM_SEPARATOR)
                writer._write(item, depth, out)
            out.append("]")
            return

        inner = PRETTY_INDENT * (depth + 1)
        out.append("[\n")
        for index, item in enumerate(value):
            if index:
                out.append(PRETTY_ITEM_SEPARATOR)
            out.append(inner)
            self._write(item, depth + 1, out)
        out.append("\n" + PRETTY_INDENT * depth + "]")

    def _write_object(self, value: JsonObject, depth: int, out: list[str]) -> None:
        if not value:
            out.append("{ }" if self.pretty else "{}")
            return
        if not self.pretty:
            out.append("{")
            for index, (key, item) in enumerate(value.items()):
                if index:
                    out.append(COMPACT_ITEM_SEPARATOR)
                out.append(escape_string(key))
                out.append(KEY_SEPARATOR)
                self._write(item, depth, out)
            out.append("}")
            return

        inner = PRETTY_INDENT * (depth + 1)
        out.append("{\n")
        for index, (key, item) in enumerate(value.items()):
            if index:
                out.append(PRETTY_ITEM_SEPARATOR)
            out.append(inner)
            out.append(escape_string(key))
            out.append(KEY_SEPARATOR)
            self._write(item, depth + 1, out)
        out.append("\n" + PRETTY_INDENT * depth + "}")


_COMPACT_EMITTER = Emitter()


def emit(value: JsonValue, pretty: bool = False) -> str:
    """Write a value tree as JSON text.

    Raises:
        EmitError: If the tree holds a NaN or infinite float
    """
    return Emitter(pretty).emit(value)

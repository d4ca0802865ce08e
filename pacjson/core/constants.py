"""
Common constants and escape tables shared by the parser and emitter.
"""

# Escapes accepted inside a string literal, keyed by the character after "\".
JSON_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# Characters the emitter writes with a short escape. Everything else outside
# printable ASCII is written as \uXXXX.
EMIT_ESCAPE_MAP = {
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

PRINTABLE_ASCII_MIN = 0x20
PRINTABLE_ASCII_MAX = 0x7E

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

PRETTY_INDENT = "\t"
COMPACT_ITEM_SEPARATOR = ", "
PRETTY_ITEM_SEPARATOR = ",\n"
KEY_SEPARATOR = ": "

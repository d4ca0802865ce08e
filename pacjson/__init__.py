"""
pacjson - JSON value model, parser, emitter and object mapper.

pacjson reads and writes the document format of a pixel-art editor. It keeps
integers and floats apart across a round trip, accepts the extra string
escapes ``\\0``, ``\\a`` and ``\\v``, and indents pretty output with tabs.

Quick Start:
    import pacjson

    value = pacjson.parse('{"size": [16, 16], "scale": 4.0}')
    text = pacjson.emit(value, pretty=True)

    # Objects
    from dataclasses import dataclass

    @dataclass
    class Layer:
        name: str
        opacity: float

    text = pacjson.dumps(Layer("background", 1.0))
    layer = pacjson.loads(text, Layer)

    # Types with their own JSON shape
    from pacjson.extensions import default_registry, Vector2
    pacjson.dumps(Vector2(1.0, 2.0), default_registry())   # "[1.0, 2.0]"
"""

from .core.emitter import Emitter, emit
from .core.engine import dump, dumps, load, loads
from .core.parser import Parser, parse
from .core.values import (
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonList,
    JsonNull,
    JsonObject,
    JsonString,
    JsonValue,
    ListBuilder,
    ObjectBuilder,
    from_python,
    have_same_data,
)
from .mapping.converters import ConverterRegistry, EnumConverter, JsonConverter
from .mapping.interfaces import JsonSerializable
from .mapping.mapper import ObjectMapper, deserialize, serialize
from .security.exceptions import (
    CircularTypeReference,
    DuplicateConverterError,
    DuplicateKeyError,
    EmitError,
    MappingError,
    MissingField,
    NumericError,
    NumericOverflow,
    NumericUnderflow,
    PacJsonError,
    ParseError,
    SecurityError,
    TypeMismatch,
    UnsupportedShape,
)
from .utils.config import ErrorReporting, MapperConfig, ParseConfig, ParseLimits

__version__ = "0.1.0"

__all__ = [
    # Value model
    "JsonValue",
    "JsonNull",
    "JsonBool",
    "JsonInt",
    "JsonFloat",
    "JsonString",
    "JsonList",
    "JsonObject",
    "ListBuilder",
    "ObjectBuilder",
    "have_same_data",
    "from_python",
    # Text
    "parse",
    "emit",
    "Parser",
    "Emitter",
    # Mapping
    "serialize",
    "deserialize",
    "ObjectMapper",
    "JsonConverter",
    "ConverterRegistry",
    "JsonSerializable",
    "EnumConverter",
    # json-module style helpers
    "dumps",
    "loads",
    "dump",
    "load",
    # Configuration
    "ParseConfig",
    "ParseLimits",
    "ErrorReporting",
    "MapperConfig",
    # Errors
    "PacJsonError",
    "ParseError",
    "NumericError",
    "NumericOverflow",
    "NumericUnderflow",
    "SecurityError",
    "EmitError",
    "MappingError",
    "TypeMismatch",
    "MissingField",
    "CircularTypeReference",
    "UnsupportedShape",
    "DuplicateKeyError",
    "DuplicateConverterError",
]

"""Object mapping between host types and the value model."""

from .converters import ConverterRegistry, EnumConverter, JsonConverter
from .interfaces import JsonSerializable
from .mapper import ObjectMapper, deserialize, serialize

__all__ = [
    "ConverterRegistry",
    "EnumConverter",
    "JsonConverter",
    "JsonSerializable",
    "ObjectMapper",
    "deserialize",
    "serialize",
]

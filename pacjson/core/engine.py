"""
Top-level entry points joining the mapper, emitter and parser.

``dumps``/``loads`` mirror the shape of the standard ``json`` module:
``dumps(obj)`` is ``emit(serialize(obj))`` and ``loads(text, T)`` is
``deserialize(parse(text), T)``. ``dump``/``load`` use a stream the caller
has already opened; the engine never opens files itself.
"""

from typing import Any, Optional, TextIO

from ..mapping.converters import ConverterRegistry
from ..mapping.mapper import ObjectMapper
from ..utils.config import MapperConfig, ParseConfig
from .emitter import emit
from .parser import parse


def dumps(
    obj: Any,
    registry: Optional[ConverterRegistry] = None,
    *,
    pretty: bool = False,
    config: Optional[MapperConfig] = None,
) -> str:
    """Serialize ``obj`` to JSON text."""
    return emit(ObjectMapper(registry, config).serialize(obj), pretty=pretty)


def loads(
    text: str,
    target_type: Any = Any,
    registry: Optional[ConverterRegistry] = None,
    *,
    parse_config: Optional[ParseConfig] = None,
    config: Optional[MapperConfig] = None,
) -> Any:
    """
    Parse JSON text and deserialize it as ``target_type``.

    With the default ``target_type`` of ``Any`` the result is plain Python
    data (dict, list, str, int, float, bool, None).
    """
    value = parse(text, parse_config)
    return ObjectMapper(registry, config).deserialize(value, target_type)


def dump(
    obj: Any,
    fp: TextIO,
    registry: Optional[ConverterRegistry] = None,
    *,
    pretty: bool = False,
    config: Optional[MapperConfig] = None,
) -> None:
    """Serialize ``obj`` as JSON text to an open text stream."""
    fp.write(dumps(obj, registry, pretty=pretty, config=config))


def load(
    fp: TextIO,
    target_type: Any = Any,
    registry: Optional[ConverterRegistry] = None,
    *,
    parse_config: Optional[ParseConfig] = None,
    config: Optional[MapperConfig] = None,
) -> Any:
    """Read JSON text from an open text stream and deserialize it."""
    return loads(
        fp.read(), target_type, registry, parse_config=parse_config, config=config
    )

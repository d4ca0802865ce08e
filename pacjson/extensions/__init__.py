"""
Stock converters for the drawing application's value types.
"""

from ..mapping.converters import ConverterRegistry
from .geometry import (
    Color,
    ColorConverter,
    PixelBuffer,
    PixelBufferConverter,
    Vector2,
    Vector2Converter,
    Vector3,
    Vector3Converter,
)
from .version import SemanticVersion, SemanticVersionConverter


def default_registry() -> ConverterRegistry:
    """A registry holding a converter for every type in this package."""
    return ConverterRegistry(
        [
            Vector2Converter(),
            Vector3Converter(),
            ColorConverter(),
            PixelBufferConverter(),
            SemanticVersionConverter(),
        ]
    )


__all__ = [
    "Color",
    "ColorConverter",
    "PixelBuffer",
    "PixelBufferConverter",
    "SemanticVersion",
    "SemanticVersionConverter",
    "Vector2",
    "Vector2Converter",
    "Vector3",
    "Vector3Converter",
    "default_registry",
]

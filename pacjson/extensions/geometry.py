"""
Vector, colour and pixel buffer types with their JSON converters.

Vectors and colours are written as single-line lists of floats; a pixel
buffer is an object holding its size and a flattened row-major pixel list.
"""

from dataclasses import dataclass

from ..core.values import (
    JsonFloat,
    JsonInt,
    JsonList,
    JsonObject,
    JsonValue,
    ObjectBuilder,
)
from ..mapping.converters import JsonConverter
from ..security.exceptions import TypeMismatch


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float


@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Color:
    """RGBA colour with components in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class PixelBuffer:
    """A width x height grid of colours stored row by row."""

    width: int
    height: int
    pixels: tuple[Color, ...]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid size {self.width}x{self.height}")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} pixels, got {len(self.pixels)}"
            )

    def get_pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]


def _float_list(values: tuple[float, ...]) -> JsonList:
    return JsonList(tuple(JsonFloat(float(v)) for v in values), separate_lines=False)


def _read_floats(value: JsonList, count: int, type_name: str) -> list[float]:
    if len(value) != count:
        raise TypeMismatch(
            f"Expected a list of length {count} for {type_name}, "
            f"found one of length {len(value)}"
        )
    floats = []
    for item in value:
        if not isinstance(item, JsonFloat):
            raise TypeMismatch(
                f"{type_name} components must be floats, found {type(item).__name__}"
            )
        floats.append(item.value)
    return floats


class Vector2Converter(JsonConverter[Vector2]):
    """``Vector2(x, y)`` <-> ``[x, y]``."""

    target_type = Vector2
    value_type = JsonList

    def to_json(self, obj: Vector2) -> JsonValue:
        return _float_list((obj.x, obj.y))

    def from_json(self, value: JsonList) -> Vector2:
        return Vector2(*_read_floats(value, 2, "Vector2"))


class Vector3Converter(JsonConverter[Vector3]):
    """``Vector3(x, y, z)`` <-> ``[x, y, z]``."""

    target_type = Vector3
    value_type = JsonList

    def to_json(self, obj: Vector3) -> JsonValue:
        return _float_list((obj.x, obj.y, obj.z))

    def from_json(self, value: JsonList) -> Vector3:
        return Vector3(*_read_floats(value, 3, "Vector3"))


class ColorConverter(JsonConverter[Color]):
    """``Color(r, g, b, a)`` <-> ``[r, g, b, a]``."""

    target_type = Color
    value_type = JsonList

    def to_json(self, obj: Color) -> JsonValue:
        return _float_list((obj.r, obj.g, obj.b, obj.a))

    def from_json(self, value: JsonList) -> Color:
        return Color(*_read_floats(value, 4, "Color"))


class PixelBufferConverter(JsonConverter[PixelBuffer]):
    """``PixelBuffer`` <-> ``{"width": w, "height": h, "pixels": [...]}``.

    Pixels are row-major ``[r, g, b, a]`` lists.
    """

    target_type = PixelBuffer
    value_type = JsonObject

    def __init__(self) -> None:
        self._colors = ColorConverter()

    def to_json(self, obj: PixelBuffer) -> JsonValue:
        return (
            ObjectBuilder()
            .add("width", JsonInt(obj.width))
            .add("height", JsonInt(obj.height))
            .add("pixels", JsonList(tuple(self._colors.to_json(p) for p in obj.pixels)))
            .build()
        )

    def from_json(self, value: JsonObject) -> PixelBuffer:
        width = self._read_size(value, "width")
        height = self._read_size(value, "height")

        pixels = value.get("pixels")
        if not isinstance(pixels, JsonList):
            raise TypeMismatch("PixelBuffer requires a 'pixels' list")
        if len(pixels) != width * height:
            raise TypeMismatch(
                f"PixelBuffer of size {width}x{height} needs {width * height} pixels, "
                f"found {len(pixels)}"
            )
        return PixelBuffer(
            width, height, tuple(self._colors.from_value(p) for p in pixels)
        )

    @staticmethod
    def _read_size(value: JsonObject, key: str) -> int:
        size = value.get(key)
        if not isinstance(size, JsonInt):
            raise TypeMismatch(f"PixelBuffer requires an integer {key!r}")
        if size.value < 0:
            raise TypeMismatch(f"PixelBuffer {key} cannot be negative: {size.value}")
        return size.value

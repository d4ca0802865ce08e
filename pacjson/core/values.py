"""
Immutable JSON value model.

A document is a tree of JsonValue nodes drawn from a closed set of variants:
JsonNull, JsonBool, JsonInt, JsonFloat, JsonString, JsonList and JsonObject.
Nodes are frozen once constructed, so a tree can never contain a cycle and
sharing a node between parents is never observable. Trees are built by the
parser, by direct construction, or incrementally with ListBuilder and
ObjectBuilder.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional, Union

from ..security.exceptions import DuplicateKeyError
from .constants import INT64_MAX, INT64_MIN


class JsonValue:
    """Base class of every JSON value variant."""

    __slots__ = ()

    kind = "value"

    def to_python(self) -> Any:
        """Convert this value to plain Python data."""
        raise NotImplementedError

    def same_data(self, other: "JsonValue", float_tolerance: float = 0.0) -> bool:
        """Structural comparison with a tolerance for Float nodes."""
        return have_same_data(self, other, float_tolerance)

    def to_json_string(self, pretty: bool = False) -> str:
        """Emit this value as JSON text."""
        from .emitter import emit  # pylint: disable=import-outside-toplevel

        return emit(self, pretty=pretty)

    def __str__(self) -> str:
        return self.to_json_string()


@dataclass(frozen=True)
class JsonNull(JsonValue):
    """The JSON null literal."""

    kind = "null"

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JsonBool(JsonValue):
    """A JSON boolean."""

    value: bool
    kind = "bool"

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(
                f"JsonBool requires a bool, got {type(self.value).__name__}"
            )

    def __bool__(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class JsonInt(JsonValue):
    """A JSON integer in the signed 64-bit range."""

    value: int
    kind = "int"

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"JsonInt requires an int, got {type(self.value).__name__}"
            )
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise OverflowError(f"{self.value} is outside the 64-bit integer range")

    def __int__(self) -> int:
        return self.value

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class JsonFloat(JsonValue):
    """A JSON double-precision number.

    The emitter always writes a fractional part so a JsonFloat never reads
    back as a JsonInt.
    """

    value: float
    kind = "float"

    def __post_init__(self) -> None:
        if not isinstance(self.value, float):
            raise TypeError(
                f"JsonFloat requires a float, got {type(self.value).__name__}"
            )

    def __float__(self) -> float:
        return self.value

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class JsonString(JsonValue):
    """A JSON string holding already-unescaped text."""

    value: str
    kind = "string"

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(
                f"JsonString requires a str, got {type(self.value).__name__}"
            )

    @staticmethod
    def maybe_null(value: Optional[str]) -> Union["JsonString", JsonNull]:
        """Wrap a string, mapping None to JsonNull."""
        return NULL if value is None else JsonString(value)

    def to_python(self) -> str:
        return self.value


def _check_value(value: Any) -> JsonValue:
    if not isinstance(value, JsonValue):
        raise TypeError(f"Expected a JsonValue, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class JsonList(JsonValue, Sequence):
    """An ordered, read-only sequence of values.

    ``separate_lines`` only affects pretty emission: when False the list is
    written on a single line. It takes no part in equality.
    """

    elements: tuple[JsonValue, ...] = ()
    separate_lines: bool = field(default=True, compare=False)
    kind = "list"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "elements", tuple(_check_value(v) for v in self.elements)
        )

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return JsonList(self.elements[index], self.separate_lines)
        return self.elements[index]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.elements)

    def __add__(self, other: "JsonList") -> "JsonList":
        if not isinstance(other, JsonList):
            return NotImplemented
        return JsonList(self.elements + other.elements, self.separate_lines)

    def __repr__(self) -> str:
        return f"JsonList({list(self.elements)!r})"

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.elements]


@dataclass(frozen=True, eq=False)
class JsonObject(JsonValue, Mapping):
    """An insertion-ordered, read-only mapping of unique string keys to values.

    Equality ignores key order.
    """

    entries: Mapping[str, JsonValue] = field(default_factory=dict)
    kind = "object"

    def __post_init__(self) -> None:
        pairs = self.entries
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        entries: dict[str, JsonValue] = {}
        for key, value in pairs:
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, got {type(key).__name__}")
            if key in entries:
                raise DuplicateKeyError(f"Duplicate key {key!r}")
            entries[key] = _check_value(value)
        object.__setattr__(self, "entries", MappingProxyType(entries))

    def __getitem__(self, key: str) -> JsonValue:
        return self.entries[key]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return dict(self.entries) == dict(other.entries)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __repr__(self) -> str:
        return f"JsonObject({dict(self.entries)!r})"

    @classmethod
    def concat(cls, *objects: "JsonObject") -> "JsonObject":
        """Combine objects in order; a key present in two of them is an error."""
        builder = ObjectBuilder()
        for obj in objects:
            for key, value in obj.items():
                builder.add(key, value)
        return builder.build()

    def append(self, *others: "JsonObject") -> "JsonObject":
        """Return a new object with the entries of ``others`` after these."""
        return JsonObject.concat(self, *others)

    def prepend(self, *others: "JsonObject") -> "JsonObject":
        """Return a new object with the entries of ``others`` before these."""
        return JsonObject.concat(*others, self)

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.entries.items()}


NULL = JsonNull()
TRUE = JsonBool(True)
FALSE = JsonBool(False)


class _Builder:
    """Shared single-use bookkeeping for builders."""

    def __init__(self) -> None:
        self._built = False

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError(f"{type(self).__name__} has already been built")


class ListBuilder(_Builder):
    """Incrementally collects list elements; not thread-safe while open."""

    def __init__(self, separate_lines: bool = True) -> None:
        super().__init__()
        self.separate_lines = separate_lines
        self._elements: list[JsonValue] = []

    def add(self, value: JsonValue) -> "ListBuilder":
        self._check_open()
        self._elements.append(_check_value(value))
        return self

    def extend(self, values: Iterable[JsonValue]) -> "ListBuilder":
        for value in values:
            self.add(value)
        return self

    def __len__(self) -> int:
        return len(self._elements)

    def build(self) -> JsonList:
        self._check_open()
        self._built = True
        return JsonList(tuple(self._elements), self.separate_lines)


class ObjectBuilder(_Builder):
    """Incrementally collects object entries; not thread-safe while open."""

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, JsonValue] = {}

    def add(self, key: str, value: JsonValue) -> "ObjectBuilder":
        """Add an entry. A repeated key raises DuplicateKeyError."""
        self._check_open()
        if not isinstance(key, str):
            raise TypeError(f"Object keys must be str, got {type(key).__name__}")
        if key in self._entries:
            raise DuplicateKeyError(f"Duplicate key {key!r}")
        self._entries[key] = _check_value(value)
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def build(self) -> JsonObject:
        self._check_open()
        self._built = True
        return JsonObject(self._entries)


def have_same_data(
    first: JsonValue, second: JsonValue, float_tolerance: float = 0.0
) -> bool:
    """Compare two value trees structurally.

    Float nodes match when they differ by at most ``float_tolerance``. Object
    key order is ignored. Int and Float nodes never match each other.
    """
    if float_tolerance < 0:
        raise ValueError(f"Cannot have negative float tolerance: {float_tolerance}")
    return _same(first, second, float_tolerance)


def _same(first: JsonValue, second: JsonValue, tolerance: float) -> bool:
    if type(first) is not type(second):
        return False
    if isinstance(first, JsonFloat) and isinstance(second, JsonFloat):
        if first.value == second.value:
            return True
        return abs(first.value - second.value) <= tolerance
    if isinstance(first, JsonList) and isinstance(second, JsonList):
        return len(first) == len(second) and all(
            _same(x, y, tolerance) for x, y in zip(first, second)
        )
    if isinstance(first, JsonObject) and isinstance(second, JsonObject):
        if len(first) != len(second):
            return False
        return all(
            key in second and _same(value, second[key], tolerance)
            for key, value in first.items()
        )
    return first == second


def from_python(data: Any) -> JsonValue:
    """Convert plain Python data (None, bool, int, float, str, list, tuple, dict)."""
    if isinstance(data, JsonValue):
        return data
    if data is None:
        return NULL
    if isinstance(data, bool):
        return JsonBool(data)
    if isinstance(data, int):
        return JsonInt(data)
    if isinstance(data, float):
        return JsonFloat(data)
    if isinstance(data, str):
        return JsonString(data)
    if isinstance(data, (list, tuple)):
        return JsonList(tuple(from_python(item) for item in data))
    if isinstance(data, dict):
        return JsonObject({str(k): from_python(v) for k, v in data.items()})
    raise TypeError(f"Cannot convert {type(data).__name__} to a JSON value")


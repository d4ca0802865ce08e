"""
Per-type descriptor tables and the constructor-bypassing instance builder.

A composite type is a dataclass or a class with annotated attributes. Its
descriptor lists the stored members in declaration order (base classes
first) with their resolved declared types. Properties are computed members
and are never part of a descriptor.
"""

import collections.abc
import dataclasses
import enum
import functools
import types
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union, get_args, get_origin, get_type_hints

from ..security.exceptions import UnsupportedShape

NoneType = type(None)

_NOT_COMPOSITE = (bool, int, float, str, bytes, list, tuple, dict, set, frozenset, type)


@dataclass(frozen=True)
class FieldDescriptor:
    """One stored member of a composite type."""

    name: str
    declared_type: Any


@dataclass(frozen=True)
class TypeDescriptor:
    """The stored members of a composite type, in declaration order."""

    cls: type
    fields: tuple[FieldDescriptor, ...]

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields)


def is_class(tp: Any) -> bool:
    """Whether ``tp`` is a plain class (not a parameterized generic)."""
    return isinstance(tp, type) and get_origin(tp) is None


def is_composite(tp: Any) -> bool:
    """Whether ``tp`` can be mapped member by member."""
    if not is_class(tp) or issubclass(tp, _NOT_COMPOSITE):
        return False
    if issubclass(tp, enum.Enum):
        return False
    if dataclasses.is_dataclass(tp):
        return True
    try:
        return bool(describe_type(tp).fields)
    except UnsupportedShape:
        # Annotated but unresolvable; describing it again reports the error
        return True


@functools.lru_cache(maxsize=None)
def describe_type(cls: type) -> TypeDescriptor:
    """Build (once per type) the descriptor table for a composite type."""
    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise UnsupportedShape(
            f"Cannot resolve the member annotations of {cls.__name__}: {exc}",
            suggestions=["Define the referenced types at module level"],
        ) from exc

    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    else:
        names = [
            name
            for name, hint in hints.items()
            if get_origin(hint) is not ClassVar
            and hint is not ClassVar
            and not name.startswith("__")
            and not isinstance(getattr(cls, name, None), property)
        ]

    fields = tuple(FieldDescriptor(name, hints.get(name, Any)) for name in names)
    return TypeDescriptor(cls, fields)


class InstanceBuilder:
    """Creates an instance of a composite type without running its constructor.

    The instance is allocated with ``cls.__new__`` and each member is assigned
    with ``object.__setattr__``, which also works for frozen dataclasses and
    classes using ``__slots__``.
    """

    def __init__(self, descriptor: TypeDescriptor):
        self.descriptor = descriptor
        self._values: dict[str, Any] = {}

    def set(self, name: str, value: Any) -> None:
        if name not in self.descriptor.field_names:
            raise KeyError(f"{self.descriptor.cls.__name__} has no member {name!r}")
        self._values[name] = value

    def missing(self) -> list[str]:
        return [f.name for f in self.descriptor.fields if f.name not in self._values]

    def build(self) -> Any:
        missing = self.missing()
        if missing:
            raise ValueError(
                f"Cannot build {self.descriptor.cls.__name__}: "
                f"no value for {', '.join(missing)}"
            )
        cls = self.descriptor.cls
        instance = cls.__new__(cls)
        for name, value in self._values.items():
            object.__setattr__(instance, name, value)
        return instance


def is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Split ``Optional[X]`` into ``(X, True)``; other types give ``(tp, False)``."""
    if tp is None or tp is NoneType:
        return NoneType, True
    if not is_union(tp):
        return tp, False
    args = [arg for arg in get_args(tp) if arg is not NoneType]
    nullable = len(args) != len(get_args(tp))
    if len(args) == 1:
        return args[0], nullable
    return Union[tuple(args)], nullable


def sequence_shape(tp: Any) -> Optional[tuple[type, Any]]:
    """Describe a list-like target type as ``(container, element types)``.

    The element part is a single type for homogeneous sequences or a tuple of
    types for a fixed-length ``tuple[X, Y]``. Returns None when ``tp`` is not
    list-like.
    """
    if tp is list:
        return list, Any
    if tp is tuple:
        return tuple, Any

    origin = get_origin(tp)
    args = get_args(tp)
    if origin is list:
        return list, args[0] if args else Any
    if origin in (collections.abc.Sequence, collections.abc.MutableSequence):
        return list, args[0] if args else Any
    if origin is tuple:
        if not args:
            return tuple, Any
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple, args[0]
        return tuple, tuple(args)
    return None


def referenced_classes(tp: Any) -> list[type]:
    """Classes a declared type refers to, looking through unions and sequences."""
    found: list[type] = []

    def visit(item: Any) -> None:
        if is_union(item):
            for arg in get_args(item):
                visit(arg)
            return
        shape = sequence_shape(item)
        if shape is not None:
            elements = shape[1]
            for element in elements if isinstance(elements, tuple) else (elements,):
                visit(element)
            return
        if is_class(item) and item not in found:
            found.append(item)

    visit(tp)
    return found


def type_name(tp: Any) -> str:
    return tp.__name__ if is_class(tp) else repr(tp)

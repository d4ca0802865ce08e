"""
Generic conversion between host objects and the JSON value model.

Serialization tries, in order: the self-describing capability, a registered
converter for the exact runtime type, then the shape of the value. Reading
tries a registered converter for the target type, the self-describing
capability, then dispatches on the value variant and the target type.

Composite objects are expanded member by member using descriptor tables.
While expanding, the mapper tracks which composite types are on the active
path; a member whose declared type refers back to one of them is rejected
with CircularTypeReference even when its current value is empty. Trees of a
single type therefore need a converter or the self-describing capability.
"""

import enum
import logging
from typing import Any, Optional

from ..core.values import (
    NULL,
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonList,
    JsonNull,
    JsonObject,
    JsonString,
    JsonValue,
    ObjectBuilder,
)
from ..core.constants import INT64_MAX, INT64_MIN
from ..security.exceptions import (
    CircularTypeReference,
    MappingError,
    MissingField,
    TypeMismatch,
    UnsupportedShape,
)
from ..utils.config import MapperConfig
from .converters import EMPTY_REGISTRY, ConverterRegistry, JsonConverter
from .descriptors import (
    NoneType,
    InstanceBuilder,
    TypeDescriptor,
    describe_type,
    is_class,
    is_composite,
    is_union,
    referenced_classes,
    sequence_shape,
    type_name,
    unwrap_optional,
)
from .interfaces import JsonSerializable

ROOT_PATH = "$"

_ENUM_SUGGESTION = "Register an EnumConverter for this enum type"
_RECURSIVE_SUGGESTION = (
    "Give the recursive type a converter or implement JsonSerializable"
)


class ObjectMapper:
    """Maps host objects to JsonValue trees and back."""

    def __init__(
        self,
        registry: Optional[ConverterRegistry] = None,
        config: Optional[MapperConfig] = None,
    ):
        self.registry = registry if registry is not None else EMPTY_REGISTRY
        self.config = config or MapperConfig()
        self.logger = self.config.logger or logging.getLogger(__name__)

    # Serialization

    def serialize(self, obj: Any) -> JsonValue:
        """Convert a host object to a JsonValue tree."""
        return self._to_json(obj, ROOT_PATH, [], frozenset())

    def _to_json(
        self, obj: Any, path: str, expanding: list[type], owned: frozenset[type]
    ) -> JsonValue:
        """Convert one value.

        ``expanding`` holds the composite types on the active path. ``owned``
        holds the types the enclosing member pushed for this value.
        """
        if isinstance(obj, JsonSerializable):
            return self._checked(obj.to_json(), type(obj), path)

        converter = self.registry.lookup(type(obj))
        if converter is not None:
            self.logger.debug(
                "Writing %s with %s", type_name(type(obj)), type(converter).__name__
            )
            return self._convert_to(converter, obj, path)

        if isinstance(obj, JsonValue):
            return obj
        if obj is None:
            return NULL
        if isinstance(obj, enum.Enum):
            raise UnsupportedShape(
                f"Enum {type(obj).__name__} has no registered converter",
                path,
                [_ENUM_SUGGESTION],
            )
        if isinstance(obj, bool):
            return JsonBool(obj)
        if isinstance(obj, int):
            if not INT64_MIN <= obj <= INT64_MAX:
                raise UnsupportedShape(
                    f"Integer {obj} is outside the 64-bit range", path
                )
            return JsonInt(int(obj))
        if isinstance(obj, float):
            return JsonFloat(float(obj))
        if isinstance(obj, str):
            return JsonString(str(obj))
        if isinstance(obj, (list, tuple)):
            return JsonList(
                tuple(
                    self._to_json(item, f"{path}[{index}]", expanding, owned)
                    for index, item in enumerate(obj)
                )
            )
        if is_composite(type(obj)):
            return self._serialize_composite(obj, path, expanding, owned)

        raise UnsupportedShape(
            f"Cannot map {type(obj).__name__} to JSON",
            path,
            ["Register a converter or implement JsonSerializable for this type"],
        )

    def _serialize_composite(
        self, obj: Any, path: str, expanding: list[type], owned: frozenset[type]
    ) -> JsonObject:
        cls = type(obj)
        self._require_structural(cls, path)

        if cls in expanding and cls not in owned:
            raise CircularTypeReference(
                f"{cls.__name__} is already being expanded on this path", path
            )
        # A subclass of the declared member type has not been pushed yet
        pushed = cls not in expanding
        if pushed:
            expanding.append(cls)
        try:
            builder = ObjectBuilder()
            for field in self._describe(cls, path).fields:
                member_path = f"{path}.{field.name}"
                try:
                    value = getattr(obj, field.name)
                except AttributeError:
                    raise MissingField(
                        f"{cls.__name__} instance has no value for "
                        f"member {field.name!r}",
                        member_path,
                    ) from None

                referenced = self._expanded_types(field.declared_type, value)
                for ref in referenced:
                    if ref in expanding:
                        raise CircularTypeReference(
                            f"Member {field.name!r} of {cls.__name__} refers back to "
                            f"{ref.__name__}, which is already being expanded",
                            member_path,
                            [_RECURSIVE_SUGGESTION],
                        )
                expanding.extend(referenced)
                try:
                    builder.add(
                        field.name,
                        self._to_json(
                            value, member_path, expanding, frozenset(referenced)
                        ),
                    )
                finally:
                    for _ in referenced:
                        expanding.pop()
            return builder.build()
        finally:
            if pushed:
                expanding.pop()

    def _expanded_types(self, declared: Any, value: Any) -> list[type]:
        """Composite types that structural mapping will expand for one member."""
        candidates = referenced_classes(declared)
        if declared is Any or declared is object:
            candidates = [type(value)]
        return [
            cls
            for cls in candidates
            if cls not in self.registry
            and not issubclass(cls, JsonSerializable)
            and is_composite(cls)
        ]

    # Deserialization

    def deserialize(self, value: JsonValue, target_type: Any) -> Any:
        """Convert a JsonValue tree to an instance of ``target_type``."""
        if not isinstance(value, JsonValue):
            raise TypeError(f"Expected a JsonValue, got {type(value).__name__}")
        return self._from_json(value, target_type, ROOT_PATH)

    def _from_json(self, value: JsonValue, target: Any, path: str) -> Any:
        converter = self.registry.lookup(target) if is_class(target) else None
        if converter is not None:
            self.logger.debug(
                "Reading %s with %s", type_name(target), type(converter).__name__
            )
            return self._convert_from(converter, value, path)

        if target is Any or target is object:
            return value.to_python()
        if is_class(target) and issubclass(target, JsonValue):
            if not isinstance(value, target):
                raise self._mismatch(value, target, path)
            return value
        if is_class(target) and issubclass(target, JsonSerializable):
            try:
                return target.from_json(value)
            except MappingError as exc:
                raise self._with_path(exc, path) from exc

        inner, nullable = unwrap_optional(target)
        if nullable:
            if isinstance(value, JsonNull):
                return None
            if inner is NoneType:
                raise self._mismatch(value, target, path)
            return self._from_json(value, inner, path)

        if is_union(target):
            raise UnsupportedShape(f"Cannot read a value as union {target!r}", path)
        if isinstance(value, JsonNull):
            raise TypeMismatch(f"null is not a valid {type_name(target)}", path)
        if is_class(target) and issubclass(target, enum.Enum):
            raise UnsupportedShape(
                f"Enum {target.__name__} has no registered converter",
                path,
                [_ENUM_SUGGESTION],
            )

        if isinstance(value, JsonBool):
            return self._primitive(value, target, bool, path)
        if isinstance(value, JsonInt):
            return self._primitive(value, target, int, path)
        if isinstance(value, JsonFloat):
            return self._primitive(value, target, float, path)
        if isinstance(value, JsonString):
            return self._primitive(value, target, str, path)
        if isinstance(value, JsonList):
            return self._deserialize_list(value, target, path)
        if isinstance(value, JsonObject):
            return self._deserialize_composite(value, target, path)

        raise UnsupportedShape(f"Unknown JSON value type {type(value).__name__}", path)

    def _primitive(self, value: Any, target: Any, expected: type, path: str) -> Any:
        # Exact type only: no bool/int or int/float coercion
        if target is not expected:
            raise self._mismatch(value, target, path)
        return value.value

    def _deserialize_list(self, value: JsonList, target: Any, path: str) -> Any:
        shape = sequence_shape(target)
        if shape is None:
            raise self._mismatch(value, target, path)
        container, elements = shape

        if isinstance(elements, tuple):
            if len(elements) != len(value):
                raise TypeMismatch(
                    f"Expected a list of {len(elements)} items for {target!r}, "
                    f"got {len(value)}",
                    path,
                )
            items = [
                self._from_json(item, element, f"{path}[{index}]")
                for index, (item, element) in enumerate(zip(value, elements))
            ]
        else:
            items = [
                self._from_json(item, elements, f"{path}[{index}]")
                for index, item in enumerate(value)
            ]
        return container(items)

    def _deserialize_composite(self, value: JsonObject, target: Any, path: str) -> Any:
        if not is_composite(target):
            raise self._mismatch(value, target, path)
        self._require_structural(target, path)

        descriptor = self._describe(target, path)
        builder = InstanceBuilder(descriptor)
        for field in descriptor.fields:
            if field.name not in value:
                raise MissingField(
                    f"Missing key {field.name!r} for {target.__name__}", path
                )
            member_path = f"{path}.{field.name}"
            builder.set(
                field.name,
                self._from_json(value[field.name], field.declared_type, member_path),
            )

        unused = [key for key in value if key not in descriptor.field_names]
        if unused and self.config.warn_on_unused_keys:
            self.logger.warning(
                "Unused keys %s while reading %s at %s",
                ", ".join(repr(key) for key in unused),
                target.__name__,
                path,
            )
        return builder.build()

    # Helpers

    def _require_structural(self, cls: type, path: str) -> None:
        if not self.config.structural_mapping:
            raise UnsupportedShape(
                f"{cls.__name__} has no converter and structural mapping is disabled",
                path,
                ["Register a converter or implement JsonSerializable for this type"],
            )

    def _describe(self, cls: type, path: str) -> TypeDescriptor:
        try:
            return describe_type(cls)
        except MappingError as exc:
            raise self._with_path(exc, path) from exc

    def _convert_to(
        self, converter: JsonConverter[Any], obj: Any, path: str
    ) -> JsonValue:
        try:
            result = converter.to_json(obj)
        except MappingError as exc:
            raise self._with_path(exc, path) from exc
        return self._checked(result, type(obj), path)

    def _convert_from(
        self, converter: JsonConverter[Any], value: JsonValue, path: str
    ) -> Any:
        try:
            return converter.from_value(value)
        except MappingError as exc:
            raise self._with_path(exc, path) from exc

    @staticmethod
    def _checked(result: Any, source: type, path: str) -> JsonValue:
        if not isinstance(result, JsonValue):
            raise UnsupportedShape(
                f"Conversion of {source.__name__} produced {type(result).__name__}, "
                "not a JsonValue",
                path,
            )
        return result

    @staticmethod
    def _with_path(exc: MappingError, path: str) -> MappingError:
        if exc.path is not None:
            return exc
        return type(exc)(exc.message, path, exc.suggestions)

    @staticmethod
    def _mismatch(value: JsonValue, target: Any, path: str) -> TypeMismatch:
        return TypeMismatch(
            f"Cannot read {type(value).__name__} as {type_name(target)}", path
        )


def serialize(
    obj: Any,
    registry: Optional[ConverterRegistry] = None,
    config: Optional[MapperConfig] = None,
) -> JsonValue:
    """
    Convert a host object to a JsonValue tree.

    Raises:
        CircularTypeReference: If a member's type refers back to a type being expanded
        UnsupportedShape: If some value has no mapping (e.g. an unregistered enum)
    """
    return ObjectMapper(registry, config).serialize(obj)


def deserialize(
    value: JsonValue,
    target_type: Any,
    registry: Optional[ConverterRegistry] = None,
    config: Optional[MapperConfig] = None,
) -> Any:
    """
    Convert a JsonValue tree to an instance of ``target_type``.

    Unused object keys are logged as warnings and otherwise ignored.

    Raises:
        TypeMismatch: If a value variant does not fit the requested type
        MissingField: If an object lacks a key the target type needs
        UnsupportedShape: If the target type has no mapping
    """
    return ObjectMapper(registry, config).deserialize(value, target_type)

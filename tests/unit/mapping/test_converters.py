"""
Test cases for converters and the converter registry.
"""

import enum
import unittest

from pacjson.core.values import JsonFloat, JsonInt, JsonList, JsonString
from pacjson.extensions.geometry import Vector2, Vector2Converter, Vector3Converter
from pacjson.mapping.converters import (
    EMPTY_REGISTRY,
    ConverterRegistry,
    EnumConverter,
    JsonConverter,
)
from pacjson.security.exceptions import DuplicateConverterError, TypeMismatch


class BlendMode(enum.Enum):
    NORMAL = 1
    MULTIPLY = 2
    SCREEN = 3


class Tool(enum.Enum):
    PEN = "pen"


class ScaledVector(Vector2):
    pass


class TestEnumConverter(unittest.TestCase):
    """Test enum members written by name."""

    def setUp(self):
        self.converter = EnumConverter(BlendMode)

    def test_target_type(self):
        self.assertIs(self.converter.target_type, BlendMode)
        self.assertIs(self.converter.value_type, JsonString)

    def test_to_json_uses_member_name(self):
        self.assertEqual(self.converter.to_json(BlendMode.MULTIPLY), JsonString("MULTIPLY"))

    def test_from_json(self):
        self.assertIs(self.converter.from_json(JsonString("SCREEN")), BlendMode.SCREEN)

    def test_unknown_name(self):
        with self.assertRaises(TypeMismatch) as cm:
            self.converter.from_json(JsonString("OVERLAY"))
        self.assertIn("'OVERLAY' is not a member of BlendMode", str(cm.exception))

    def test_member_of_other_enum(self):
        with self.assertRaises(TypeMismatch):
            self.converter.to_json(Tool.PEN)

    def test_wrong_variant(self):
        """Test that from_value checks the value variant first."""
        with self.assertRaises(TypeMismatch) as cm:
            self.converter.from_value(JsonInt(2))
        self.assertIn("expects JsonString, got JsonInt", str(cm.exception))

    def test_requires_enum_type(self):
        with self.assertRaises(TypeError):
            EnumConverter(int)


class TestJsonConverter(unittest.TestCase):
    """Test the converter base class."""

    def test_is_abstract(self):
        with self.assertRaises(TypeError):
            JsonConverter()

    def test_from_value_delegates(self):
        value = JsonList((JsonFloat(1.0), JsonFloat(2.0)))
        self.assertEqual(Vector2Converter().from_value(value), Vector2(1.0, 2.0))


class TestConverterRegistry(unittest.TestCase):
    """Test registry construction and lookup."""

    def test_lookup_by_target_type(self):
        converter = Vector2Converter()
        registry = ConverterRegistry([converter])
        self.assertIs(registry.lookup(Vector2), converter)
        self.assertIn(Vector2, registry)
        self.assertEqual(len(registry), 1)

    def test_lookup_is_exact(self):
        """Test that subclasses are not matched by their base's converter."""
        registry = ConverterRegistry([Vector2Converter()])
        self.assertIsNone(registry.lookup(ScaledVector))

    def test_explicit_pairs(self):
        converter = Vector2Converter()
        registry = ConverterRegistry([(ScaledVector, converter)])
        self.assertIs(registry.lookup(ScaledVector), converter)
        self.assertNotIn(Vector2, registry)

    def test_duplicate_rejected(self):
        with self.assertRaises(DuplicateConverterError):
            ConverterRegistry([Vector2Converter(), Vector2Converter()])

    def test_non_converter_rejected(self):
        with self.assertRaises(TypeError):
            ConverterRegistry([(Vector2, object())])

    def test_extended_returns_new_registry(self):
        base = ConverterRegistry([Vector2Converter()])
        extended = base.extended(EnumConverter(BlendMode))

        self.assertEqual(len(base), 1)
        self.assertEqual(set(extended), {Vector2, BlendMode})

    def test_extended_rejects_duplicate(self):
        base = ConverterRegistry([Vector2Converter()])
        with self.assertRaises(DuplicateConverterError):
            base.extended(Vector2Converter())

    def test_without(self):
        registry = ConverterRegistry([Vector2Converter(), Vector3Converter()])
        smaller = registry.without(Vector2)
        self.assertNotIn(Vector2, smaller)
        self.assertIn(Vector2, registry)
        self.assertEqual(len(smaller), 1)

    def test_empty_and_repr(self):
        self.assertEqual(len(EMPTY_REGISTRY), 0)
        self.assertIsNone(EMPTY_REGISTRY.lookup(Vector2))
        self.assertEqual(
            repr(ConverterRegistry([Vector2Converter()])), "ConverterRegistry([Vector2])"
        )


if __name__ == "__main__":
    unittest.main()

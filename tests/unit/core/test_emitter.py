"""
Test cases for the JSON text emitter.

Tests focus on compact and tab-indented layout, float formatting and
string escaping.
"""

import math
import unittest

from pacjson.core.emitter import emit, escape_string, format_float
from pacjson.core.values import (
    NULL,
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonList,
    JsonObject,
    JsonString,
    from_python,
)
from pacjson.security.exceptions import EmitError


class TestScalars(unittest.TestCase):
    """Test emission of scalar values."""

    def test_literals(self):
        """Test null, booleans and integers."""
        self.assertEqual(emit(NULL), "null")
        self.assertEqual(emit(JsonBool(True)), "true")
        self.assertEqual(emit(JsonBool(False)), "false")
        self.assertEqual(emit(JsonInt(-42)), "-42")

    def test_integral_float_keeps_fraction(self):
        """Test that integral floats are written with a trailing .0."""
        self.assertEqual(emit(JsonFloat(4.0)), "4.0")
        self.assertEqual(emit(JsonFloat(-0.0)), "-0.0")
        self.assertEqual(emit(JsonFloat(2.5)), "2.5")

    def test_exponent_float_keeps_fraction(self):
        """Test that a fraction is inserted before any exponent."""
        self.assertEqual(format_float(1e30), "1.0e+30")
        self.assertEqual(format_float(1e-7), "1.0e-07")
        self.assertEqual(format_float(1.5e-7), "1.5e-07")

    def test_non_finite_rejected(self):
        """Test that NaN and infinity cannot be emitted."""
        for value in (math.nan, math.inf, -math.inf):
            with self.subTest(value=value):
                with self.assertRaises(EmitError):
                    emit(JsonList((JsonFloat(value),)))


class TestStringEscaping(unittest.TestCase):
    """Test string quoting and escaping."""

    def test_short_escapes(self):
        """Test characters with a short escape form."""
        self.assertEqual(escape_string('a"b'), '"a\\"b"')
        self.assertEqual(escape_string("a\\b"), '"a\\\\b"')
        self.assertEqual(escape_string("a/b"), '"a\\/b"')
        self.assertEqual(escape_string("\b\f\n\r\t"), '"\\b\\f\\n\\r\\t"')

    def test_control_characters(self):
        """Test other control characters use four-digit escapes."""
        self.assertEqual(escape_string("\0"), '"\\u0000"')
        self.assertEqual(escape_string("\x7f"), '"\\u007F"')

    def test_non_ascii(self):
        """Test non-ASCII characters use uppercase hex escapes."""
        self.assertEqual(escape_string("\u03b5"), '"\\u03B5"')

    def test_astral_plane(self):
        """Test characters above U+FFFF become a surrogate pair."""
        self.assertEqual(escape_string("\U0001F600"), '"\\uD83D\\uDE00"')

    def test_keys_are_escaped(self):
        """Test that object keys use the same escaping as values."""
        value = JsonObject({'say "hi"': NULL})
        self.assertEqual(emit(value), '{"say \\"hi\\"": null}')


class TestCompactLayout(unittest.TestCase):
    """Test single-line output."""

    def test_list_and_object(self):
        """Test item and key separators."""
        value = from_python({"a": [1, 2.0, "x"], "b": None})
        self.assertEqual(emit(value), '{"a": [1, 2.0, "x"], "b": null}')

    def test_empty_containers(self):
        """Test empty containers in compact mode."""
        self.assertEqual(emit(JsonList()), "[]")
        self.assertEqual(emit(JsonObject()), "{}")


class TestPrettyLayout(unittest.TestCase):
    """Test tab-indented output."""

    def test_nested_layout(self):
        """Test one item per line, one tab per level."""
        value = from_python({"a": [1, 2], "b": {"c": True}})
        expected = (
            "{\n"
            '\t"a": [\n'
            "\t\t1,\n"
            "\t\t2\n"
            "\t],\n"
            '\t"b": {\n'
            '\t\t"c": true\n'
            "\t}\n"
            "}"
        )
        self.assertEqual(emit(value, pretty=True), expected)

    def test_empty_containers(self):
        """Test empty containers in pretty mode."""
        self.assertEqual(emit(JsonList(), pretty=True), "[ ]")
        self.assertEqual(emit(JsonObject(), pretty=True), "{ }")
        self.assertEqual(
            emit(JsonObject({"a": JsonList()}), pretty=True), '{\n\t"a": [ ]\n}'
        )

    def test_single_line_list(self):
        """Test that a list can opt out of one-item-per-line layout."""
        vector = JsonList((JsonFloat(1.0), JsonFloat(2.0)), separate_lines=False)
        value = JsonObject({"position": vector})
        self.assertEqual(emit(value, pretty=True), '{\n\t"position": [1.0, 2.0]\n}')

    def test_single_line_list_nests_compactly(self):
        """Test that containers inside a single-line list stay on its line."""
        items = (
            from_python([1, [2]]), from_python({"a": 1}), JsonList(), JsonObject()
        )
        value = JsonObject({"m": JsonList(items, separate_lines=False)})
        self.assertEqual(
            emit(value, pretty=True), '{\n\t"m": [[1, [2]], {"a": 1}, [], {}]\n}'
        )

    def test_scalars_unchanged(self):
        """Test that scalars look the same in both modes."""
        self.assertEqual(emit(JsonString("x"), pretty=True), '"x"')

    def test_str_uses_compact_form(self):
        """Test str() on a value."""
        self.assertEqual(str(from_python([1, [2]])), "[1, [2]]")


if __name__ == "__main__":
    unittest.main()

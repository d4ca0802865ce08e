"""
Test cases for semantic version numbers.
"""

import unittest

from pacjson.core.values import JsonInt, JsonString
from pacjson.extensions.version import SemanticVersion, SemanticVersionConverter
from pacjson.security.exceptions import TypeMismatch


class TestSemanticVersion(unittest.TestCase):
    """Test version values."""

    def test_str(self):
        self.assertEqual(str(SemanticVersion(1, 4, 3)), "1.4.3")

    def test_ordering(self):
        self.assertLess(SemanticVersion(1, 9, 9), SemanticVersion(2, 0, 0))
        self.assertLess(SemanticVersion(1, 2, 3), SemanticVersion(1, 2, 10))
        self.assertEqual(SemanticVersion(1, 0, 0), SemanticVersion(1, 0, 0))

    def test_negative_rejected(self):
        with self.assertRaises(ValueError):
            SemanticVersion(1, -1, 0)

    def test_next(self):
        version = SemanticVersion(1, 2, 3)
        self.assertEqual(version.next_major(), SemanticVersion(2, 0, 0))
        self.assertEqual(version.next_minor(), SemanticVersion(1, 3, 0))
        self.assertEqual(version.next_patch(), SemanticVersion(1, 2, 4))

    def test_difference(self):
        """Test that subtraction reports the most significant differing part."""
        self.assertEqual(
            SemanticVersion(3, 1, 0) - SemanticVersion(1, 5, 2), SemanticVersion(2, 0, 0)
        )
        self.assertEqual(
            SemanticVersion(1, 1, 0) - SemanticVersion(1, 4, 2), SemanticVersion(0, 3, 0)
        )
        self.assertEqual(
            SemanticVersion(1, 1, 7) - SemanticVersion(1, 1, 2), SemanticVersion(0, 0, 5)
        )


class TestParse(unittest.TestCase):
    """Test reading "major.minor.patch" text."""

    def test_valid(self):
        self.assertEqual(SemanticVersion.parse("10.0.2"), SemanticVersion(10, 0, 2))

    def test_invalid(self):
        for text in ("", "1.2", "1.2.3.4", "1..3", "1.a.3", "1.-2.3", "1.2.\u0663"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    SemanticVersion.parse(text)

    def test_messages(self):
        with self.assertRaises(ValueError) as cm:
            SemanticVersion.parse("1.2")
        self.assertIn("1 dots instead of 2", str(cm.exception))

        with self.assertRaises(ValueError) as cm:
            SemanticVersion.parse("1..3")
        self.assertIn("minor was empty", str(cm.exception))


class TestSemanticVersionConverter(unittest.TestCase):
    """Test versions written as strings."""

    def setUp(self):
        self.converter = SemanticVersionConverter()

    def test_round_trip(self):
        version = SemanticVersion(0, 7, 12)
        self.assertEqual(self.converter.to_json(version), JsonString("0.7.12"))
        self.assertEqual(self.converter.from_value(JsonString("0.7.12")), version)

    def test_malformed_string(self):
        with self.assertRaises(TypeMismatch) as cm:
            self.converter.from_value(JsonString("1.x.0"))
        self.assertIn("Minor must be a non-negative integer", str(cm.exception))

    def test_wrong_variant(self):
        with self.assertRaises(TypeMismatch):
            self.converter.from_value(JsonInt(1))


if __name__ == "__main__":
    unittest.main()

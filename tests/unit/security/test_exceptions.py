"""
Test cases for the exception hierarchy and error reporting.

Tests focus on message formatting, context excerpts and suggestions.
"""

import unittest

from pacjson.core.scanner import Position
from pacjson.security.exceptions import (
    CircularTypeReference,
    DuplicateConverterError,
    DuplicateKeyError,
    EmitError,
    ErrorContext,
    ErrorReporter,
    ErrorSuggestionEngine,
    MappingError,
    MissingField,
    NumericOverflow,
    NumericUnderflow,
    PacJsonError,
    ParseError,
    SecurityError,
    TypeMismatch,
    UnsupportedShape,
)


class TestHierarchy(unittest.TestCase):
    """Test that every error shares the common base."""

    def test_everything_is_a_pacjson_error(self):
        for error_class in (
            ParseError,
            NumericOverflow,
            NumericUnderflow,
            SecurityError,
            EmitError,
            TypeMismatch,
            MissingField,
            CircularTypeReference,
            UnsupportedShape,
            DuplicateKeyError,
            DuplicateConverterError,
        ):
            with self.subTest(error_class=error_class.__name__):
                self.assertTrue(issubclass(error_class, PacJsonError))

    def test_numeric_errors_are_parse_errors(self):
        self.assertTrue(issubclass(NumericOverflow, ParseError))
        self.assertTrue(issubclass(NumericUnderflow, ParseError))

    def test_duplicate_errors_are_value_errors(self):
        self.assertTrue(issubclass(DuplicateKeyError, ValueError))
        self.assertTrue(issubclass(DuplicateConverterError, ValueError))


class TestPacJsonError(unittest.TestCase):
    """Test base error message formatting."""

    def test_message_only(self):
        """Test an error with no position or context."""
        error = PacJsonError("Something failed")
        self.assertEqual(str(error), "Something failed")
        self.assertEqual(error.message, "Something failed")
        self.assertIsNone(error.position)
        self.assertEqual(error.suggestions, [])

    def test_position_appended_to_first_line(self):
        """Test that the position goes after the first line of the message."""
        error = PacJsonError("Bad value\n  detail", position=Position(3, 7))
        lines = str(error).split("\n")
        self.assertEqual(lines[0], "Bad value at line 3, column 7")
        self.assertEqual(lines[1], "  detail")

    def test_context_and_suggestions(self):
        """Test the context excerpt and suggestion list."""
        context = ErrorContext(
            text="[1, 2,]",
            position=Position(1, 7),
            context_before="[1, 2,",
            context_after="]",
            error_char="]",
            line_text="[1, 2,]",
            column_indicator="      ^",
        )
        error = PacJsonError(
            "Trailing comma",
            position=Position(1, 7),
            context=context,
            suggestions=["Remove the comma"],
        )
        message = str(error)
        self.assertIn("Context:\n  [1, 2,]\n        ^", message)
        self.assertIn("Suggestions:\n  - Remove the comma", message)


class TestMappingError(unittest.TestCase):
    """Test member path reporting."""

    def test_path_in_message(self):
        error = TypeMismatch("Expected a float", "$.layers[2].opacity")
        self.assertEqual(error.path, "$.layers[2].opacity")
        self.assertIn("(at $.layers[2].opacity)", str(error))
        self.assertIsInstance(error, MappingError)

    def test_no_path(self):
        error = MissingField("Missing key 'name'")
        self.assertIsNone(error.path)
        self.assertEqual(str(error), "Missing key 'name'")


class TestErrorReporter(unittest.TestCase):
    """Test ErrorReporter context building."""

    def test_parse_error_context(self):
        """Test the excerpt and caret for a multi-line input."""
        reporter = ErrorReporter('{\n  "a": tru\n}')
        error = reporter.create_parse_error("Invalid value", Position(2, 8))

        self.assertIsInstance(error, ParseError)
        self.assertEqual(error.context.line_text, '  "a": tru')
        self.assertEqual(error.context.column_indicator, "       ^")
        self.assertEqual(error.context.error_char, "t")
        self.assertEqual(error.context.context_before, '  "a": ')

    def test_error_class(self):
        """Test creating a ParseError subclass."""
        reporter = ErrorReporter("1e400")
        error = reporter.create_parse_error(
            "Too large", Position(1, 1), error_class=NumericOverflow
        )
        self.assertIsInstance(error, NumericOverflow)

    def test_position_past_end_of_line(self):
        """Test a caret placed just after the last character."""
        reporter = ErrorReporter("[1, 2")
        error = reporter.create_parse_error("Unterminated list", Position(1, 6))
        self.assertEqual(error.context.error_char, "")
        self.assertEqual(error.context.column_indicator, "     ^")

    def test_long_line_is_trimmed(self):
        """Test that the excerpt is limited around the error column."""
        text = "x" * 200
        reporter = ErrorReporter(text, max_context=20)
        error = reporter.create_parse_error("Bad", Position(1, 100))
        self.assertEqual(len(error.context.line_text), 20)
        self.assertEqual(error.context.column_indicator, " " * 10 + "^")

    def test_security_error(self):
        """Test security errors with and without a position."""
        reporter = ErrorReporter("[[[")
        without = reporter.create_security_error("Too deep")
        self.assertIsNone(without.context)

        with_position = reporter.create_security_error("Too deep", Position(1, 3))
        self.assertIsInstance(with_position, SecurityError)
        self.assertEqual(with_position.context.error_char, "[")


class TestErrorSuggestionEngine(unittest.TestCase):
    """Test hints for common mistakes."""

    def test_unexpected_token(self):
        suggest = ErrorSuggestionEngine.suggest_for_unexpected_token
        self.assertIn("ended early", suggest("")[0])
        self.assertIn("double quotes", suggest("'")[0])
        self.assertTrue(any("comma" in s for s in suggest('"')))
        self.assertIn("trailing comma", suggest("]")[0])
        self.assertIn("'@'", suggest("@")[0])

    def test_unclosed_structure(self):
        suggest = ErrorSuggestionEngine.suggest_for_unclosed_structure
        self.assertIn("'}'", suggest("object")[0])
        self.assertIn("']'", suggest("array")[0])
        self.assertIn("'\"'", suggest("string")[0])

    def test_invalid_value(self):
        suggest = ErrorSuggestionEngine.suggest_for_invalid_value
        self.assertEqual(suggest("True"), ["Literals are lowercase: use 'true'"])
        self.assertEqual(suggest("None"), ["Use 'null' for an absent value"])
        self.assertIn("NaN", suggest("NaN")[0])
        self.assertEqual(suggest("banana"), [])


if __name__ == "__main__":
    unittest.main()

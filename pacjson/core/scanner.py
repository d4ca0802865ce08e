"""
Character cursor over JSON text.

The parser backtracks between value variants, so the cursor is a plain
index that can be saved and restored. Line and column numbers are only
computed when an error needs them.
"""

from bisect import bisect_right
from dataclasses import dataclass


@dataclass
class Position:
    """Position in source text (line and column, both 1-based)."""

    line: int
    column: int


class Scanner:
    """Cursor with one-character lookahead over an input string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self._line_starts: list[int] = []

    def peek(self, offset: int = 0) -> str:
        """Peek at the character at the given offset without consuming it."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def advance(self, count: int = 1) -> str:
        """Consume ``count`` characters and return them."""
        consumed = self.text[self.pos : self.pos + count]
        self.pos = min(self.pos + count, len(self.text))
        return consumed

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def startswith(self, literal: str) -> bool:
        return self.text.startswith(literal, self.pos)

    def skip_whitespace(self) -> None:
        """Skip any characters for which str.isspace() holds."""
        text = self.text
        pos = self.pos
        while pos < len(text) and text[pos].isspace():
            pos += 1
        self.pos = pos

    def position_at(self, index: int) -> Position:
        """Get the line and column of an arbitrary index."""
        if not self._line_starts:
            self._line_starts = [0]
            self._line_starts.extend(
                i + 1 for i, char in enumerate(self.text) if char == "\n"
            )
        line = bisect_right(self._line_starts, index)
        return Position(line, index - self._line_starts[line - 1] + 1)

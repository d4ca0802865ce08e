"""
Semantic version numbers, written as ``"major.minor.patch"`` strings.

Documents store their format version this way; callers read it first and
choose how to deserialize the rest of the document.
"""

from dataclasses import dataclass

from ..core.values import JsonString, JsonValue
from ..mapping.converters import JsonConverter
from ..security.exceptions import TypeMismatch

_PARTS = ("major", "minor", "patch")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A non-negative ``major.minor.patch`` version, ordered by significance."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in _PARTS:
            if getattr(self, name) < 0:
                raise ValueError(
                    f"{name.capitalize()} number must be non-negative, "
                    f"got {getattr(self, name)}"
                )

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __sub__(self, other: "SemanticVersion") -> "SemanticVersion":
        """Distance in the most significant part where the versions differ."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        if self.major != other.major:
            return SemanticVersion(abs(self.major - other.major), 0, 0)
        if self.minor != other.minor:
            return SemanticVersion(0, abs(self.minor - other.minor), 0)
        return SemanticVersion(0, 0, abs(self.patch - other.patch))

    def next_major(self) -> "SemanticVersion":
        return SemanticVersion(self.major + 1, 0, 0)

    def next_minor(self) -> "SemanticVersion":
        return SemanticVersion(self.major, self.minor + 1, 0)

    def next_patch(self) -> "SemanticVersion":
        return SemanticVersion(self.major, self.minor, self.patch + 1)

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        """Parse ``"major.minor.patch"``; raises ValueError on any other form."""
        if not text:
            raise ValueError('Expected "major.minor.patch", found an empty string')
        numbers = text.split(".")
        if len(numbers) != 3:
            raise ValueError(
                f'Expected "major.minor.patch", found {len(numbers) - 1} dots '
                "instead of 2"
            )
        parsed = []
        for name, number in zip(_PARTS, numbers):
            if not number:
                raise ValueError(f'Expected "major.minor.patch", but {name} was empty')
            if not (number.isascii() and number.isdigit()):
                raise ValueError(
                    f"{name.capitalize()} must be a non-negative integer: {number!r}"
                )
            parsed.append(int(number))
        return cls(*parsed)


class SemanticVersionConverter(JsonConverter[SemanticVersion]):
    """``SemanticVersion(1, 4, 3)`` <-> ``"1.4.3"``."""

    target_type = SemanticVersion
    value_type = JsonString

    def to_json(self, obj: SemanticVersion) -> JsonValue:
        return JsonString(str(obj))

    def from_json(self, value: JsonString) -> SemanticVersion:
        try:
            return SemanticVersion.parse(value.value)
        except ValueError as exc:
            raise TypeMismatch(str(exc)) from exc

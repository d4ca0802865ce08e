"""
Object mapping demonstration for pacjson.
"""

import enum
from dataclasses import dataclass
from typing import Optional

import pacjson
from pacjson import CircularTypeReference, EnumConverter, MappingError
from pacjson.extensions import Color, SemanticVersion, Vector2, default_registry


class BlendMode(enum.Enum):
    NORMAL = 1
    MULTIPLY = 2


@dataclass
class Layer:
    name: str
    offset: Vector2
    tint: Optional[Color]
    blend: BlendMode


@dataclass
class Document:
    version: SemanticVersion
    layers: list[Layer]


@dataclass
class Group:
    name: str
    children: list["Group"]


def main():
    print("pacjson - Object Mapping Demo")
    print("=" * 40)

    registry = default_registry().extended(EnumConverter(BlendMode))
    document = Document(
        SemanticVersion(1, 0, 0),
        [
            Layer("base", Vector2(0.0, 0.0), None, BlendMode.NORMAL),
            Layer(
                "shadow",
                Vector2(1.0, 1.0),
                Color(0.0, 0.0, 0.0, 0.5),
                BlendMode.MULTIPLY,
            ),
        ],
    )

    print("\n1. Writing a document")
    text = pacjson.dumps(document, registry, pretty=True)
    print(text)

    print("\n2. Reading it back")
    restored = pacjson.loads(text, Document, registry)
    print(f"Equal to original: {restored == document}")

    print("\n3. Without converters, value types map field by field")
    print(pacjson.dumps(Vector2(1.0, 2.0)))

    print("\n4. Recursive types are rejected")
    try:
        pacjson.dumps(Group("root", []))
    except CircularTypeReference as e:
        print(f"Error: {e}")

    print("\n5. Errors point at the failing member")
    try:
        pacjson.loads('{"version": "1.0", "layers": []}', Document, registry)
    except MappingError as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()

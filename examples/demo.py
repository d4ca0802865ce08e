"""
pacjson demonstration script.
"""

import pacjson


def main():
    print("pacjson - Value Model Demo")
    print("=" * 40)

    examples = [
        ('{"size": [16, 16], "scale": 4.0}', "Integers and floats stay distinct"),
        ('"tab\\there \\u00e9 \\ud83d\\ude00"', "Escape sequences"),
        ('"bell \\a vertical tab \\v nul \\0"', "Extra escapes"),
        ("[1.0e3, 1e3, -0.5, 12.]", "Number forms"),
        ('{"frames": [], "meta": {}}', "Empty containers"),
    ]

    for i, (json_str, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str}")
        try:
            value = pacjson.parse(json_str)
            print(f"Value:  {value!r}")
            print(f"Output: {pacjson.emit(value)}")
        except pacjson.ParseError as e:
            print(f"Error:  {e}")

    print(f"\n{len(examples) + 1}. Pretty output")
    value = pacjson.from_python(
        {"name": "walk cycle", "frames": [0, 1, 2], "loop": True, "tags": []}
    )
    print(pacjson.emit(value, pretty=True))

    print(f"\n{len(examples) + 2}. Building values")
    builder = pacjson.ObjectBuilder()
    builder.add("width", pacjson.JsonInt(32)).add("height", pacjson.JsonInt(32))
    size = builder.build()
    print(size.append(pacjson.JsonObject({"depth": pacjson.JsonInt(8)})))


if __name__ == "__main__":
    main()

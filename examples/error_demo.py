"""
Error reporting demonstration for pacjson.
"""

import pacjson
from pacjson import ErrorReporting, ParseConfig, ParseError, ParseLimits, SecurityError


def main():
    print("pacjson - Error Reporting Demo")
    print("=" * 45)

    cases = [
        ('{"key": }', "Missing value"),
        ('{"key" "value"}', "Missing colon"),
        ('{"key": "value"', "Unclosed object"),
        ("[1, 2, 3,]", "Trailing comma"),
        ("{\n\t\"visible\": True\n}", "Capitalized literal"),
        ("[1e400]", "Number overflow"),
        ("1e-400", "Float underflow"),
    ]

    for i, (json_str, description) in enumerate(cases, 1):
        print(f"\n{i}. {description}")
        try:
            pacjson.parse(json_str)
        except ParseError as e:
            print(f"{type(e).__name__}:")
            print(str(e))

    print(f"\n{len(cases) + 1}. Without position or context")
    config = ParseConfig(
        error_reporting=ErrorReporting(include_position=False, include_context=False)
    )
    try:
        pacjson.parse("[1 2]", config)
    except ParseError as e:
        print(str(e))

    print(f"\n{len(cases) + 2}. Limits")
    config = ParseConfig(limits=ParseLimits(max_nesting_depth=4))
    try:
        pacjson.parse("[[[[[1]]]]]", config)
    except SecurityError as e:
        print(str(e))


if __name__ == "__main__":
    main()

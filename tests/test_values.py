import pytest

from storyscript.core.values import format_value, is_number, parse_value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("5", 5),
        ("-2.5", -2.5),
        ("true", True),
        ("false", False),
        ("null", None),
        ('"quoted text"', "quoted text"),
    ],
)
def test_parse_value_reads_json_literals(raw: str, expected: object) -> None:
    value = parse_value(raw)
    assert value == expected
    assert type(value) is type(expected)


def test_parse_value_falls_back_to_trimmed_string() -> None:
    assert parse_value("Bob") == "Bob"
    assert parse_value("  two words ") == "two words"
    assert parse_value("") == ""


def test_parse_value_rejects_non_json_constants() -> None:
    assert parse_value("NaN") == "NaN"
    assert parse_value("Infinity") == "Infinity"


def test_parse_value_keeps_json_containers() -> None:
    assert parse_value("[1, 2]") == [1, 2]
    assert parse_value('{"a": 1}') == {"a": 1}


def test_is_number_excludes_booleans() -> None:
    assert is_number(3)
    assert is_number(3.5)
    assert not is_number(True)
    assert not is_number("3")


def test_format_value_matches_script_spelling() -> None:
    assert format_value(True) == "true"
    assert format_value(False) == "false"
    assert format_value(None) == "null"
    assert format_value(5) == "5"
    assert format_value(5.0) == "5"
    assert format_value(2.5) == "2.5"
    assert format_value("Bob") == "Bob"
    assert format_value([1, 2]) == "[1, 2]"


def test_parse_value_falls_back_on_deeply_nested_input() -> None:
    raw = "[" * 100000
    assert parse_value(raw) == raw


def test_format_value_keeps_exponent_for_huge_floats() -> None:
    assert format_value(1e20) == "100000000000000000000"
    assert format_value(1e21) == "1e+21"
    assert format_value(1e300) == "1e+300"
    assert format_value(-1e300) == "-1e+300"

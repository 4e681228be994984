# ============================================================================
# tests/test_values.py
# Parsing, example-value heuristics and path insertion
# ============================================================================

import pytest

from cli_core.prompts.values import (
    TypeHint,
    ValueParseError,
    as_prompt,
    guess_type_hint,
    insert_at_path,
    is_blank,
    is_non_default,
    label_for_path,
    parse_value,
    serialize_default,
)


@pytest.mark.parametrize("value", [None, 0, 0.0, "", float("nan"), float("inf"), float("-inf")])
def test_placeholder_values_are_not_defaults(value):
    assert is_non_default(value) is False


@pytest.mark.parametrize("value", [False, True, 5, -1, 4.5, "abc", " "])
def test_real_values_are_defaults(value):
    assert is_non_default(value) is True


def test_guess_type_hint():
    assert guess_type_hint(True) is TypeHint.BOOLEAN
    assert guess_type_hint(123) is TypeHint.INT
    assert guess_type_hint(4.0) is TypeHint.INT
    assert guess_type_hint(1.2) is TypeHint.FLOAT
    assert guess_type_hint("x") is TypeHint.STRING
    assert guess_type_hint({"a": 1}) is None
    assert guess_type_hint([1]) is None


def test_serialize_default_reads_back():
    assert serialize_default(True) == "true"
    assert serialize_default(False) == "false"
    assert serialize_default(4.0) == "4"
    assert serialize_default(4.5) == "4.5"
    assert serialize_default(123) == "123"
    assert parse_value(serialize_default(4.0), TypeHint.INT) == 4


def test_parse_boolean_is_strict():
    assert parse_value("TRUE", TypeHint.BOOLEAN) is True
    assert parse_value(" false ", TypeHint.BOOLEAN) is False
    with pytest.raises(ValueParseError):
        parse_value("yes", TypeHint.BOOLEAN)


def test_parse_numbers():
    assert parse_value("42", TypeHint.INT) == 42
    assert parse_value(" -3 ", TypeHint.INT) == -3
    assert parse_value("4.5", TypeHint.FLOAT) == 4.5
    assert parse_value("7", TypeHint.FLOAT) == 7.0
    with pytest.raises(ValueParseError):
        parse_value("abc", TypeHint.INT)
    with pytest.raises(ValueParseError):
        parse_value("4.5", TypeHint.INT)
    with pytest.raises(ValueParseError):
        parse_value("nan", TypeHint.FLOAT)


def test_parse_keeps_text_for_string_and_no_hint():
    assert parse_value("  hello ", TypeHint.STRING) == "  hello "
    assert parse_value("42", None) == "42"


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError, match="Invalid integer"):
        parse_value("x", TypeHint.INT)


def test_is_blank():
    assert is_blank(None)
    assert is_blank("   ")
    assert not is_blank(" a ")


def test_insert_creates_intermediate_levels():
    out = {}
    insert_at_path(out, ("foo", "bar", "flag"), True)
    insert_at_path(out, ("foo", "num"), 1)
    assert out == {"foo": {"bar": {"flag": True}, "num": 1}}


def test_insert_replaces_non_dict_intermediate():
    out = {"foo": 3}
    insert_at_path(out, ("foo", "bar"), 1)
    assert out == {"foo": {"bar": 1}}


def test_insert_rejects_empty_path():
    with pytest.raises(ValueError):
        insert_at_path({}, (), 1)


@pytest.mark.parametrize(
    "name, label",
    [
        ("innerName", "Inner Name"),
        ("userID", "User ID"),
        ("max_qty", "Max Qty"),
        ("foo", "Foo"),
        ("HTTPServer", "HTTP Server"),
    ],
)
def test_as_prompt(name, label):
    assert as_prompt(name) == label


def test_label_for_path():
    assert label_for_path(("foo", "innerAmount")) == "Foo -> Inner Amount"
    assert label_for_path(()) == "Value"

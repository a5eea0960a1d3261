import pytest

from site_api.domain.coerce import (
    INT_MAX,
    INT_MIN,
    coerce,
    is_empty,
    to_boolean,
    to_integer,
    to_string,
)


@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", "0", [], {}])
def test_empty_values(value):
    assert is_empty(value) is True


@pytest.mark.parametrize("value", [True, 1, -1, 0.5, "a", "00", " ", [0], {"a": 1}])
def test_non_empty_values(value):
    assert is_empty(value) is False


def test_integer_parses_leading_number():
    assert to_integer("12abc") == 12
    assert to_integer("  -7 days") == -7
    assert to_integer("+3") == 3


def test_integer_falls_back_to_zero():
    assert to_integer("abc") == 0
    assert to_integer("") == 0
    assert to_integer(None) == 0


def test_integer_from_other_types():
    assert to_integer(True) == 1
    assert to_integer(False) == 0
    assert to_integer(3.9) == 3
    assert to_integer(-3.9) == -3
    assert to_integer(42) == 42


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_integer_from_non_finite_float_is_zero(value):
    assert to_integer(value) == 0


def test_integer_saturates_long_digit_runs():
    assert to_integer("9" * 5000) == INT_MAX
    assert to_integer("-" + "9" * 5000 + "px") == INT_MIN
    assert to_integer("9223372036854775808") == INT_MAX
    assert to_integer("0" * 5000 + "12") == 12


def test_string_coercion():
    assert to_string(None) == ""
    assert to_string(False) == ""
    assert to_string(True) == "1"
    assert to_string(5) == "5"
    assert to_string(2.0) == "2"
    assert to_string(2.5) == "2.5"
    assert to_string("hello") == "hello"


def test_boolean_coercion():
    assert to_boolean("") is False
    assert to_boolean("0") is False
    assert to_boolean(0) is False
    assert to_boolean(None) is False
    assert to_boolean("1") is True
    assert to_boolean("yes") is True
    assert to_boolean(1) is True


def test_coerce_dispatches_on_type_name():
    assert coerce("7", "integer") == 7
    assert coerce(7, "string") == "7"
    assert coerce("1", "boolean") is True


def test_coerce_rejects_unknown_type():
    with pytest.raises(ValueError, match="Unsupported value type"):
        coerce("x", "array")

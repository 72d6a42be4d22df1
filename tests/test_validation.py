import pytest

from styleshader.errors import (
    ArityMismatchError,
    InvalidNumberError,
    TypeMismatchError,
    UnknownOperatorError,
    UntypedExpressionError,
)
from styleshader.validation import validate


@pytest.mark.parametrize(
    "value",
    [
        3,
        "size",
        "red",
        [255, 0, 0],
        ["get", "size"],
        ["var", "ratio"],
        ["time"],
        ["stretch", ["get", "population"], 0, 1000, 2, 12],
        ["interpolate", ["var", "ratio"], "red", [0, 0, 255, 0.5]],
        ["between", ["get", "year"], 1990, 2000],
        ["!", ["==", ["get", "kind"], 2]],
    ],
)
def test_valid_expressions(value):
    validate(value)


def test_unknown_operator():
    with pytest.raises(UnknownOperatorError) as info:
        validate(["foo", 1])
    assert info.value.expression == ["foo", 1]


def test_unknown_operator_nested():
    with pytest.raises(UnknownOperatorError) as info:
        validate(["+", 1, ["*", 2, ["foo"]]])
    assert info.value.expression == ["foo"]


def test_color_where_number_expected():
    with pytest.raises(TypeMismatchError, match="numeric value was expected") as info:
        validate(["clamp", "red", 0, 1])
    assert info.value.expression == "red"
    assert isinstance(info.value, TypeError)


def test_plain_string_where_color_expected():
    with pytest.raises(TypeMismatchError, match="color value was expected"):
        validate(["interpolate", 0.5, "size", "red"])


def test_number_where_string_expected():
    with pytest.raises(TypeMismatchError, match="string value was expected"):
        validate(["get", 3])


def test_operator_result_where_string_expected():
    with pytest.raises(TypeMismatchError):
        validate(["var", ["get", "name"]])


@pytest.mark.parametrize("value", [["+", 1], ["clamp", 1, 2, 3, 4], ["time", 1], ["get"]])
def test_wrong_operand_count(value):
    with pytest.raises(ArityMismatchError):
        validate(value)


@pytest.mark.parametrize("value", [{"a": 1}, None, [1, 2], [], True])
def test_untyped_expression(value):
    with pytest.raises(UntypedExpressionError, match="No type could be inferred"):
        validate(value)


def test_untyped_operand_is_reported_at_its_position():
    with pytest.raises(UntypedExpressionError) as info:
        validate(["+", 1, [1, 2]])
    assert info.value.expression == [1, 2]


@pytest.mark.parametrize(
    "value",
    [
        float("inf"),
        float("-inf"),
        float("nan"),
        10**400,
        [float("nan"), 0, 0],
        ["+", 1, float("inf")],
        ["interpolate", 0.5, "red", [0, 10**400, 0]],
    ],
)
def test_numbers_must_be_finite_floats(value):
    with pytest.raises(InvalidNumberError, match="cannot be written as a GLSL float") as info:
        validate(value)
    assert isinstance(info.value, ValueError)

import pytest

from styleshader.kinds import Operator, ValueKind


def test_operator_lookup_by_tag():
    assert Operator.from_tag("clamp") is Operator.CLAMP
    assert Operator.from_tag("==") is Operator.EQUAL
    assert Operator.from_tag("foo") is None
    assert Operator.from_tag(3) is None


@pytest.mark.parametrize(
    "operator,arity",
    [
        (Operator.TIME, 0),
        (Operator.GET, 1),
        (Operator.NOT, 1),
        (Operator.ADD, 2),
        (Operator.CLAMP, 3),
        (Operator.BETWEEN, 3),
        (Operator.INTERPOLATE, 3),
        (Operator.STRETCH, 5),
    ],
)
def test_operator_arity(operator: Operator, arity: int):
    assert operator.arity == arity


def test_interpolate_is_the_only_color_operator():
    color_operators = [operator for operator in Operator if operator.returns is ValueKind.COLOR]
    assert color_operators == [Operator.INTERPOLATE]
    assert Operator.INTERPOLATE.signature == (ValueKind.NUMBER, ValueKind.COLOR, ValueKind.COLOR)


class TestAccepts:
    def test_exact_kinds_match(self):
        assert ValueKind.NUMBER.accepts(ValueKind.NUMBER)
        assert ValueKind.COLOR.accepts(ValueKind.COLOR)
        assert not ValueKind.NUMBER.accepts(ValueKind.COLOR)

    def test_ambiguous_kind_satisfies_color_and_string(self):
        assert ValueKind.COLOR.accepts(ValueKind.COLOR_OR_STRING)
        assert ValueKind.STRING.accepts(ValueKind.COLOR_OR_STRING)
        assert not ValueKind.NUMBER.accepts(ValueKind.COLOR_OR_STRING)

    def test_unknown_is_never_accepted(self):
        assert not ValueKind.UNKNOWN.accepts(ValueKind.UNKNOWN)
        assert not ValueKind.STRING.accepts(ValueKind.UNKNOWN)

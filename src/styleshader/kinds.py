"""Value kinds and the closed operator vocabulary of style expressions.

Every operator carries its own signature: the tag used in the style document,
the kind expected at each operand position (the arity is the length of that
tuple) and the kind it produces.  Inference, validation and compilation all
read this single table.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ValueKind(Enum):
    """Kinds a style value can be inferred to have."""

    UNKNOWN = -1
    NUMBER = 0
    STRING = 1
    COLOR = 2
    # A bare string that also parses as a color, e.g. ``"red"``.  Resolved by
    # the consuming context; defaults to STRING.
    COLOR_OR_STRING = 3

    def accepts(self, kind: "ValueKind") -> bool:
        """Return ``True`` when a value of *kind* satisfies this expected kind."""

        if kind is self:
            return self is not ValueKind.UNKNOWN
        if self in (ValueKind.STRING, ValueKind.COLOR):
            return kind is ValueKind.COLOR_OR_STRING
        return False

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ValueKind.UNKNOWN: "unknown",
    ValueKind.NUMBER: "numeric",
    ValueKind.STRING: "string",
    ValueKind.COLOR: "color",
    ValueKind.COLOR_OR_STRING: "color or string",
}

_N = ValueKind.NUMBER
_S = ValueKind.STRING
_C = ValueKind.COLOR


class Operator(Enum):
    """Operators understood by the expression compiler."""

    # reading operators
    GET = ("get", (_S,), _N)
    VAR = ("var", (_S,), _N)
    TIME = ("time", (), _N)

    # math operators
    MULTIPLY = ("*", (_N, _N), _N)
    DIVIDE = ("/", (_N, _N), _N)
    ADD = ("+", (_N, _N), _N)
    SUBTRACT = ("-", (_N, _N), _N)
    CLAMP = ("clamp", (_N, _N, _N), _N)
    STRETCH = ("stretch", (_N, _N, _N, _N, _N), _N)
    MOD = ("mod", (_N, _N), _N)
    POW = ("pow", (_N, _N), _N)

    # color operators
    INTERPOLATE = ("interpolate", (_N, _C, _C), _C)

    # logical operators; booleans are represented as 0.0 / 1.0
    GREATER = (">", (_N, _N), _N)
    GREATER_OR_EQUAL = (">=", (_N, _N), _N)
    LESS = ("<", (_N, _N), _N)
    LESS_OR_EQUAL = ("<=", (_N, _N), _N)
    EQUAL = ("==", (_N, _N), _N)
    NOT = ("!", (_N,), _N)
    BETWEEN = ("between", (_N, _N, _N), _N)

    def __init__(self, tag: str, signature: tuple[ValueKind, ...], returns: ValueKind) -> None:
        self.tag = tag
        self.signature = signature
        self.returns = returns

    @property
    def arity(self) -> int:
        return len(self.signature)

    @classmethod
    def from_tag(cls, tag: object) -> Optional["Operator"]:
        """Return the operator registered under *tag*, or ``None``."""

        if not isinstance(tag, str):
            return None
        return _BY_TAG.get(tag)


_BY_TAG = {operator.tag: operator for operator in Operator}

COMPARISON_OPERATORS = frozenset(
    {
        Operator.GREATER,
        Operator.GREATER_OR_EQUAL,
        Operator.LESS,
        Operator.LESS_OR_EQUAL,
        Operator.EQUAL,
    }
)
ARITHMETIC_OPERATORS = frozenset(
    {Operator.MULTIPLY, Operator.DIVIDE, Operator.ADD, Operator.SUBTRACT}
)


__all__ = ["ValueKind", "Operator", "COMPARISON_OPERATORS", "ARITHMETIC_OPERATORS"]

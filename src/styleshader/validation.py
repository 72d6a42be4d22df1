"""Structural and type-level checks for style expressions."""

from __future__ import annotations

import math
from typing import Any

from .errors import (
    ArityMismatchError,
    InvalidNumberError,
    TypeMismatchError,
    UnknownOperatorError,
    UntypedExpressionError,
    describe_expression,
)
from .inference import infer_kind, is_number_literal
from .kinds import Operator, ValueKind


def validate(value: Any) -> None:
    """Check that *value* is a well-typed expression.

    Operator applications are checked recursively: every operand is validated
    on its own and then matched against the kind its operator expects at that
    position.  The first violation raises; numeric ranges are never
    evaluated.
    """

    operator = _operator_of(value)
    if is_number_literal(value):
        _require_finite(value, value)
    elif operator is None and isinstance(value, (list, tuple)):
        for channel in value:
            if is_number_literal(channel):
                _require_finite(channel, value)
    if infer_kind(value) is ValueKind.UNKNOWN:
        raise UntypedExpressionError(
            f"No type could be inferred from the following expression: {describe_expression(value)}",
            value,
        )
    if operator is None:
        return

    operands = value[1:]
    if len(operands) != operator.arity:
        raise ArityMismatchError(
            f"Operator '{operator.tag}' expects {operator.arity} argument(s), "
            f"got {len(operands)} in {describe_expression(value)}",
            value,
        )
    for position, (operand, expected) in enumerate(zip(operands, operator.signature), start=1):
        validate(operand)
        actual = infer_kind(operand)
        if not expected.accepts(actual):
            raise TypeMismatchError(
                f"A {expected.label} value was expected as argument {position} of '{operator.tag}', "
                f"got {describe_expression(operand)} ({actual.label}) instead",
                operand,
            )


def _require_finite(number: int | float, expression: Any) -> None:
    try:
        finite = math.isfinite(number)
    except OverflowError:
        finite = False
    if not finite:
        raise InvalidNumberError(
            f"Number {describe_expression(number)} cannot be written as a GLSL float", expression
        )


def _operator_of(value: Any) -> Operator | None:
    """Return the operator of an application, raising for unknown tags."""

    if not isinstance(value, (list, tuple)) or not value or not isinstance(value[0], str):
        return None
    operator = Operator.from_tag(value[0])
    if operator is None:
        raise UnknownOperatorError(
            f"Unrecognized operator in style expression: {describe_expression(value)}", value
        )
    return operator


__all__ = ["validate"]

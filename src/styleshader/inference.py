"""Infer the kind of a style value without evaluating it."""

from __future__ import annotations

from typing import Any

from .colors import is_string_color
from .kinds import Operator, ValueKind


def is_number_literal(value: Any) -> bool:
    """Return ``True`` for ints and floats; ``bool`` is not a number here."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def infer_kind(value: Any) -> ValueKind:
    """Return the :class:`ValueKind` of *value*.

    Never raises: anything that cannot be classified is ``UNKNOWN`` and left
    for :func:`styleshader.validation.validate` to reject.
    """

    if is_number_literal(value):
        return ValueKind.NUMBER
    if isinstance(value, str):
        if is_string_color(value):
            return ValueKind.COLOR_OR_STRING
        return ValueKind.STRING
    if not isinstance(value, (list, tuple)) or not value:
        return ValueKind.UNKNOWN
    if len(value) in (3, 4) and all(is_number_literal(item) for item in value):
        return ValueKind.COLOR
    operator = Operator.from_tag(value[0])
    if operator is None:
        return ValueKind.UNKNOWN
    return operator.returns


def is_number(value: Any) -> bool:
    return infer_kind(value) is ValueKind.NUMBER


def is_string(value: Any) -> bool:
    return ValueKind.STRING.accepts(infer_kind(value))


def is_color(value: Any) -> bool:
    return ValueKind.COLOR.accepts(infer_kind(value))


__all__ = ["infer_kind", "is_number", "is_string", "is_color", "is_number_literal"]

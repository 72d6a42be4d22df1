"""Lower style expressions to GLSL source fragments.

Example::

    >>> attributes, variables = [], []
    >>> compile_expression(["*", ["get", "size"], 0.5], attributes, "a_", variables)
    '(a_size * 0.5)'
    >>> attributes
    ['size']

Attribute and variable names are collected without prefix so the caller can
decide how each stage reads them.  By default a string that is also a valid
color compiles as a string; pass ``type_hint=ValueKind.COLOR`` where a color
is expected.
"""

from __future__ import annotations

import math
from typing import Any, Callable, MutableSequence, Optional, Sequence

import numpy as np

from .colors import as_array
from .config import TIME_UNIFORM, UNIFORM_PREFIX
from .errors import InvalidNumberError, MalformedColorError, describe_expression
from .inference import infer_kind, is_number_literal
from .kinds import ARITHMETIC_OPERATORS, COMPARISON_OPERATORS, Operator, ValueKind
from .validation import validate


def format_number(value: float) -> str:
    """Return *value* as a GLSL float literal, always with a decimal point."""

    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise InvalidNumberError(
            f"Number {describe_expression(value)} cannot be written as a GLSL float", value
        )
    return np.format_float_positional(number, trim="0")


def format_array(values: Sequence[float]) -> str:
    """Return *values* as a ``vec2``, ``vec3`` or ``vec4`` constructor."""

    if len(values) < 2 or len(values) > 4:
        raise MalformedColorError(
            f"Only vec2, vec3 or vec4 arrays can be formatted, got {describe_expression(list(values))}",
            list(values),
        )
    return f"vec{len(values)}({', '.join(format_number(value) for value in values)})"


def format_color(color: str | Sequence[float]) -> str:
    """Return *color* as a normalized ``vec4``.

    RGB channels are scaled from ``0..255`` to ``0..1``, alpha is kept as is
    and defaults to ``1`` when only three channels are given.
    """

    channels = as_array(color)
    if len(channels) not in (3, 4):
        raise MalformedColorError(
            f"A color needs 3 or 4 channels, got {describe_expression(color)}", color
        )
    if len(channels) == 3:
        channels.append(1)
    return format_array([channel / 255 if index < 3 else channel for index, channel in enumerate(channels)])


def compile_expression(
    value: Any,
    attributes: MutableSequence[str],
    attribute_prefix: str,
    variables: MutableSequence[str],
    type_hint: Optional[ValueKind] = None,
) -> str:
    """Compile *value* to a GLSL expression string.

    Parameters
    ----------
    value:
        A literal or an operator application.
    attributes:
        Receives the names of feature attributes read by ``get``, in first-use
        order and without duplicates.
    attribute_prefix:
        Prefix prepended to attribute names in the output (``a_`` or ``v_``).
    variables:
        Receives the names of style variables read by ``var``.
    type_hint:
        Resolves a string that is both a valid color and a valid string.

    The whole tree is validated before any code is emitted, and the dependency
    lists are only extended once compilation succeeded.
    """

    validate(value)
    found_attributes = list(attributes)
    found_variables = list(variables)
    code = _Lowering(found_attributes, attribute_prefix, found_variables).lower(value, type_hint)
    attributes.extend(found_attributes[len(attributes):])
    variables.extend(found_variables[len(variables):])
    return code


class _Lowering:
    """Recursive code generation over an already validated tree."""

    def __init__(self, attributes: list[str], attribute_prefix: str, variables: list[str]) -> None:
        self._attributes = attributes
        self._attribute_prefix = attribute_prefix
        self._variables = variables
        self._handlers: dict[Operator, Callable[[Operator, Sequence[Any]], str]] = {
            Operator.GET: self._get,
            Operator.VAR: self._var,
            Operator.TIME: self._time,
            Operator.CLAMP: self._call,
            Operator.STRETCH: self._stretch,
            Operator.MOD: self._call,
            Operator.POW: self._call,
            Operator.INTERPOLATE: self._interpolate,
            Operator.NOT: self._not,
            Operator.BETWEEN: self._between,
        }
        for operator in ARITHMETIC_OPERATORS:
            self._handlers[operator] = self._binary
        for operator in COMPARISON_OPERATORS:
            self._handlers[operator] = self._comparison

    def lower(self, value: Any, type_hint: Optional[ValueKind] = None) -> str:
        operator = _operator(value)
        if operator is not None:
            return self._handlers[operator](operator, value[1:])
        if is_number_literal(value):
            return format_number(value)
        kind = infer_kind(value)
        if ValueKind.STRING.accepts(kind) and type_hint in (None, ValueKind.STRING):
            return f'"{value}"'
        return format_color(value)

    # ------------------------------------------------------------------
    # reading operators
    # ------------------------------------------------------------------
    def _get(self, operator: Operator, args: Sequence[Any]) -> str:
        name = args[0]
        if name not in self._attributes:
            self._attributes.append(name)
        return f"{self._attribute_prefix}{name}"

    def _var(self, operator: Operator, args: Sequence[Any]) -> str:
        name = args[0]
        if name not in self._variables:
            self._variables.append(name)
        return f"{UNIFORM_PREFIX}{name}"

    def _time(self, operator: Operator, args: Sequence[Any]) -> str:
        return TIME_UNIFORM

    # ------------------------------------------------------------------
    # math operators
    # ------------------------------------------------------------------
    def _binary(self, operator: Operator, args: Sequence[Any]) -> str:
        return f"({self.lower(args[0])} {operator.tag} {self.lower(args[1])})"

    def _call(self, operator: Operator, args: Sequence[Any]) -> str:
        return f"{operator.tag}({', '.join(self.lower(arg) for arg in args)})"

    def _stretch(self, operator: Operator, args: Sequence[Any]) -> str:
        # Operands are side-effect free, so repeating their code is safe.
        low1, high1, low2, high2 = (self.lower(arg) for arg in args[1:])
        value = self.lower(args[0])
        return (
            f"((clamp({value}, {low1}, {high1}) - {low1}) * "
            f"(({high2} - {low2}) / ({high1} - {low1})) + {low2})"
        )

    # ------------------------------------------------------------------
    # color operators
    # ------------------------------------------------------------------
    def _interpolate(self, operator: Operator, args: Sequence[Any]) -> str:
        ratio, start, end = args
        start_code = self.lower(start, ValueKind.COLOR)
        end_code = self.lower(end, ValueKind.COLOR)
        return f"mix({start_code}, {end_code}, {self.lower(ratio)})"

    # ------------------------------------------------------------------
    # logical operators
    # ------------------------------------------------------------------
    def _comparison(self, operator: Operator, args: Sequence[Any]) -> str:
        return f"({self.lower(args[0])} {operator.tag} {self.lower(args[1])} ? 1.0 : 0.0)"

    def _not(self, operator: Operator, args: Sequence[Any]) -> str:
        return f"({self.lower(args[0])} > 0.0 ? 0.0 : 1.0)"

    def _between(self, operator: Operator, args: Sequence[Any]) -> str:
        value, low, high = (self.lower(arg) for arg in args)
        return f"({value} >= {low} && {value} <= {high} ? 1.0 : 0.0)"


def _operator(value: Any) -> Optional[Operator]:
    if isinstance(value, (list, tuple)) and value:
        return Operator.from_tag(value[0])
    return None


__all__ = ["compile_expression", "format_number", "format_array", "format_color"]

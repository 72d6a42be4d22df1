"""Custom exception hierarchy for styleshader."""

from __future__ import annotations

import json
from typing import Any


def describe_expression(expression: Any) -> str:
    """Return a compact JSON rendering of *expression* for error messages."""

    try:
        return json.dumps(expression, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(expression)


class StyleShaderError(Exception):
    """Base class for all custom errors raised by styleshader."""


# --- 2-layer hierarchy ---

class ExpressionError(StyleShaderError):
    """Base class for errors found while checking or compiling an expression.

    The offending sub-expression is kept on :attr:`expression` so callers can
    point the user at the exact part of the style that failed.
    """

    def __init__(self, message: str, expression: Any = None) -> None:
        super().__init__(message)
        self.expression = expression


class StyleError(StyleShaderError):
    """Base class for errors concerning a style object as a whole."""


# --- Expression errors ---

class UntypedExpressionError(ExpressionError):
    """Raised when no value kind can be inferred from an expression."""


class UnknownOperatorError(ExpressionError):
    """Raised when an operator tag is outside the supported vocabulary."""


class TypeMismatchError(ExpressionError, TypeError):
    """Raised when an operand does not have the kind its operator expects."""


class ArityMismatchError(TypeMismatchError):
    """Raised when an operator receives the wrong number of operands."""


class MalformedColorError(ExpressionError, ValueError):
    """Raised when a value cannot be normalized to an RGBA color."""


class InvalidNumberError(ExpressionError, ValueError):
    """Raised when a number literal is not a finite GLSL float."""


# --- Style errors ---

class UnsupportedSymbolTypeError(StyleError):
    """Raised when a symbol style declares an unknown ``symbolType``."""


class StyleLoadError(StyleError):
    """Raised when the style document cannot be read or parsed."""


class InvalidStyleError(StyleError):
    """Raised when a style object does not have the expected shape."""

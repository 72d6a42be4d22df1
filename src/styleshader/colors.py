"""Color recognition and normalization for style values.

Named colors (the SVG/CSS keyword set) and short or long hex notation are
handled by :class:`QColor`.  Hex notation carrying an alpha channel and the
functional ``rgb()``/``rgba()`` notation are parsed here because ``QColor``
either does not support them or reads the alpha digits in a different order.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Optional, Sequence

from PySide6.QtGui import QColor

from .errors import MalformedColorError, describe_expression

_HEX_ALPHA_MATCHER = re.compile(r"#([0-9a-f]{4}|[0-9a-f]{8})")
_HEX_MATCHER = re.compile(r"#([0-9a-f]{3}|[0-9a-f]{6})")
_FUNCTIONAL_MATCHER = re.compile(r"rgba?\(([^)]+)\)")

RGBA = tuple[float, float, float, float]


def is_string_color(value: str) -> bool:
    """Return ``True`` when *value* is a color name, hex or functional color."""

    return _parse_color_string(value) is not None


def as_array(color: str | Sequence[float]) -> list[float]:
    """Return *color* as ``[r, g, b, a]`` or ``[r, g, b]``.

    RGB channels are in the ``0..255`` range and alpha in ``0..1``.  Numeric
    sequences are returned as a copy; their channel count is checked by the
    caller.
    """

    if isinstance(color, str):
        parsed = _parse_color_string(color)
        if parsed is None:
            raise MalformedColorError(
                f"Failed to parse {describe_expression(color)} as a color", color
            )
        return list(parsed)
    if isinstance(color, (list, tuple)) and all(_is_number(channel) for channel in color):
        return list(color)
    raise MalformedColorError(
        f"Expected a color string or a numeric array, got {describe_expression(color)}", color
    )


# ------------------------------------------------------------------
@lru_cache(maxsize=256)
def _parse_color_string(value: str) -> Optional[RGBA]:
    text = value.strip().lower()
    if not text:
        return None

    match = _HEX_ALPHA_MATCHER.fullmatch(text)
    if match:
        digits = match.group(1)
        if len(digits) == 4:
            digits = "".join(digit * 2 for digit in digits)
        r, g, b, a = (int(digits[index:index + 2], 16) for index in range(0, 8, 2))
        return (r, g, b, a / 255.0)

    match = _FUNCTIONAL_MATCHER.fullmatch(text)
    if match:
        return _parse_functional(match.group(1))

    if text.startswith("#") and not _HEX_MATCHER.fullmatch(text):
        # QColor also accepts 9 and 12 digit hex strings which are not valid
        # CSS colors.
        return None

    if not QColor.isValidColorName(text):
        return None
    color = QColor.fromString(text)
    return (color.red(), color.green(), color.blue(), color.alphaF())


def _parse_functional(arguments: str) -> Optional[RGBA]:
    try:
        components = [float(part.strip()) for part in arguments.split(",")]
    except ValueError:
        return None
    if len(components) == 3:
        components.append(1.0)
    if len(components) != 4:
        return None
    r, g, b, a = components
    return (_clamp(r, 255.0), _clamp(g, 255.0), _clamp(b, 255.0), _clamp(a, 1.0))


def _clamp(value: float, upper: float) -> float:
    """Clamp ``value`` to the inclusive ``[0.0, upper]`` range."""

    return max(0.0, min(upper, value))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


__all__ = ["is_string_color", "as_array", "RGBA"]

"""Default configuration values for styleshader."""

from __future__ import annotations

from typing import Final

# Identifier prefixes used in the generated GLSL.  Attribute names collected
# while compiling an expression are stored *without* prefix; the prefix is
# chosen by the stage that reads them (``a_`` in the vertex shader, ``v_`` in
# the fragment shader where the value arrives through a varying).
ATTRIBUTE_PREFIX: Final[str] = "a_"
VARYING_PREFIX: Final[str] = "v_"
UNIFORM_PREFIX: Final[str] = "u_"

TIME_UNIFORM: Final[str] = "u_time"
TEXTURE_UNIFORM: Final[str] = "u_texture"

SHADER_PRECISION: Final[str] = "precision mediump float;"

# Identity values for the five builder slots.
DEFAULT_SIZE_EXPRESSION: Final[str] = "vec2(1.0)"
DEFAULT_OFFSET_EXPRESSION: Final[str] = "vec2(0.0)"
DEFAULT_COLOR_EXPRESSION: Final[str] = "vec4(1.0)"
DEFAULT_TEXCOORD_EXPRESSION: Final[str] = "vec4(0.0, 0.0, 1.0, 1.0)"
DEFAULT_DISCARD_EXPRESSION: Final[str] = "false"

# Fallbacks applied to a symbol style when a field is omitted.
DEFAULT_COLOR: Final[str] = "white"
DEFAULT_TEXTURE_COORD: Final[tuple[int, int, int, int]] = (0, 0, 1, 1)
DEFAULT_OFFSET: Final[tuple[int, int]] = (0, 0)
DEFAULT_OPACITY: Final[int] = 1

SYMBOL_TYPES: Final[tuple[str, ...]] = ("square", "circle", "triangle", "image")

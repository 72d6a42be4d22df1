"""Assemble complete symbol shader programs from compiled expressions.

The builder collects declarations and five expression slots, then renders a
vertex and a fragment program by filling them into fixed boilerplate.  All
setters return the builder so calls can be chained::

    builder = (
        ShaderBuilder()
        .add_varying("v_width", "float", "a_width")
        .add_uniform("float u_ratio")
        .set_color_expression("vec4(1.0, 0.0, 0.0, 1.0)")
        .set_size_expression("vec2(a_width)")
    )
    vertex_source = builder.get_symbol_vertex_shader()

Nothing is validated here: expressions are expected to come out of
:func:`styleshader.compiler.compile_expression`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from .config import (
    DEFAULT_COLOR_EXPRESSION,
    DEFAULT_DISCARD_EXPRESSION,
    DEFAULT_OFFSET_EXPRESSION,
    DEFAULT_SIZE_EXPRESSION,
    DEFAULT_TEXCOORD_EXPRESSION,
    SHADER_PRECISION,
)

_LOGGER = logging.getLogger(__name__)

VaryingType = Literal["float", "vec2", "vec3", "vec4"]


# Hardcoded uniforms: u_projectionMatrix, u_offsetScaleMatrix,
# u_offsetRotateMatrix, u_time.  Hardcoded attributes: a_position and a_index,
# the index of the vertex in its quad (0 to 3).
_SYMBOL_VERTEX_SHADER = """{precision}
uniform mat4 u_projectionMatrix;
uniform mat4 u_offsetScaleMatrix;
uniform mat4 u_offsetRotateMatrix;
uniform float u_time;
{uniforms}
attribute vec2 a_position;
attribute float a_index;
{attributes}
varying vec2 v_texCoord;
varying vec2 v_quadCoord;
{varyings}
void main(void) {{
  mat4 offsetMatrix = {offset_matrix};
  vec2 size = {size};
  vec2 offset = {offset};
  float offsetX = a_index == 0.0 || a_index == 3.0 ? offset.x - size.x / 2.0 : offset.x + size.x / 2.0;
  float offsetY = a_index == 0.0 || a_index == 1.0 ? offset.y - size.y / 2.0 : offset.y + size.y / 2.0;
  vec4 offsets = offsetMatrix * vec4(offsetX, offsetY, 0.0, 0.0);
  gl_Position = u_projectionMatrix * vec4(a_position, 0.0, 1.0) + offsets;
  vec4 texCoord = {tex_coord};
  float u = a_index == 0.0 || a_index == 3.0 ? texCoord.s : texCoord.q;
  float v = a_index == 2.0 || a_index == 3.0 ? texCoord.t : texCoord.p;
  v_texCoord = vec2(u, v);
  u = a_index == 0.0 || a_index == 3.0 ? 0.0 : 1.0;
  v = a_index == 2.0 || a_index == 3.0 ? 0.0 : 1.0;
  v_quadCoord = vec2(u, v);
{varying_assignments}
}}"""


# Expects v_texCoord and v_quadCoord from the vertex shader.  Output colors
# are premultiplied by alpha.
_SYMBOL_FRAGMENT_SHADER = """{precision}
uniform float u_time;
{uniforms}
varying vec2 v_texCoord;
varying vec2 v_quadCoord;
{varyings}
void main(void) {{
  if ({discard}) {{ discard; }}
  gl_FragColor = {color};
  gl_FragColor.rgb *= gl_FragColor.a;
}}"""


@dataclass(frozen=True)
class VaryingDescription:
    """A value computed per vertex and interpolated for the fragment shader."""

    name: str
    type: VaryingType
    expression: str


class ShaderBuilder:
    """Builder for symbol vertex and fragment shaders."""

    def __init__(self) -> None:
        # Declarations include their type, e.g. ``sampler2D u_texture``.
        self.uniforms: list[str] = []
        self.attributes: list[str] = []
        self.varyings: list[VaryingDescription] = []
        self._size_expression = DEFAULT_SIZE_EXPRESSION
        self._offset_expression = DEFAULT_OFFSET_EXPRESSION
        self._color_expression = DEFAULT_COLOR_EXPRESSION
        self._tex_coord_expression = DEFAULT_TEXCOORD_EXPRESSION
        self._discard_expression = DEFAULT_DISCARD_EXPRESSION
        self._rotate_with_view = False

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------
    def add_uniform(self, name: str) -> "ShaderBuilder":
        """Add a uniform visible in both shaders, e.g. ``float u_ratio``."""

        self.uniforms.append(name)
        return self

    def add_attribute(self, name: str) -> "ShaderBuilder":
        """Add a vertex attribute read from the geometry buffer, e.g. ``float a_size``."""

        self.attributes.append(name)
        return self

    def add_varying(self, name: str, type: VaryingType, expression: str) -> "ShaderBuilder":
        """Add a varying assigned from *expression* in the vertex shader."""

        self.varyings.append(VaryingDescription(name=name, type=type, expression=expression))
        return self

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def set_size_expression(self, expression: str) -> "ShaderBuilder":
        """Set the ``vec2`` symbol size, evaluated in the vertex shader."""

        self._size_expression = expression
        return self

    def set_symbol_offset_expression(self, expression: str) -> "ShaderBuilder":
        """Set the ``vec2`` offset from the point center, evaluated in the vertex shader."""

        self._offset_expression = expression
        return self

    def set_color_expression(self, expression: str) -> "ShaderBuilder":
        """Set the ``vec4`` fragment color, evaluated in the fragment shader."""

        self._color_expression = expression
        return self

    def set_texture_coordinate_expression(self, expression: str) -> "ShaderBuilder":
        """Set the ``vec4`` texture bounds ``[s, t, p, q]`` of the quad."""

        self._tex_coord_expression = expression
        return self

    def set_fragment_discard_expression(self, expression: str) -> "ShaderBuilder":
        """Set the boolean condition under which a fragment is not drawn."""

        self._discard_expression = expression
        return self

    def set_symbol_rotate_with_view(self, rotate_with_view: bool) -> "ShaderBuilder":
        """Set whether symbols follow the view rotation or stay screen aligned."""

        self._rotate_with_view = bool(rotate_with_view)
        return self

    def get_size_expression(self) -> str:
        return self._size_expression

    def get_offset_expression(self) -> str:
        return self._offset_expression

    def get_color_expression(self) -> str:
        return self._color_expression

    def get_texture_coordinate_expression(self) -> str:
        return self._tex_coord_expression

    def get_fragment_discard_expression(self) -> str:
        return self._discard_expression

    @property
    def rotate_with_view(self) -> bool:
        return self._rotate_with_view

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def get_symbol_vertex_shader(self) -> str:
        """Return the full vertex shader for point symbols.

        Besides the user varyings, writes ``v_texCoord`` (the position on the
        texture) and ``v_quadCoord`` (the position inside the quad, 0 to 1 on
        each axis).
        """

        if self._rotate_with_view:
            offset_matrix = "u_offsetScaleMatrix * u_offsetRotateMatrix"
        else:
            offset_matrix = "u_offsetScaleMatrix"

        source = _SYMBOL_VERTEX_SHADER.format(
            precision=SHADER_PRECISION,
            uniforms=self._uniform_declarations(),
            attributes="\n".join(f"attribute {attribute};" for attribute in self.attributes),
            varyings=self._varying_declarations(),
            offset_matrix=offset_matrix,
            size=self._size_expression,
            offset=self._offset_expression,
            tex_coord=self._tex_coord_expression,
            varying_assignments="\n".join(
                f"  {varying.name} = {varying.expression};" for varying in self.varyings
            ),
        )
        _LOGGER.debug("Rendered symbol vertex shader (%d lines)", source.count("\n") + 1)
        return source

    def get_symbol_fragment_shader(self) -> str:
        """Return the full fragment shader for point symbols."""

        source = _SYMBOL_FRAGMENT_SHADER.format(
            precision=SHADER_PRECISION,
            uniforms=self._uniform_declarations(),
            varyings=self._varying_declarations(),
            discard=self._discard_expression,
            color=self._color_expression,
        )
        _LOGGER.debug("Rendered symbol fragment shader (%d lines)", source.count("\n") + 1)
        return source

    def _uniform_declarations(self) -> str:
        return "\n".join(f"uniform {uniform};" for uniform in self.uniforms)

    def _varying_declarations(self) -> str:
        return "\n".join(f"varying {varying.type} {varying.name};" for varying in self.varyings)


__all__ = ["ShaderBuilder", "VaryingDescription", "VaryingType"]

"""Compile literal point-symbol styles into a configured shader builder.

A literal style is a plain mapping, typically loaded from JSON::

    {
        "symbol": {
            "symbolType": "circle",
            "size": ["stretch", ["get", "population"], 0, 1e6, 4, 24],
            "color": ["interpolate", ["var", "ratio"], "#3388ff", "red"],
            "opacity": 0.8,
        },
        "filter": [">", ["get", "population"], 1000],
        "variables": {"ratio": 0.5},
    }

:func:`parse_literal_style` returns the builder together with the attribute
and uniform descriptors the rendering layer needs to feed the program.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence, Union

import numpy as np
from PySide6.QtGui import QImage

from .compiler import compile_expression
from .config import (
    ATTRIBUTE_PREFIX,
    DEFAULT_COLOR,
    DEFAULT_OFFSET,
    DEFAULT_OPACITY,
    DEFAULT_TEXTURE_COORD,
    SYMBOL_TYPES,
    TEXTURE_UNIFORM,
    UNIFORM_PREFIX,
    VARYING_PREFIX,
)
from .errors import InvalidStyleError, TypeMismatchError, UnsupportedSymbolTypeError, describe_expression
from .inference import infer_kind, is_number_literal
from .kinds import ValueKind
from .shader_builder import ShaderBuilder
from .validation import validate

_LOGGER = logging.getLogger(__name__)

# 2 * pi / 3, the angular period of the triangle footprint.
_TRIANGLE_PERIOD = "2.094395102"


class Feature(Protocol):
    """Anything exposing a property lookup by name."""

    def get(self, key: str) -> Any:  # pragma: no cover - protocol
        ...


class TextureHandle:
    """Deferred image source bound to the ``u_texture`` uniform.

    Construction performs no I/O; the renderer calls :meth:`load` once it is
    ready to upload the texture.
    """

    def __init__(self, src: str) -> None:
        self.src = str(src)
        self._image: Optional[QImage] = None

    @property
    def is_loaded(self) -> bool:
        return self._image is not None and not self._image.isNull()

    def load(self) -> QImage:
        """Read the image from :attr:`src`, caching the result."""

        if self._image is None:
            image = QImage(self.src)
            if image.isNull():
                _LOGGER.warning("Unable to load symbol texture from '%s'", self.src)
            self._image = image
        return self._image

    def __repr__(self) -> str:
        return f"TextureHandle({self.src!r})"


UniformValue = Union[float, Callable[[], float], TextureHandle]


@dataclass(frozen=True)
class AttributeDescriptor:
    """Per-feature attribute read by the vertex shader as ``a_<name>``."""

    name: str
    callback: Callable[[Feature], float]

    def extract(self, feature: Feature) -> float:
        return self.callback(feature)


@dataclass
class StyleParseResult:
    """Builder configured for a style plus the descriptors feeding it."""

    builder: ShaderBuilder
    attributes: list[AttributeDescriptor] = field(default_factory=list)
    uniforms: dict[str, UniformValue] = field(default_factory=dict)


def parse_literal_style(style: Mapping[str, Any]) -> StyleParseResult:
    """Return a :class:`StyleParseResult` for the literal *style*.

    Variables are exposed as uniforms whose values are looked up in
    ``style["variables"]`` every time they are read, so updating that mapping
    takes effect without recompiling the shaders.
    """

    symbol = style.get("symbol") if isinstance(style, Mapping) else None
    if not isinstance(symbol, Mapping):
        raise InvalidStyleError("A literal style needs a 'symbol' object")
    if "variables" in style and not isinstance(style["variables"], Mapping):
        _LOGGER.warning("Ignoring style variables that are not a mapping: %r", style["variables"])

    size = _normalize_size(symbol.get("size"))
    color = symbol.get("color") or DEFAULT_COLOR
    tex_coord = _components("textureCoord", symbol.get("textureCoord") or DEFAULT_TEXTURE_COORD, 4)
    offset = _components("offset", symbol.get("offset") or DEFAULT_OFFSET, 2)
    opacity = symbol.get("opacity", DEFAULT_OPACITY)
    symbol_type = symbol.get("symbolType")

    for field_name, component in (
        *((f"size[{index}]", value) for index, value in enumerate(size)),
        *((f"offset[{index}]", value) for index, value in enumerate(offset)),
        *((f"textureCoord[{index}]", value) for index, value in enumerate(tex_coord)),
        ("opacity", opacity),
    ):
        _require_kind(field_name, component, ValueKind.NUMBER)
    _require_kind("color", color, ValueKind.COLOR)
    if style.get("filter"):
        _require_kind("filter", style["filter"], ValueKind.NUMBER)

    variables: list[str] = []
    vert_attributes: list[str] = []
    frag_attributes: list[str] = []

    def compile_vertex(value: Any) -> str:
        return compile_expression(value, vert_attributes, ATTRIBUTE_PREFIX, variables)

    def compile_fragment(value: Any, type_hint: Optional[ValueKind] = None) -> str:
        return compile_expression(value, frag_attributes, VARYING_PREFIX, variables, type_hint)

    opacity_mask = _symbol_mask(symbol_type, compile_fragment(size[0]))
    parsed_color = compile_fragment(color, ValueKind.COLOR)

    builder = (
        ShaderBuilder()
        .set_size_expression(f"vec2({compile_vertex(size[0])}, {compile_vertex(size[1])})")
        .set_symbol_offset_expression(f"vec2({compile_vertex(offset[0])}, {compile_vertex(offset[1])})")
        .set_texture_coordinate_expression(
            f"vec4({', '.join(compile_vertex(tex_coord[index]) for index in range(4))})"
        )
        .set_symbol_rotate_with_view(bool(symbol.get("rotateWithView")))
        .set_color_expression(
            f"vec4({parsed_color}.rgb, {parsed_color}.a * {compile_fragment(opacity)} * {opacity_mask})"
        )
    )

    if style.get("filter"):
        builder.set_fragment_discard_expression(f"{compile_fragment(style['filter'])} <= 0.0")

    uniforms: dict[str, UniformValue] = {}

    # one uniform per variable
    for name in variables:
        builder.add_uniform(f"float {UNIFORM_PREFIX}{name}")
        uniforms[f"{UNIFORM_PREFIX}{name}"] = _variable_reader(style, name)

    if symbol_type == "image":
        src = symbol.get("src")
        if src:
            builder.add_uniform(f"sampler2D {TEXTURE_UNIFORM}").set_color_expression(
                f"{builder.get_color_expression()} * texture2D({TEXTURE_UNIFORM}, v_texCoord)"
            )
            uniforms[TEXTURE_UNIFORM] = TextureHandle(src)
        else:
            _LOGGER.warning("Image symbol declared without 'src'; drawing untextured quads")

    # Attributes read in the fragment shader travel through a float varying,
    # which needs the matching vertex attribute.
    for name in frag_attributes:
        if name not in vert_attributes:
            vert_attributes.append(name)
        builder.add_varying(f"{VARYING_PREFIX}{name}", "float", f"{ATTRIBUTE_PREFIX}{name}")

    for name in vert_attributes:
        builder.add_attribute(f"float {ATTRIBUTE_PREFIX}{name}")

    _LOGGER.debug(
        "Compiled %s symbol style: attributes=%s variables=%s",
        symbol_type,
        vert_attributes,
        variables,
    )
    return StyleParseResult(
        builder=builder,
        attributes=[AttributeDescriptor(name, _attribute_reader(name)) for name in vert_attributes],
        uniforms=uniforms,
    )


def extract_attribute_values(
    features: Iterable[Feature], attributes: Sequence[AttributeDescriptor]
) -> np.ndarray:
    """Evaluate *attributes* over *features* as a ``(features, attributes)`` array."""

    rows = [[attribute.extract(feature) for attribute in attributes] for feature in features]
    return np.asarray(rows, dtype=np.float32).reshape(len(rows), len(attributes))


# ------------------------------------------------------------------
def _normalize_size(size: Any) -> Sequence[Any]:
    """Return *size* as a pair; scalars and expressions apply to both axes."""

    if isinstance(size, (list, tuple)) and size and is_number_literal(size[0]):
        return _components("size", size, 2)
    return (size, size)


def _components(field_name: str, value: Any, count: int) -> Sequence[Any]:
    if not isinstance(value, (list, tuple)) or len(value) != count:
        raise InvalidStyleError(
            f"Style field '{field_name}' needs {count} components, got {describe_expression(value)}"
        )
    return value


def _require_kind(field_name: str, value: Any, expected: ValueKind) -> None:
    """Validate *value* and check that it fits a slot of the *expected* kind."""

    validate(value)
    actual = infer_kind(value)
    if not expected.accepts(actual):
        raise TypeMismatchError(
            f"Style field '{field_name}' expects a {expected.label} value, "
            f"got {describe_expression(value)} ({actual.label}) instead",
            value,
        )


def _symbol_mask(symbol_type: Any, visible_size: str) -> str:
    """Return the procedural opacity mask for *symbol_type*.

    *visible_size* is the compiled first size component; the smoothing band
    is a few pixels wide whatever the symbol size.
    """

    if symbol_type not in SYMBOL_TYPES:
        raise UnsupportedSymbolTypeError(
            f"Unexpected symbol type: {symbol_type!r}, expected one of {', '.join(SYMBOL_TYPES)}"
        )
    if symbol_type in ("square", "image"):
        return "1.0"
    if symbol_type == "circle":
        return f"(1.0-smoothstep(1.-4./{visible_size},1.,dot(v_quadCoord-.5,v_quadCoord-.5)*4.))"
    st = "(v_quadCoord*2.-1.)"
    angle = f"(atan({st}.x,{st}.y))"
    return (
        f"(1.0-smoothstep(.5-3./{visible_size},.5,"
        f"cos(floor(.5+{angle}/{_TRIANGLE_PERIOD})*{_TRIANGLE_PERIOD}-{angle})*length({st})))"
    )


def _variable_reader(style: Mapping[str, Any], name: str) -> Callable[[], float]:
    def read() -> float:
        variables = style.get("variables")
        if not isinstance(variables, Mapping):
            return 0
        return variables.get(name, 0)

    return read


def _attribute_reader(name: str) -> Callable[[Feature], float]:
    def read(feature: Feature) -> float:
        return feature.get(name) or 0

    return read


__all__ = [
    "AttributeDescriptor",
    "Feature",
    "StyleParseResult",
    "TextureHandle",
    "UniformValue",
    "extract_attribute_values",
    "parse_literal_style",
]

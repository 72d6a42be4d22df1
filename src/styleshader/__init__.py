"""Compile literal point-symbol styles into WebGL shader programs.

The expression language is made of numbers, colors, strings and a closed set
of operators written as nested lists.  Expressions are type checked and
lowered to GLSL, then assembled with fixed boilerplate into a vertex and a
fragment program.
"""

from .compiler import compile_expression, format_array, format_color, format_number
from .errors import (
    ArityMismatchError,
    ExpressionError,
    InvalidNumberError,
    InvalidStyleError,
    MalformedColorError,
    StyleError,
    StyleLoadError,
    StyleShaderError,
    TypeMismatchError,
    UnknownOperatorError,
    UnsupportedSymbolTypeError,
    UntypedExpressionError,
)
from .inference import infer_kind, is_color, is_number, is_string
from .kinds import Operator, ValueKind
from .literal_style import (
    AttributeDescriptor,
    StyleParseResult,
    TextureHandle,
    extract_attribute_values,
    parse_literal_style,
)
from .shader_builder import ShaderBuilder, VaryingDescription
from .style_loader import load_style
from .validation import validate

__all__ = [
    "ArityMismatchError",
    "AttributeDescriptor",
    "ExpressionError",
    "InvalidNumberError",
    "InvalidStyleError",
    "MalformedColorError",
    "Operator",
    "ShaderBuilder",
    "StyleError",
    "StyleLoadError",
    "StyleParseResult",
    "StyleShaderError",
    "TextureHandle",
    "TypeMismatchError",
    "UnknownOperatorError",
    "UnsupportedSymbolTypeError",
    "UntypedExpressionError",
    "ValueKind",
    "VaryingDescription",
    "compile_expression",
    "extract_attribute_values",
    "format_array",
    "format_color",
    "format_number",
    "infer_kind",
    "is_color",
    "is_number",
    "is_string",
    "load_style",
    "parse_literal_style",
    "validate",
]

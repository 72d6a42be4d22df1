from styleshader.shader_builder import ShaderBuilder, VaryingDescription


def test_setters_chain():
    builder = ShaderBuilder()
    assert builder.add_uniform("float u_ratio") is builder
    assert builder.add_attribute("float a_size") is builder
    assert builder.add_varying("v_size", "float", "a_size") is builder
    assert builder.set_size_expression("vec2(2.0)") is builder
    assert builder.set_symbol_offset_expression("vec2(1.0)") is builder
    assert builder.set_color_expression("vec4(0.5)") is builder
    assert builder.set_texture_coordinate_expression("vec4(0.0)") is builder
    assert builder.set_fragment_discard_expression("true") is builder
    assert builder.set_symbol_rotate_with_view(True) is builder


def test_default_slots():
    builder = ShaderBuilder()
    assert builder.get_size_expression() == "vec2(1.0)"
    assert builder.get_offset_expression() == "vec2(0.0)"
    assert builder.get_color_expression() == "vec4(1.0)"
    assert builder.get_texture_coordinate_expression() == "vec4(0.0, 0.0, 1.0, 1.0)"
    assert builder.get_fragment_discard_expression() == "false"
    assert builder.rotate_with_view is False


def test_default_vertex_shader_body():
    source = ShaderBuilder().get_symbol_vertex_shader()
    assert source.startswith("precision mediump float;\n")
    assert "uniform mat4 u_projectionMatrix;" in source
    assert "attribute float a_index;" in source
    assert "  mat4 offsetMatrix = u_offsetScaleMatrix;" in source
    assert "  vec2 size = vec2(1.0);" in source
    assert "  vec2 offset = vec2(0.0);" in source
    assert "  vec4 texCoord = vec4(0.0, 0.0, 1.0, 1.0);" in source
    assert "  v_quadCoord = vec2(u, v);" in source
    assert source.endswith("}")


def test_rotate_with_view_composes_rotation():
    source = ShaderBuilder().set_symbol_rotate_with_view(True).get_symbol_vertex_shader()
    assert "  mat4 offsetMatrix = u_offsetScaleMatrix * u_offsetRotateMatrix;" in source


def test_declarations_in_vertex_shader():
    builder = (
        ShaderBuilder()
        .add_uniform("float u_ratio")
        .add_attribute("float a_size")
        .add_varying("v_size", "float", "a_size")
        .set_size_expression("vec2(a_size, a_size)")
    )
    source = builder.get_symbol_vertex_shader()
    assert "uniform float u_ratio;" in source
    assert "attribute float a_size;" in source
    assert "varying float v_size;" in source
    assert "  vec2 size = vec2(a_size, a_size);" in source
    assert "  v_size = a_size;\n}" in source
    assert builder.varyings == [VaryingDescription(name="v_size", type="float", expression="a_size")]


def test_quad_corner_selection():
    source = ShaderBuilder().get_symbol_vertex_shader()
    assert (
        "float offsetX = a_index == 0.0 || a_index == 3.0 ? offset.x - size.x / 2.0 : offset.x + size.x / 2.0;"
        in source
    )
    assert (
        "float offsetY = a_index == 0.0 || a_index == 1.0 ? offset.y - size.y / 2.0 : offset.y + size.y / 2.0;"
        in source
    )
    assert "gl_Position = u_projectionMatrix * vec4(a_position, 0.0, 1.0) + offsets;" in source


def test_fragment_shader():
    builder = (
        ShaderBuilder()
        .add_uniform("float u_ratio")
        .add_attribute("float a_w")
        .add_varying("v_w", "float", "a_w")
        .set_color_expression("vec4(1.0, 0.0, 0.0, 1.0)")
        .set_fragment_discard_expression("u_ratio > 0.5")
    )
    assert builder.get_symbol_fragment_shader() == (
        "precision mediump float;\n"
        "uniform float u_time;\n"
        "uniform float u_ratio;\n"
        "varying vec2 v_texCoord;\n"
        "varying vec2 v_quadCoord;\n"
        "varying float v_w;\n"
        "void main(void) {\n"
        "  if (u_ratio > 0.5) { discard; }\n"
        "  gl_FragColor = vec4(1.0, 0.0, 0.0, 1.0);\n"
        "  gl_FragColor.rgb *= gl_FragColor.a;\n"
        "}"
    )


def test_attributes_stay_out_of_fragment_shader():
    source = ShaderBuilder().add_attribute("float a_size").get_symbol_fragment_shader()
    assert "a_size" not in source
    assert "if (false) { discard; }" in source

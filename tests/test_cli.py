import json
from pathlib import Path

from typer.testing import CliRunner

from styleshader.cli import app

runner = CliRunner()


def test_compile_prints_shaders(style_file: Path):
    result = runner.invoke(app, ["compile", str(style_file)])
    assert result.exit_code == 0, result.output
    assert "gl_FragColor.rgb *= gl_FragColor.a;" in result.output
    assert "attribute float a_index;" in result.output
    assert "Attributes: none" in result.output


def test_compile_writes_output_dir(style_file: Path, tmp_path: Path):
    output_dir = tmp_path / "out"
    result = runner.invoke(app, ["compile", str(style_file), "--output-dir", str(output_dir)])
    assert result.exit_code == 0, result.output
    vertex = (output_dir / "symbol.vert").read_text(encoding="utf-8")
    fragment = (output_dir / "symbol.frag").read_text(encoding="utf-8")
    assert "vec2 size = vec2(6.0, 6.0);" in vertex
    assert "discard" in fragment
    assert "void main(void)" not in result.output


def test_compile_lists_variable_uniforms(tmp_path: Path):
    path = tmp_path / "style.json"
    path.write_text(
        json.dumps(
            {
                "symbol": {"symbolType": "circle", "size": ["*", ["var", "scale"], ["get", "size"]]},
                "variables": {"scale": 2},
            }
        ),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["compile", str(path)])
    assert result.exit_code == 0, result.output
    assert "u_scale" in result.output
    assert "Attributes: size" in result.output


def test_compile_reports_style_errors(tmp_path: Path):
    path = tmp_path / "style.json"
    path.write_text(json.dumps({"symbol": {"symbolType": "star", "size": 4}}), encoding="utf-8")
    result = runner.invoke(app, ["compile", str(path)])
    assert result.exit_code == 1


def test_check_compiles_expression():
    result = runner.invoke(app, ["check", '["+", ["get", "size"], 2]'])
    assert result.exit_code == 0, result.output
    assert "numeric" in result.output
    assert "(a_size + 2.0)" in result.output
    assert "Attributes: size" in result.output


def test_check_reports_unknown_operator():
    result = runner.invoke(app, ["check", '["foo", 1]'])
    assert result.exit_code == 1


def test_check_rejects_invalid_json():
    result = runner.invoke(app, ["check", "[1,"])
    assert result.exit_code != 0

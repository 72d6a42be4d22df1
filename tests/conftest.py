import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the package importable without installing it.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def square_style() -> dict:
    return {"symbol": {"symbolType": "square", "size": 6, "color": "red"}}


@pytest.fixture
def style_file(tmp_path: Path, square_style: dict) -> Path:
    path = tmp_path / "style.json"
    path.write_text(json.dumps(square_style), encoding="utf-8")
    return path

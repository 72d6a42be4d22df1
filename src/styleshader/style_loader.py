"""Read literal styles stored as JSON documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .errors import StyleLoadError

_LOGGER = logging.getLogger(__name__)


def load_style(style_path: Path | str) -> Dict[str, Any]:
    """Return the style object stored in *style_path*.

    The document must be a JSON object holding a ``symbol`` object; the
    expressions inside are checked later, when the style is compiled.
    """

    path = Path(style_path)
    try:
        raw_data = path.read_text(encoding="utf8")
    except OSError as exc:
        raise StyleLoadError(f"Unable to read style file '{path}'") from exc

    try:
        style = json.loads(raw_data)
    except json.JSONDecodeError as exc:
        raise StyleLoadError(f"Style file '{path}' is not valid JSON") from exc

    if not isinstance(style, dict):
        raise StyleLoadError(f"Style file '{path}' must contain a JSON object")
    if not isinstance(style.get("symbol"), dict):
        raise StyleLoadError(f"Style file '{path}' has no 'symbol' object")

    _LOGGER.debug("Loaded style '%s' (symbol type %s)", path, style["symbol"].get("symbolType"))
    return style


__all__ = ["load_style"]

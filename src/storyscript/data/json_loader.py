"""Low-level JSON helpers for script acquisition."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Script file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Unable to read script file: {path}") from exc
    return parse_json_text(text, source=str(path))


def parse_json_text(text: str | bytes, *, source: str = "<string>") -> object:
    """Parse JSON text and raise DataLoadError on failure."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Invalid JSON in {source}: {exc}") from exc

"""Helpers for resolving script file locations."""
from __future__ import annotations

from pathlib import Path

DEFAULT_SCRIPT_NAME = "lighthouse.json"


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_scripts_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing bundled story scripts."""
    if base_path is not None:
        return Path(base_path)
    return get_repo_root() / "data" / "scripts"


def get_default_script_path() -> Path:
    """Return the script played when no path is given on the command line."""
    return get_scripts_path() / DEFAULT_SCRIPT_NAME

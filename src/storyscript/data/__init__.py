"""Data layer utilities for loading story scripts."""

from .errors import DataError, DataLoadError, DataValidationError
from .paths import get_default_script_path, get_repo_root, get_scripts_path

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "get_default_script_path",
    "get_repo_root",
    "get_scripts_path",
]

"""Base repository implementation for JSON script data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from storyscript.data.errors import DataValidationError
from storyscript.data.json_loader import load_json, parse_json_text
from storyscript.data import paths

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = Path(base_path) if base_path is not None else None
        self._cache: Dict[Path, T] = {}

    def _get_file_path(self, name: str) -> Path:
        filename = name if name.endswith(".json") else f"{name}.json"
        return paths.get_scripts_path(self._base_path) / filename

    def _build(self, raw: dict[str, object]) -> T:
        """Convert a raw dict into a typed definition."""
        raise NotImplementedError

    def get(self, name: str) -> T:
        """Return a bundled definition by file name, loading it on first use."""
        return self.load_path(self._get_file_path(name))

    def load_path(self, path: Path | str) -> T:
        """Load and cache the definition stored at ``path``."""
        file_path = Path(path).resolve()
        if file_path not in self._cache:
            self._cache[file_path] = self.load_document(load_json(file_path), source=str(file_path))
        return self._cache[file_path]

    def load_text(self, text: str | bytes, *, source: str = "<string>") -> T:
        """Parse JSON text into a definition without caching it."""
        return self.load_document(parse_json_text(text, source=source), source=source)

    def load_document(self, raw: object, *, source: str = "<document>") -> T:
        """Validate an already-parsed document and build the definition."""
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {source}")
        return self._build(raw)

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_optional_str(value: object, context: str) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string if provided.")
        return value

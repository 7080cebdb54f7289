"""Repository exports."""

from .base import RepositoryBase
from .script_repo import ScriptRepository

__all__ = ["RepositoryBase", "ScriptRepository"]

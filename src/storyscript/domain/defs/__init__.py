"""Domain definition exports."""

from .script_def import ChoiceDef, SceneDef

__all__ = [
    "ChoiceDef",
    "SceneDef",
]

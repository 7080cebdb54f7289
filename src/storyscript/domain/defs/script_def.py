"""Script definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True, slots=True)
class ChoiceDef:
    """Represents a selectable choice on a scene."""

    text: str
    next_scene_id: str
    condition: str | None = None


@dataclass(frozen=True, slots=True)
class SceneDef:
    """Fully parsed scene.

    ``raw_text`` keeps the authored template, including ``{set ...}``
    directives and ``{var}`` placeholders.
    """

    id: str
    raw_text: str
    choices: Tuple[ChoiceDef, ...] = field(default_factory=tuple)

"""In-memory scene graph built from a loaded script."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping

from storyscript.domain.defs import SceneDef

START_SCENE_ID = "start"


class ScriptGraph:
    """Immutable mapping of scene id to scene definition."""

    def __init__(self, scenes: Mapping[str, SceneDef] | None = None) -> None:
        self._scenes: Dict[str, SceneDef] = dict(scenes or {})

    def get(self, scene_id: str) -> SceneDef | None:
        """Return the scene with the given id, or None."""
        return self._scenes.get(scene_id)

    def has(self, scene_id: str) -> bool:
        return scene_id in self._scenes

    def scene_ids(self) -> list[str]:
        """Return scene ids in document order."""
        return list(self._scenes.keys())

    @property
    def scenes(self) -> Mapping[str, SceneDef]:
        return MappingProxyType(self._scenes)

    @property
    def playable(self) -> bool:
        return START_SCENE_ID in self._scenes

    def __contains__(self, scene_id: object) -> bool:
        return scene_id in self._scenes

    def __iter__(self) -> Iterator[str]:
        return iter(self._scenes)

    def __len__(self) -> int:
        return len(self._scenes)

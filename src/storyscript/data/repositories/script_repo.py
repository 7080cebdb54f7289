"""Repository for story script documents."""
from __future__ import annotations

from typing import Dict, List

from storyscript.data.errors import DataValidationError
from storyscript.data.repositories.base import RepositoryBase
from storyscript.domain.defs import ChoiceDef, SceneDef
from storyscript.domain.script_graph import ScriptGraph


class ScriptRepository(RepositoryBase[ScriptGraph]):
    """Loads script documents and validates their structure.

    Choice targets are not resolved here; a choice may point at a scene that
    does not exist and is only reported when it is followed.
    """

    def _build(self, raw: dict[str, object]) -> ScriptGraph:
        scenes: Dict[str, SceneDef] = {}
        for scene_id, scene_payload in raw.items():
            if not isinstance(scene_id, str):
                raise DataValidationError("Scene ids must be strings.")
            scene_data = self._require_mapping(scene_payload, f"scene '{scene_id}'")
            text = self._require_str(scene_data.get("text"), f"scene '{scene_id}' text")
            choices = self._parse_choices(scene_data.get("choices"), scene_id)
            scenes[scene_id] = SceneDef(id=scene_id, raw_text=text, choices=tuple(choices))
        return ScriptGraph(scenes)

    def _parse_choices(self, raw_choices: object, scene_id: str) -> List[ChoiceDef]:
        if raw_choices is None:
            return []
        if not isinstance(raw_choices, list):
            raise DataValidationError(f"scene '{scene_id}' choices must be a list if provided.")
        choices: List[ChoiceDef] = []
        for index, entry in enumerate(raw_choices):
            choice_ctx = f"scene '{scene_id}' choices[{index}]"
            choice_mapping = self._require_mapping(entry, choice_ctx)
            text = self._require_str(choice_mapping.get("text"), f"{choice_ctx} text")
            next_scene = self._require_str(choice_mapping.get("next"), f"{choice_ctx} next")
            condition = self._require_optional_str(choice_mapping.get("condition"), f"{choice_ctx} condition")
            choices.append(ChoiceDef(text=text, next_scene_id=next_scene, condition=condition))
        return choices

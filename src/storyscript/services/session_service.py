"""Session progression services."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping

from storyscript.core.types import Value
from storyscript.data.repositories import ScriptRepository
from storyscript.domain.conditions import ConditionSyntaxError, evaluate_condition, parse_condition
from storyscript.domain.defs import ChoiceDef, SceneDef
from storyscript.domain.scene_text import process_scene_text
from storyscript.domain.script_graph import START_SCENE_ID, ScriptGraph
from storyscript.domain.state import SessionState
from storyscript.services.diagnostics import (
    INVALID_CHOICE_INDEX,
    INVALID_CONDITION,
    MISSING_SCENE,
    MISSING_START,
    Diagnostic,
    log_diagnostic,
)

logger = logging.getLogger(__name__)

SCENE_NOT_FOUND_TEXT = "Scene not found."


@dataclass(slots=True)
class SceneView:
    """Data returned to the presentation layer for rendering."""

    scene_id: str
    text: str
    choices: List[str]

    @property
    def is_terminal(self) -> bool:
        return not self.choices


@dataclass(slots=True)
class StepResult:
    """Result returned by load, activate and choose."""

    activated: bool = False
    diagnostics: List[Diagnostic] = field(default_factory=list)
    scene_view: SceneView | None = None

    @property
    def ok(self) -> bool:
        return self.activated and not any(diagnostic.is_error for diagnostic in self.diagnostics)


class SessionController:
    """Application service that drives a loaded script graph.

    Each controller owns its own cursor and variables; graphs are immutable
    and may be shared between controllers.
    """

    def __init__(self, script_repo: ScriptRepository | None = None) -> None:
        self._script_repo = script_repo or ScriptRepository()
        self._graph = ScriptGraph()
        self._state = SessionState()

    @property
    def graph(self) -> ScriptGraph:
        return self._graph

    @property
    def variables(self) -> Mapping[str, Value]:
        """Read-only view of the session variables."""
        return MappingProxyType(self._state.variables)

    def load(self, document: Mapping[str, object] | ScriptGraph) -> StepResult:
        """Replace the script graph, reset the session and enter the start scene.

        Structural problems in ``document`` raise DataValidationError before
        anything in the session changes.
        """
        if isinstance(document, ScriptGraph):
            graph = document
        else:
            graph = self._script_repo.load_document(document)
        self._graph = graph
        self._state.reset()
        logger.info("Loaded script with %d scenes", len(graph))
        if not graph.playable:
            diagnostic = Diagnostic(
                severity="ERROR",
                code=MISSING_START,
                message="Script has no start scene.",
                context={"scene_id": START_SCENE_ID},
            )
            log_diagnostic(logger, diagnostic)
            return StepResult(activated=False, diagnostics=[diagnostic])
        return self.activate(START_SCENE_ID)

    def load_path(self, path: Path | str) -> StepResult:
        """Load a script from a JSON file; raises DataError on acquisition failure."""
        return self.load(self._script_repo.load_path(path))

    def restart(self) -> StepResult:
        """Reset variables and return to the start scene of the current graph."""
        return self.load(self._graph)

    def activate(self, scene_id: str) -> StepResult:
        """Make ``scene_id`` current and process its text."""
        scene = self._graph.get(scene_id)
        if scene is None:
            diagnostic = self._missing_scene(scene_id)
            return StepResult(activated=False, diagnostics=[diagnostic])
        self._state.current_scene_id = scene_id
        self._state.scene_text = process_scene_text(scene.raw_text, self._state.variables)
        logger.debug("Entered scene '%s'", scene_id)
        return StepResult(
            activated=True,
            diagnostics=self._condition_diagnostics(scene),
            scene_view=self.get_scene_view(),
        )

    def choose(self, choice_index: int) -> StepResult:
        """Follow the available choice at ``choice_index``."""
        choices = self.get_available_choices()
        if not 0 <= choice_index < len(choices):
            diagnostic = Diagnostic(
                severity="WARN",
                code=INVALID_CHOICE_INDEX,
                message=f"Choice index {choice_index} is out of range.",
                context={"scene_id": self._state.current_scene_id, "choice_count": str(len(choices))},
            )
            log_diagnostic(logger, diagnostic)
            return StepResult(activated=False, diagnostics=[diagnostic])
        return self.activate(choices[choice_index].next_scene_id)

    def get_current_scene_id(self) -> str:
        return self._state.current_scene_id

    def get_scene_text(self) -> str:
        """Return the processed text of the current scene."""
        if self._current_scene() is None or self._state.scene_text is None:
            return SCENE_NOT_FOUND_TEXT
        return self._state.scene_text

    def get_available_choices(self) -> List[ChoiceDef]:
        """Return the current scene's choices whose condition holds, in order."""
        scene = self._current_scene()
        if scene is None:
            return []
        return [
            choice for choice in scene.choices if evaluate_condition(choice.condition, self._state.variables)
        ]

    def get_choice_count(self) -> int:
        return len(self.get_available_choices())

    def get_choice_text(self, choice_index: int) -> str:
        choices = self.get_available_choices()
        if 0 <= choice_index < len(choices):
            return choices[choice_index].text
        return ""

    def get_scene_view(self) -> SceneView:
        """Return the view model for the current scene."""
        return SceneView(
            scene_id=self._state.current_scene_id,
            text=self.get_scene_text(),
            choices=[choice.text for choice in self.get_available_choices()],
        )

    def _current_scene(self) -> SceneDef | None:
        return self._graph.get(self._state.current_scene_id)

    def _missing_scene(self, scene_id: str) -> Diagnostic:
        diagnostic = Diagnostic(
            severity="WARN",
            code=MISSING_SCENE,
            message="Scene not found.",
            context={"scene_id": scene_id, "current_scene_id": self._state.current_scene_id},
        )
        log_diagnostic(logger, diagnostic)
        return diagnostic

    @staticmethod
    def _condition_diagnostics(scene: SceneDef) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        for index, choice in enumerate(scene.choices):
            if not choice.condition:
                continue
            try:
                parse_condition(choice.condition)
            except ConditionSyntaxError as exc:
                diagnostics.append(
                    Diagnostic(
                        severity="WARN",
                        code=INVALID_CONDITION,
                        message=str(exc),
                        context={"scene_id": scene.id, "field_path": f"choices[{index}].condition"},
                    )
                )
        return diagnostics

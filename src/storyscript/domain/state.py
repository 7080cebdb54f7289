"""Domain-level session state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from storyscript.core.types import Value
from storyscript.domain.script_graph import START_SCENE_ID


@dataclass
class SessionState:
    """Cursor and variables for a single play session."""

    current_scene_id: str = START_SCENE_ID
    variables: Dict[str, Value] = field(default_factory=dict)
    scene_text: str | None = None

    def reset(self) -> None:
        """Return to the state of a freshly created session."""
        self.current_scene_id = START_SCENE_ID
        self.variables = {}
        self.scene_text = None

"""Service layer exports."""

from .diagnostics import Diagnostic, format_diagnostic
from .session_service import SceneView, SessionController, StepResult
from .script_validator import validate_script

__all__ = [
    "Diagnostic",
    "format_diagnostic",
    "SceneView",
    "SessionController",
    "StepResult",
    "validate_script",
]

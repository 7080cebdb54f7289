"""Structured, non-fatal reports produced by services."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict

from storyscript.core.types import Severity

MISSING_SCENE = "MISSING_SCENE"
MISSING_START = "MISSING_START"
INVALID_CHOICE_INDEX = "INVALID_CHOICE_INDEX"
INVALID_CONDITION = "INVALID_CONDITION"
MISSING_ENTRY_ROOT = "MISSING_ENTRY_ROOT"
MISSING_SCENE_REF = "MISSING_SCENE_REF"
UNREACHABLE_SCENE = "UNREACHABLE_SCENE"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    code: str
    message: str
    context: Dict[str, str] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.severity == "ERROR"


def format_diagnostic(diagnostic: Diagnostic) -> str:
    context = " ".join(f"{key}={value}" for key, value in diagnostic.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{diagnostic.severity}] {diagnostic.code}: {diagnostic.message}{suffix}"


def log_diagnostic(logger: logging.Logger, diagnostic: Diagnostic) -> None:
    """Emit a diagnostic on ``logger`` at a level matching its severity."""
    level = logging.ERROR if diagnostic.is_error else logging.WARNING
    logger.log(level, format_diagnostic(diagnostic))

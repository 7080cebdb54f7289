"""Shared type aliases for the core and domain layers."""
from typing import Dict, List, Literal, Union

Value = Union[int, float, bool, str, None, List[object], Dict[str, object]]
Severity = Literal["ERROR", "WARN"]
TextDisplayMode = Literal["instant", "step"]

__all__ = ["Severity", "TextDisplayMode", "Value"]

"""Literal parsing and display formatting for script values."""
from __future__ import annotations

import json
import math

from storyscript.core.types import Value


def _reject_constant(name: str) -> float:
    # NaN/Infinity are accepted by the json module but are not JSON literals.
    raise ValueError(f"Non-JSON constant: {name}")


def parse_value(raw: str) -> Value:
    """Parse a JSON literal, falling back to the trimmed raw text.

    Never raises: bare words such as ``Bob`` are valid script values and come
    back as strings.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return raw.strip()


def is_number(value: object) -> bool:
    """Return True for ints and floats, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_value(value: Value) -> str:
    """Render a value the way it is written in script text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)

"""Scene template processing: ``set`` directives and variable interpolation."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Mapping, MutableMapping, Tuple

from storyscript.core.types import Value
from storyscript.core.values import format_value, parse_value

# Value text runs to the first closing brace and never crosses a line break.
_SET_DIRECTIVE_RE = re.compile(r"\{set\s+(\w+)\s*=\s*(.+?)\}", re.ASCII)
_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}", re.ASCII)


@dataclass(frozen=True, slots=True)
class SetDirective:
    """A single ``{set name = value}`` assignment found in a template."""

    name: str
    raw_value: str
    start: int
    end: int

    @property
    def value(self) -> Value:
        return parse_value(self.raw_value)


def scan_directives(template: str) -> List[SetDirective]:
    """Return the set directives of a template in order of appearance."""
    return [
        SetDirective(name=match.group(1), raw_value=match.group(2), start=match.start(), end=match.end())
        for match in _SET_DIRECTIVE_RE.finditer(template)
    ]


def extract_directives(template: str) -> Tuple[str, List[SetDirective]]:
    """Split a template into trimmed display text and its directives."""
    directives = scan_directives(template)
    pieces: List[str] = []
    cursor = 0
    for directive in directives:
        pieces.append(template[cursor : directive.start])
        cursor = directive.end
    pieces.append(template[cursor:])
    return "".join(pieces).strip(), directives


def apply_directives(directives: List[SetDirective], variables: MutableMapping[str, Value]) -> None:
    """Assign every directive to ``variables`` left to right."""
    for directive in directives:
        variables[directive.name] = directive.value


def interpolate(text: str, variables: Mapping[str, Value]) -> str:
    """Replace ``{name}`` placeholders with known variable values.

    Placeholders for names that were never set are left untouched.
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in variables:
            return format_value(variables[name])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_substitute, text)


def process_scene_text(template: str, variables: MutableMapping[str, Value]) -> str:
    """Apply a template's directives to ``variables`` and return display text."""
    text, directives = extract_directives(template)
    apply_directives(directives, variables)
    return interpolate(text, variables)

"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Sequence

from storyscript.core.types import TextDisplayMode

_TEXT_WIDTH = 78
_text_display_mode: TextDisplayMode = "instant"


def debug_enabled() -> bool:
    """Return True only when STORYSCRIPT_DEBUG is explicitly set to '1'."""
    return os.getenv("STORYSCRIPT_DEBUG") == "1"


def set_text_display_mode(mode: TextDisplayMode) -> None:
    """Select between printing scene text at once or paragraph by paragraph."""
    global _text_display_mode
    _text_display_mode = "step" if mode == "step" else "instant"


def wrap_text(text: str, width: int = _TEXT_WIDTH) -> list[str]:
    """
    Wrap text to a fixed width, keeping the author's own line breaks.

    Args:
        text: The text to wrap
        width: Maximum width per line

    Returns:
        List of wrapped lines; blank source lines are preserved
    """
    if not text or width <= 0:
        return [text] if text else [""]
    lines: list[str] = []
    for source_line in text.split("\n"):
        if not source_line.strip():
            lines.append("")
            continue
        lines.extend(
            textwrap.wrap(
                source_line,
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return lines


def split_paragraphs(text: str) -> list[str]:
    """Split scene text on blank lines."""
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.split("\n"):
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append("\n".join(current))
            current = []
    if current:
        paragraphs.append("\n".join(current))
    return paragraphs


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_scene(scene_id: str, text: str) -> None:
    """Render scene text, pausing between paragraphs in step mode."""
    if debug_enabled():
        print(f"[{scene_id}]")
    paragraphs = split_paragraphs(text) or [text]
    for idx, paragraph in enumerate(paragraphs):
        for line in wrap_text(paragraph):
            print(line)
        if idx < len(paragraphs) - 1:
            if _text_display_mode == "step":
                input("")
            else:
                print()


def render_choices(choices: Sequence[str]) -> None:
    """Display numbered story choices."""
    if not choices:
        return
    print()
    for idx, label in enumerate(choices, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Sequence[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")

"""Console-driven UI loops for storyscript."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from storyscript.data import DataError, get_default_script_path
from storyscript.data.repositories import ScriptRepository
from storyscript.presentation.cli import config
from storyscript.presentation.cli.render import (
    debug_enabled,
    render_bullet_lines,
    render_choices,
    render_heading,
    render_scene,
    set_text_display_mode,
)
from storyscript.services import Diagnostic, SessionController, format_diagnostic, validate_script

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the selected command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = config.load_config(args.config)
    _configure_logging(settings["log_level"])
    set_text_display_mode(settings["text_display_mode"])
    command = args.command or "play"
    if command == "validate":
        return _validate_command(args.script)
    if command == "config":
        return _config_command(args, settings)
    return _play_command(getattr(args, "script", None))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storyscript", description="Play branching story scripts.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a config file.")
    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play a story script.")
    play.add_argument("script", nargs="?", type=Path, default=None)

    validate = subparsers.add_parser("validate", help="Check a script for broken references.")
    validate.add_argument("script", type=Path)

    options = subparsers.add_parser("config", help="Show or change player options.")
    options.add_argument("--text-mode", choices=["instant", "step"], default=None)
    options.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None)
    return parser


def _configure_logging(level_name: str) -> None:
    level = logging.DEBUG if debug_enabled() else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _play_command(script_path: Path | None) -> int:
    path = script_path or get_default_script_path()
    logger.debug("Loading script from %s", path)
    controller = SessionController()
    try:
        result = controller.load_path(path)
    except DataError as exc:
        print(f"Could not load script: {exc}")
        return 1
    if not result.ok:
        _render_diagnostics(result.diagnostics)
        return 1
    _run_story_loop(controller)
    print("Goodbye!")
    return 0


def _validate_command(script_path: Path) -> int:
    try:
        graph = ScriptRepository().load_path(script_path)
    except DataError as exc:
        print(f"Could not load script: {exc}")
        return 1
    issues = validate_script(graph)
    if not issues:
        print(f"{script_path}: OK ({len(graph)} scenes)")
        return 0
    render_heading("Issues")
    render_bullet_lines([format_diagnostic(issue) for issue in issues])
    return 1 if any(issue.is_error for issue in issues) else 0


def _config_command(args: argparse.Namespace, settings: dict[str, str]) -> int:
    changed = False
    if args.text_mode is not None:
        settings["text_display_mode"] = args.text_mode
        changed = True
    if args.log_level is not None:
        settings["log_level"] = args.log_level
        changed = True
    if changed:
        config.save_config(settings, args.config)
    render_heading("Options")
    render_bullet_lines([f"{key}: {value}" for key, value in sorted(settings.items())])
    return 0


def _run_story_loop(controller: SessionController) -> None:
    """Play until the reader quits or reaches an ending and declines a restart."""
    while True:
        view = controller.get_scene_view()
        render_scene(view.scene_id, view.text)
        if view.is_terminal:
            print("\nThe End.")
            if not _prompt_restart():
                return
            controller.restart()
            continue
        render_choices(view.choices)
        choice_index = _prompt_choice(len(view.choices))
        if choice_index is None:
            return
        result = controller.choose(choice_index)
        if not result.activated:
            _render_diagnostics(result.diagnostics)
        print()


def _prompt_choice(choice_count: int) -> int | None:
    while True:
        try:
            raw = input(f"\nChoose an action (1-{choice_count}): ").strip()
        except EOFError:
            return None
        if not raw:
            print("Please enter a number.")
            continue
        try:
            index = int(raw) - 1
        except ValueError:
            print(f"Please enter a value between 1 and {choice_count}.")
            continue
        if 0 <= index < choice_count:
            return index
        print(f"Please enter a value between 1 and {choice_count}.")


def _prompt_restart() -> bool:
    while True:
        try:
            raw = input("Play again? (y/n): ").strip().lower()
        except EOFError:
            return False
        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no", ""):
            return False
        print("Please answer y or n.")


def _render_diagnostics(diagnostics: List[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        print(format_diagnostic(diagnostic))

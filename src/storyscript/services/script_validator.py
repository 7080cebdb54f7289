"""Static script graph validation utilities."""
from __future__ import annotations

from typing import Iterable, Mapping

from storyscript.domain.conditions import ConditionSyntaxError, parse_condition
from storyscript.domain.defs import SceneDef
from storyscript.domain.script_graph import START_SCENE_ID, ScriptGraph
from storyscript.services.diagnostics import (
    INVALID_CONDITION,
    MISSING_ENTRY_ROOT,
    MISSING_SCENE_REF,
    UNREACHABLE_SCENE,
    Diagnostic,
)


def validate_script(
    graph: ScriptGraph | Mapping[str, SceneDef],
    entry_roots: Iterable[str] = (START_SCENE_ID,),
) -> list[Diagnostic]:
    """Report broken references, bad conditions and unreachable scenes.

    Reachability follows every choice regardless of its condition.
    """
    scenes = dict(graph.scenes) if isinstance(graph, ScriptGraph) else dict(graph)
    issues: list[Diagnostic] = []
    roots = list(entry_roots)

    for root in roots:
        if root not in scenes:
            issues.append(
                Diagnostic(
                    severity="ERROR",
                    code=MISSING_ENTRY_ROOT,
                    message="Entry root references missing scene.",
                    context={"referenced_id": root},
                )
            )

    for scene in scenes.values():
        _validate_choices(scene, scenes, issues)

    _validate_reachability(scenes, roots, issues)
    return issues


def _validate_choices(scene: SceneDef, scenes: Mapping[str, SceneDef], issues: list[Diagnostic]) -> None:
    for index, choice in enumerate(scene.choices):
        if choice.next_scene_id not in scenes:
            issues.append(
                Diagnostic(
                    severity="ERROR",
                    code=MISSING_SCENE_REF,
                    message="Choice references missing scene.",
                    context={
                        "scene_id": scene.id,
                        "field_path": f"choices[{index}].next",
                        "referenced_id": choice.next_scene_id,
                    },
                )
            )
        if choice.condition:
            try:
                parse_condition(choice.condition)
            except ConditionSyntaxError:
                issues.append(
                    Diagnostic(
                        severity="ERROR",
                        code=INVALID_CONDITION,
                        message="Condition has no recognized operator.",
                        context={
                            "scene_id": scene.id,
                            "field_path": f"choices[{index}].condition",
                            "condition": choice.condition,
                        },
                    )
                )


def _validate_reachability(
    scenes: Mapping[str, SceneDef],
    entry_roots: list[str],
    issues: list[Diagnostic],
) -> None:
    reachable: set[str] = set()
    stack: list[str] = [root for root in entry_roots if root in scenes]
    while stack:
        scene_id = stack.pop()
        if scene_id in reachable:
            continue
        reachable.add(scene_id)
        for choice in scenes[scene_id].choices:
            if choice.next_scene_id in scenes:
                stack.append(choice.next_scene_id)
    for scene_id in sorted(set(scenes) - reachable):
        issues.append(
            Diagnostic(
                severity="WARN",
                code=UNREACHABLE_SCENE,
                message="Scene is unreachable from entry roots.",
                context={"scene_id": scene_id},
            )
        )

import logging

import pytest

from storyscript.data.errors import DataValidationError
from storyscript.services.diagnostics import (
    INVALID_CHOICE_INDEX,
    INVALID_CONDITION,
    MISSING_SCENE,
    MISSING_START,
)
from storyscript.services.session_service import SCENE_NOT_FOUND_TEXT, SessionController

_SCRIPT = {
    "start": {
        "text": "{set score = 0}{set name = Bob}Welcome, {name}.",
        "choices": [
            {"text": "Train", "next": "training"},
            {"text": "Enter the arena", "next": "arena", "condition": "score >= 10"},
            {"text": "Leave", "next": "gone"},
        ],
    },
    "training": {
        "text": "{set score = 12}You train hard. Score: {score}",
        "choices": [
            {"text": "Back", "next": "start_again"},
            {"text": "Enter the arena", "next": "arena", "condition": "score >= 10"},
        ],
    },
    "arena": {
        "text": "The crowd roars for {name}.",
        "choices": [
            {"text": "Claim the prize", "next": "prize", "condition": "champion == true"},
        ],
    },
    "prize": {"text": "Gold!", "choices": []},
}


def _make_session() -> SessionController:
    session = SessionController()
    result = session.load(_SCRIPT)
    assert result.ok
    return session


def test_load_activates_start_scene() -> None:
    session = _make_session()

    assert session.get_current_scene_id() == "start"
    assert session.get_scene_text() == "Welcome, Bob."
    assert dict(session.variables) == {"score": 0, "name": "Bob"}


def test_condition_free_scene_lists_choices_in_order() -> None:
    session = SessionController()
    session.load(
        {
            "start": {
                "text": "Pick",
                "choices": [
                    {"text": "A", "next": "start"},
                    {"text": "B", "next": "start"},
                    {"text": "C", "next": "start"},
                ],
            }
        }
    )
    assert [choice.text for choice in session.get_available_choices()] == ["A", "B", "C"]
    assert session.get_choice_count() == 3


def test_conditions_filter_choices_and_indices_follow_filtered_list() -> None:
    session = _make_session()
    assert [choice.text for choice in session.get_available_choices()] == ["Train", "Leave"]
    assert session.get_choice_text(1) == "Leave"
    assert session.get_choice_text(5) == ""

    result = session.choose(0)
    assert result.activated
    assert session.get_current_scene_id() == "training"
    assert session.get_scene_text() == "You train hard. Score: 12"
    assert session.get_choice_text(1) == "Enter the arena"

    session.choose(1)
    assert session.get_current_scene_id() == "arena"
    assert session.get_scene_text() == "The crowd roars for Bob."


def test_scene_with_all_choices_filtered_is_terminal() -> None:
    session = _make_session()
    session.activate("arena")

    assert session.get_choice_count() == 0
    assert session.get_scene_view().is_terminal


@pytest.mark.parametrize("index", [-1, 2, 99])
def test_out_of_range_choice_leaves_cursor_unchanged(index: int) -> None:
    session = _make_session()
    result = session.choose(index)

    assert not result.activated
    assert [d.code for d in result.diagnostics] == [INVALID_CHOICE_INDEX]
    assert session.get_current_scene_id() == "start"


def test_choice_to_missing_scene_stays_put(caplog) -> None:
    session = _make_session()
    with caplog.at_level(logging.WARNING):
        result = session.choose(1)

    assert not result.activated
    assert [d.code for d in result.diagnostics] == [MISSING_SCENE]
    assert result.diagnostics[0].context["scene_id"] == "gone"
    assert session.get_current_scene_id() == "start"
    assert "MISSING_SCENE" in caplog.text


def test_activating_unknown_scene_changes_nothing() -> None:
    session = _make_session()
    before = dict(session.variables)
    result = session.activate("nowhere")

    assert not result.activated
    assert result.diagnostics[0].code == MISSING_SCENE
    assert session.get_current_scene_id() == "start"
    assert dict(session.variables) == before
    assert session.get_scene_text() == "Welcome, Bob."


def test_reload_replaces_graph_and_resets_state() -> None:
    session = _make_session()
    session.choose(0)
    assert session.variables["score"] == 12

    result = session.load({"start": {"text": "Score is {score}", "choices": [{"text": "Loop", "next": "start"}]}})

    assert result.ok
    assert session.get_scene_text() == "Score is {score}"
    assert dict(session.variables) == {}
    assert session.activate("training").activated is False


def test_load_without_start_reports_missing_start() -> None:
    session = _make_session()
    result = session.load({"intro": {"text": "Hi", "choices": []}})

    assert not result.ok
    assert [d.code for d in result.diagnostics] == [MISSING_START]
    assert session.get_scene_text() == SCENE_NOT_FOUND_TEXT
    assert session.get_choice_count() == 0
    assert session.activate("intro").activated


def test_invalid_document_does_not_touch_session() -> None:
    session = _make_session()
    session.choose(0)

    with pytest.raises(DataValidationError):
        session.load({"start": {"text": 42}})

    assert session.get_current_scene_id() == "training"
    assert session.variables["score"] == 12


def test_invalid_condition_hides_choice_and_is_reported() -> None:
    session = SessionController()
    result = session.load(
        {
            "start": {
                "text": "Door",
                "choices": [
                    {"text": "Open", "next": "start", "condition": "hasKey"},
                    {"text": "Knock", "next": "start"},
                ],
            }
        }
    )

    assert result.ok
    assert [d.code for d in result.diagnostics] == [INVALID_CONDITION]
    assert [choice.text for choice in session.get_available_choices()] == ["Knock"]


def test_restart_resets_variables() -> None:
    session = _make_session()
    session.choose(0)
    session.restart()

    assert session.get_current_scene_id() == "start"
    assert session.variables["score"] == 0


def test_sessions_do_not_share_state() -> None:
    first = _make_session()
    second = SessionController()
    second.load(first.graph)
    first.choose(0)

    assert first.variables["score"] == 12
    assert second.variables["score"] == 0
    assert second.get_current_scene_id() == "start"


def test_choice_text_is_not_interpolated() -> None:
    session = SessionController()
    session.load({"start": {"text": "{set n = 3}", "choices": [{"text": "Take {n}", "next": "start"}]}})
    assert session.get_choice_text(0) == "Take {n}"


def test_whitespace_condition_hides_choice_and_is_reported() -> None:
    session = SessionController()
    result = session.load(
        {
            "start": {
                "text": "Gate",
                "choices": [
                    {"text": "Blank", "next": "start", "condition": "   "},
                    {"text": "Empty", "next": "start", "condition": ""},
                ],
            }
        }
    )

    assert [d.code for d in result.diagnostics] == [INVALID_CONDITION]
    assert [choice.text for choice in session.get_available_choices()] == ["Empty"]


def test_huge_integer_variable_is_compared_without_error() -> None:
    session = SessionController()
    session.load(
        {
            "start": {
                "text": "{set big = 1" + "0" * 400 + "}",
                "choices": [{"text": "Rich", "next": "start", "condition": "big > 1"}],
            }
        }
    )
    assert session.get_choice_count() == 1


def test_deeply_nested_set_value_is_stored_as_text() -> None:
    session = SessionController()
    raw = "[" * 100000
    result = session.load({"start": {"text": "{set x = " + raw + "}Done", "choices": []}})

    assert result.ok
    assert session.variables["x"] == raw
    assert session.get_scene_text() == "Done"

from pathlib import Path

from storyscript.presentation.cli import config


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "absent.json") == {
        "text_display_mode": "instant",
        "log_level": "WARNING",
    }


def test_load_config_defaults_when_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[not json", encoding="utf-8")
    assert config.load_config(path)["text_display_mode"] == "instant"


def test_save_and_load_round_trip_normalizes_values(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    config.save_config({"text_display_mode": "step", "log_level": "debug"}, path)

    assert config.load_config(path) == {"text_display_mode": "step", "log_level": "DEBUG"}


def test_unknown_values_fall_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"text_display_mode": "slow", "log_level": "LOUD"}', encoding="utf-8")

    assert config.load_config(path) == {"text_display_mode": "instant", "log_level": "WARNING"}

"""Tests for configuration resolution."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from kanzi.application.config import AppConfig, resolve_config


def test_defaults(mock_home):
    config = resolve_config()

    assert config.state_file == mock_home / ".config/kanzi/state.json"
    assert config.catalog_file is None
    assert config.selected_grade == 1
    assert config.box_intervals_days == (0, 1, 3, 7, 14, 30)
    assert config.mastery_threshold == 4
    assert config.queue_size == 15


def test_none_overrides_are_ignored(mock_home):
    config = resolve_config({"selected_grade": None, "queue_size": 5})
    assert config.selected_grade == 1
    assert config.queue_size == 5


def test_env_vars(mock_home, monkeypatch):
    monkeypatch.setenv("KANZI_SELECTED_GRADE", "3")
    monkeypatch.setenv("KANZI_BOX_INTERVALS_DAYS", "[0, 2, 4]")
    monkeypatch.setenv("KANZI_MASTERY_THRESHOLD", "2")

    config = resolve_config()

    assert config.selected_grade == 3
    assert config.box_intervals_days == (0, 2, 4)


def test_toml_file(mock_home):
    cfg = mock_home / ".config/kanzi/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('selected_grade = 2\nstate_file = "~/kanji-state.json"\n', encoding="utf-8")

    config = resolve_config()

    assert config.selected_grade == 2
    assert config.state_file == (mock_home / "kanji-state.json").resolve()


def test_cli_overrides_beat_env(mock_home, monkeypatch):
    monkeypatch.setenv("KANZI_SELECTED_GRADE", "3")
    assert resolve_config({"selected_grade": 5}).selected_grade == 5


@pytest.mark.parametrize(
    "overrides",
    [
        {"selected_grade": 7},
        {"box_intervals_days": ()},
        {"box_intervals_days": (0, -1)},
        {"box_intervals_days": (0, 7, 3)},
        {"mastery_threshold": 6},
        {"queue_size": 0},
    ],
)
def test_invalid_values(mock_home, overrides):
    with pytest.raises(ValidationError):
        AppConfig(**overrides)


def test_path_strings_are_resolved(mock_home, tmp_path):
    config = AppConfig(state_file=str(tmp_path / "s.json"), catalog_file="")
    assert config.state_file == Path(tmp_path / "s.json").resolve()
    assert config.catalog_file is None

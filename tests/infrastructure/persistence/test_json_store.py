"""Tests for JSON state persistence."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from kanzi.application.mistakes import MistakeAggregator
from kanzi.application.score import SessionScoreTracker
from kanzi.application.srs import SrsScheduler
from kanzi.domain.errors import StateLoadError
from kanzi.domain.models import MistakeEntry
from kanzi.infrastructure.persistence import (
    JsonStateRepository,
    StateSnapshot,
    restore_mistakes,
    restore_state,
    snapshot_from,
)


def test_missing_file_loads_empty_snapshot(tmp_path):
    snapshot = JsonStateRepository(tmp_path / "state.json").load()

    assert snapshot.cards == {}
    assert snapshot.mistake_pool.external == []
    assert snapshot.mistake_pool.drill == []
    assert snapshot.max_streak == 0


def test_save_and_load_restores_state(tmp_path, scheduler, small_catalog, now):
    scheduler.seed(["水", "火"])
    scheduler.record_result("水", True)
    scheduler.record_result("火", False)
    aggregator = MistakeAggregator(small_catalog)
    aggregator.add_external_mistakes(["界"], 3)
    aggregator.add_drill_mistake("火")
    tracker = SessionScoreTracker()
    tracker.record_answer(True)

    repo = JsonStateRepository(tmp_path / "nested" / "state.json")
    repo.save(snapshot_from(scheduler.state, aggregator, tracker))
    loaded = repo.load()

    state = restore_state(loaded, scheduler.intervals_days)
    assert list(state) == list(scheduler.state)
    assert state.get("水").next_review_at == now + timedelta(days=1)
    assert state.get("火").incorrect_count == 1
    assert restore_mistakes(loaded) == ([MistakeEntry("界", 3)], ["火"])
    assert loaded.max_streak == 1


def test_save_writes_utf8_json_and_no_temp_files(tmp_path):
    path = tmp_path / "state.json"
    snapshot = StateSnapshot.model_validate({"mistake_pool": {"drill": ["水"]}})

    JsonStateRepository(path).save(snapshot)

    assert "水" in path.read_text(encoding="utf-8")
    assert [p.name for p in tmp_path.iterdir()] == ["state.json"]


def test_missing_fields_take_defaults(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "cards": {"水": {"next_review_at": "2024-04-08T09:00:00"}},
                "mistake_pool": {"external": ["界", {"character": "視"}]},
            }
        ),
        encoding="utf-8",
    )

    snapshot = JsonStateRepository(path).load()

    assert snapshot.max_streak == 0
    assert snapshot.mistake_pool.drill == []
    external, _ = restore_mistakes(snapshot)
    assert external == [MistakeEntry("界", None), MistakeEntry("視", None)]

    card = restore_state(snapshot).get("水")
    assert card.box_level == 0
    assert card.last_reviewed_at is None
    assert card.next_review_at == datetime(2024, 4, 8, 9, 0, tzinfo=timezone.utc)


def test_missing_next_review_is_derived_from_box_level(now):
    last = now - timedelta(days=10)
    snapshot = StateSnapshot.model_validate(
        {
            "cards": {
                "水": {"box_level": 3, "last_reviewed_at": last.isoformat()},
                "火": {"box_level": 2},
            }
        }
    )

    state = restore_state(snapshot, now=now)

    assert state.get("水").next_review_at == last + timedelta(days=7)
    assert state.get("火").next_review_at == now
    scheduler = SrsScheduler(state=state, clock=lambda: now)
    assert [c.character for c in scheduler.get_due_cards()] == ["水", "火"]


def test_state_file_without_next_review_loads(tmp_path, now):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"cards": {"水": {"box_level": 1}}}), encoding="utf-8")

    snapshot = JsonStateRepository(path).load()

    assert restore_state(snapshot, now=now).get("水").next_review_at == now


def test_box_level_is_clamped_to_table(tmp_path):
    snapshot = StateSnapshot.model_validate(
        {"cards": {"水": {"box_level": 9, "next_review_at": "2024-04-08T09:00:00Z"}}}
    )
    state = restore_state(snapshot)
    assert state.get("水").box_level == 5


def test_restored_state_keeps_scheduling(tmp_path, now):
    snapshot = StateSnapshot.model_validate(
        {"cards": {"水": {"box_level": 2, "next_review_at": now.isoformat()}}}
    )
    scheduler = SrsScheduler(state=restore_state(snapshot), clock=lambda: now)

    card = scheduler.record_result("水", True)

    assert card.box_level == 3
    assert card.next_review_at == now + timedelta(days=7)


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"cards": {"水": {"box_level": "high"}}}),
        json.dumps({"max_streak": -1}),
    ],
)
def test_invalid_files_raise(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StateLoadError):
        JsonStateRepository(path).load()

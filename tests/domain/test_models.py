"""Tests for domain models."""

from datetime import timedelta

from conftest import make_item

from kanzi.domain.errors import UnknownCardError
from kanzi.domain.models import ReviewCard, ReviewState, SessionScore


def test_primary_reading_prefers_on_reading():
    assert make_item("水", on=["スイ"], kun=["みず"]).primary_reading == "スイ"
    assert make_item("畑", kun=["はた"]).primary_reading == "はた"
    assert make_item("〇").primary_reading is None


def test_card_is_due_at_boundary(now):
    card = ReviewCard(character="水", box_level=1, next_review_at=now)
    assert card.is_due(now)
    assert not card.is_due(now - timedelta(seconds=1))


def test_evolve_returns_new_card(now):
    card = ReviewCard(character="水", box_level=1, next_review_at=now)
    promoted = card.evolve(box_level=2)
    assert card.box_level == 1
    assert promoted.box_level == 2
    assert promoted.character == "水"


def test_review_state_keeps_insertion_order(now):
    state = ReviewState()
    for character in "山川水":
        state.put(ReviewCard(character=character, box_level=0, next_review_at=now))
    state.put(ReviewCard(character="川", box_level=3, next_review_at=now))

    assert [c.character for c in state] == ["山", "川", "水"]
    assert state.get("川").box_level == 3
    assert "水" in state
    assert len(state) == 3


def test_session_score_derived_fields():
    score = SessionScore(correct=3, total=4)
    assert score.incorrect == 1
    assert score.accuracy == 0.75


def test_unknown_card_error_message():
    err = UnknownCardError("視")
    assert "視" in str(err)
    assert isinstance(err, KeyError)

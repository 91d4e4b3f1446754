"""
Serialized shape of the review state.

Every field has a default so older or partial files still load:
a missing ``target_grade`` is None, a missing ``max_streak`` is 0, and a
missing ``next_review_at`` is derived from the box level on restore.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, field_validator

from kanzi.application.mistakes import MistakeAggregator
from kanzi.application.score import SessionScoreTracker
from kanzi.domain.constants import BOX_INTERVALS_DAYS
from kanzi.domain.models import MistakeEntry, ReviewCard, ReviewState


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CardRecord(BaseModel):
    box_level: int = Field(default=0, ge=0)
    last_reviewed_at: datetime | None = None
    next_review_at: datetime | None = None
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)


class MistakeRecord(BaseModel):
    character: str
    target_grade: int | None = None


class MistakePoolRecord(BaseModel):
    external: list[MistakeRecord] = Field(default_factory=list)
    drill: list[str] = Field(default_factory=list)

    @field_validator("external", mode="before")
    @classmethod
    def accept_bare_characters(cls, v):
        if not isinstance(v, list):
            return v
        return [{"character": e} if isinstance(e, str) else e for e in v]


class StateSnapshot(BaseModel):
    cards: dict[str, CardRecord] = Field(default_factory=dict)
    mistake_pool: MistakePoolRecord = Field(default_factory=MistakePoolRecord)
    max_streak: int = Field(default=0, ge=0)


def snapshot_from(
    state: ReviewState,
    aggregator: MistakeAggregator,
    tracker: SessionScoreTracker,
) -> StateSnapshot:
    """Capture the live objects as a snapshot."""
    return StateSnapshot(
        cards={
            card.character: CardRecord(
                box_level=card.box_level,
                last_reviewed_at=card.last_reviewed_at,
                next_review_at=card.next_review_at,
                correct_count=card.correct_count,
                incorrect_count=card.incorrect_count,
            )
            for card in state
        },
        mistake_pool=MistakePoolRecord(
            external=[
                MistakeRecord(character=e.character, target_grade=e.target_grade)
                for e in aggregator.external_mistakes
            ],
            drill=aggregator.drill_mistakes,
        ),
        max_streak=tracker.streak.max,
    )


def restore_state(
    snapshot: StateSnapshot,
    intervals_days: Sequence[int] = BOX_INTERVALS_DAYS,
    now: datetime | None = None,
) -> ReviewState:
    """
    Rebuild the card table.

    Box levels outside the interval table are clamped. A card without
    ``next_review_at`` is due one interval after its last review, or at
    ``now`` if it was never reviewed.
    """
    max_box_level = len(intervals_days) - 1
    now = now or datetime.now(timezone.utc)
    state = ReviewState()
    for character, record in snapshot.cards.items():
        level = min(record.box_level, max_box_level)
        last = _aware(record.last_reviewed_at) if record.last_reviewed_at else None
        if record.next_review_at is not None:
            next_review_at = _aware(record.next_review_at)
        elif last is not None:
            next_review_at = last + timedelta(days=intervals_days[level])
        else:
            next_review_at = now

        state.put(
            ReviewCard(
                character=character,
                box_level=level,
                last_reviewed_at=last,
                next_review_at=next_review_at,
                correct_count=record.correct_count,
                incorrect_count=record.incorrect_count,
            )
        )
    return state


def restore_mistakes(snapshot: StateSnapshot) -> tuple[list[MistakeEntry], list[str]]:
    external = [
        MistakeEntry(character=r.character, target_grade=r.target_grade)
        for r in snapshot.mistake_pool.external
    ]
    return external, list(snapshot.mistake_pool.drill)

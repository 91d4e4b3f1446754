"""
Domain models for kanji review.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class KanjiItem:
    """
    One entry of the kanji reference catalog.

    Attributes:
        character: The kanji itself (a single CJK ideograph).
        on_readings: Sino-Japanese readings, in katakana.
        kun_readings: Native readings, in hiragana.
        meaning: Short meaning shown to the learner.
        radical: The radical (bushu) the character is indexed under.
        stroke_count: Number of strokes.
        grade: School grade (1-6) the character is taught in, None if unknown.
    """

    character: str
    on_readings: tuple[str, ...] = ()
    kun_readings: tuple[str, ...] = ()
    meaning: str = ""
    radical: str = ""
    stroke_count: int = 0
    grade: int | None = None

    @property
    def primary_reading(self) -> str | None:
        readings = [*self.on_readings, *self.kun_readings]
        return readings[0] if readings else None


@dataclass(frozen=True)
class ReviewCard:
    """
    Leitner review state for one character.

    A card is due when ``now >= next_review_at``. Cards are immutable; the
    scheduler swaps in a new card on every verdict.
    """

    character: str
    box_level: int
    next_review_at: datetime
    last_reviewed_at: datetime | None = None  # None = never reviewed
    correct_count: int = 0
    incorrect_count: int = 0

    @property
    def review_count(self) -> int:
        return self.correct_count + self.incorrect_count

    def is_due(self, now: datetime) -> bool:
        return self.next_review_at <= now

    def evolve(self, **changes) -> "ReviewCard":
        return replace(self, **changes)


@dataclass(frozen=True)
class MistakeEntry:
    """An externally reported mistake, e.g. from a graded school test."""

    character: str
    target_grade: int | None = None


@dataclass
class SessionScore:
    """Correct/total tally for the current session."""

    correct: int = 0
    total: int = 0

    @property
    def incorrect(self) -> int:
        return self.total - self.correct

    @property
    def accuracy(self) -> float | None:
        if self.total == 0:
            return None
        return self.correct / self.total


@dataclass
class Streak:
    """Consecutive correct answers; ``max`` is a lifetime high-water mark."""

    current: int = 0
    max: int = 0


@dataclass
class ReviewState:
    """
    In-memory table of review cards keyed by character.

    Iteration follows insertion order, which is the order characters were
    first introduced.
    """

    cards: dict[str, ReviewCard] = field(default_factory=dict)

    def __contains__(self, character: object) -> bool:
        return character in self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards.values())

    def get(self, character: str) -> ReviewCard | None:
        return self.cards.get(character)

    def put(self, card: ReviewCard) -> None:
        self.cards[card.character] = card

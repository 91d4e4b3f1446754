"""
Leitner-box scheduler.

Decides which cards are due and moves cards between boxes in response to
answer verdicts. This is a pure computation module with no I/O.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timedelta, timezone

from kanzi.domain.constants import BOX_INTERVALS_DAYS, MASTERY_THRESHOLD
from kanzi.domain.errors import DuplicateCardError, UnknownCardError
from kanzi.domain.models import ReviewCard, ReviewState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half-up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


class SrsScheduler:
    """
    Leitner scheduler over an owned ReviewState.

    A correct answer promotes a card one box (saturating at the top box);
    an incorrect answer sends it back to box 0 no matter how high it was.
    The next review time is always ``now + intervals[box_level]`` days.
    """

    def __init__(
        self,
        state: ReviewState | None = None,
        intervals_days: Sequence[int] = BOX_INTERVALS_DAYS,
        mastery_threshold: int = MASTERY_THRESHOLD,
        clock: Clock = utc_now,
    ):
        """
        Args:
            state: Review state to own; a fresh empty one if not provided.
            intervals_days: Review interval per box level, in days.
            mastery_threshold: Box level at or above which a card counts as mastered.
            clock: Source of "now" when a call does not pass one explicitly.
        """
        if not intervals_days:
            raise ValueError("intervals_days must not be empty")
        if any(d < 0 for d in intervals_days):
            raise ValueError("intervals_days must not contain negative intervals")
        if not 0 <= mastery_threshold < len(intervals_days):
            raise ValueError(
                f"mastery_threshold must be between 0 and {len(intervals_days) - 1}"
            )

        self.state = state if state is not None else ReviewState()
        self.intervals_days = tuple(intervals_days)
        self.mastery_threshold = mastery_threshold
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def max_box_level(self) -> int:
        return len(self.intervals_days) - 1

    def now(self) -> datetime:
        return self._clock()

    def next_review_time(self, box_level: int, now: datetime) -> datetime:
        level = min(max(box_level, 0), self.max_box_level)
        return now + timedelta(days=self.intervals_days[level])

    # ---------- Card lifecycle ----------

    def create_card(self, character: str, now: datetime | None = None) -> ReviewCard:
        """
        Introduce a new character at box 0, due immediately.

        Raises:
            DuplicateCardError: If the character already has a card.
        """
        now = now or self.now()
        with self._lock:
            if character in self.state:
                raise DuplicateCardError(character)
            card = ReviewCard(character=character, box_level=0, next_review_at=now)
            self.state.put(card)
        logger.debug(f"Created card for {character}")
        return card

    def seed(self, characters: Iterable[str], now: datetime | None = None) -> list[ReviewCard]:
        """
        Make sure every character has a card, creating missing ones.

        Existing cards are returned untouched. Output follows input order.
        """
        now = now or self.now()
        cards: list[ReviewCard] = []
        for character in characters:
            card = self.state.get(character)
            if card is None:
                card = self.create_card(character, now)
            cards.append(card)
        return cards

    # ---------- Verdicts ----------

    def record_result(
        self, character: str, is_correct: bool, now: datetime | None = None
    ) -> ReviewCard:
        """
        Apply one answer verdict to a card.

        Raises:
            UnknownCardError: If the character was never seeded.
        """
        now = now or self.now()
        with self._lock:
            card = self.state.get(character)
            if card is None:
                raise UnknownCardError(character)

            if is_correct:
                new_level = min(card.box_level + 1, self.max_box_level)
            else:
                new_level = 0

            updated = card.evolve(
                box_level=new_level,
                last_reviewed_at=now,
                next_review_at=self.next_review_time(new_level, now),
                correct_count=card.correct_count + (1 if is_correct else 0),
                incorrect_count=card.incorrect_count + (0 if is_correct else 1),
            )
            self.state.put(updated)

        logger.debug(
            f"{character}: {'correct' if is_correct else 'incorrect'}, "
            f"box {card.box_level} -> {new_level}"
        )
        return updated

    # ---------- Queries ----------

    def get_due_cards(
        self, cards: Iterable[ReviewCard] | None = None, now: datetime | None = None
    ) -> list[ReviewCard]:
        """
        Return the cards whose next review time has passed.

        Keeps the order of ``cards`` (the state's insertion order by default),
        so repeated calls on unchanged input return identical lists.
        """
        now = now or self.now()
        source = self.state if cards is None else cards
        return [card for card in source if card.is_due(now)]

    def get_mastery_percentage(self, cards: Iterable[ReviewCard] | None = None) -> int:
        """Percentage (0-100) of cards at or above the mastery threshold."""
        source = list(self.state if cards is None else cards)
        mastered = sum(1 for card in source if card.box_level >= self.mastery_threshold)
        return percentage(mastered, len(source))

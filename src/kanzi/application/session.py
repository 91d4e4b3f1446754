"""
Drill session: Application layer orchestrator.

Walks a queue of kanji, checks answers, and feeds every verdict into the
scheduler, the score tracker and the mistake pool.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from kanzi.application.mistakes import MistakeAggregator
from kanzi.application.queue_builder import QuestionMode, correct_answer, generate_choices
from kanzi.application.score import SessionScoreTracker
from kanzi.application.srs import SrsScheduler
from kanzi.domain.constants import DEFAULT_CHOICE_COUNT, EXCELLENT_RATIO, GOOD_RATIO
from kanzi.domain.models import KanjiItem, ReviewCard, SessionScore

logger = logging.getLogger(__name__)


class ResultTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    KEEP_TRYING = "keep_trying"


@dataclass(frozen=True)
class AnswerOutcome:
    item: KanjiItem
    is_correct: bool
    expected: str
    card: ReviewCard


@dataclass(frozen=True)
class SessionSummary:
    score: SessionScore
    tier: ResultTier
    max_streak: int


def result_tier(score: SessionScore) -> ResultTier:
    ratio = score.accuracy or 0.0
    if ratio >= EXCELLENT_RATIO:
        return ResultTier.EXCELLENT
    if ratio >= GOOD_RATIO:
        return ResultTier.GOOD
    return ResultTier.KEEP_TRYING


class DrillSession:
    """
    One pass over a drill queue.

    The tracker is reset when the session starts; cards for every queued
    character are seeded so verdicts can always be recorded.
    """

    def __init__(
        self,
        scheduler: SrsScheduler,
        tracker: SessionScoreTracker,
        aggregator: MistakeAggregator,
        queue: list[KanjiItem],
        mode: QuestionMode = QuestionMode.READING,
        choice_pool: list[KanjiItem] | None = None,
        rng: random.Random | None = None,
        choice_count: int = DEFAULT_CHOICE_COUNT,
    ):
        self._scheduler = scheduler
        self._tracker = tracker
        self._aggregator = aggregator
        self.queue = list(queue)
        self.mode = mode
        self._choice_pool = choice_pool if choice_pool is not None else self.queue
        self._rng = rng or random.Random()
        self._choice_count = choice_count
        self.index = 0
        self._answered = False

        self._tracker.reset()
        self._scheduler.seed(item.character for item in self.queue)
        logger.info(f"Started {mode.value} session with {len(self.queue)} questions")

    @property
    def is_complete(self) -> bool:
        return self.index >= len(self.queue)

    @property
    def current(self) -> KanjiItem | None:
        return None if self.is_complete else self.queue[self.index]

    @property
    def expected_answer(self) -> str | None:
        item = self.current
        return None if item is None else correct_answer(item, self.mode)

    def choices(self) -> list[str]:
        """Shuffled multiple-choice answers for the current question."""
        item = self.current
        if item is None or self.mode == QuestionMode.WRITING:
            return []
        return generate_choices(item, self._choice_pool, self.mode, self._rng, self._choice_count)

    def answer(self, choice: str, now: datetime | None = None) -> AnswerOutcome:
        """Check a multiple-choice answer against the current question."""
        expected = self.expected_answer
        return self._record(choice == expected, now)

    def grade_self(self, is_correct: bool, now: datetime | None = None) -> AnswerOutcome:
        """Record a self-graded handwriting answer."""
        return self._record(is_correct, now)

    def advance(self) -> None:
        self.index += 1
        self._answered = False

    def summary(self) -> SessionSummary:
        score = SessionScore(self._tracker.score.correct, self._tracker.score.total)
        return SessionSummary(score=score, tier=result_tier(score), max_streak=self._tracker.streak.max)

    def _record(self, is_correct: bool, now: datetime | None) -> AnswerOutcome:
        item = self.current
        if item is None:
            raise IndexError("Drill session is already complete")
        if self._answered:
            raise RuntimeError(f"Question for {item.character} was already answered")

        card = self._scheduler.record_result(item.character, is_correct, now)
        self._tracker.record_answer(is_correct)
        if not is_correct:
            self._aggregator.add_drill_mistake(item.character)
        self._answered = True

        return AnswerOutcome(
            item=item,
            is_correct=is_correct,
            expected=correct_answer(item, self.mode),
            card=card,
        )

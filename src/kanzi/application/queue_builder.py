"""
Queue builder for drill sessions.

Builds the list of kanji a drill will ask about, from one of four pools:
1. A grade (or every grade) of the catalog
2. Cards the scheduler considers due
3. The focused mistake pool
4. Characters picked out of a photographed worksheet

Also generates the multiple-choice answers for a question. Every random
decision goes through an injected ``random.Random`` so tests can fix a seed.
"""

import logging
import random
from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from typing import TypeVar

from kanzi.application.mistakes import MistakeAggregator
from kanzi.application.srs import SrsScheduler
from kanzi.domain.constants import DEFAULT_CHOICE_COUNT, DEFAULT_QUEUE_SIZE, MISSING_ANSWER
from kanzi.domain.models import KanjiItem
from kanzi.domain.ports import KanjiCatalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuestionMode(str, Enum):
    READING = "reading"  # pick the reading
    MEANING = "meaning"  # pick the meaning
    WRITING = "writing"  # write it by hand, then self-grade


def shuffle(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Fisher-Yates shuffle of a copy of ``items``."""
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def candidate_pool(catalog: KanjiCatalog, grade: int | None) -> list[KanjiItem]:
    """Items for one grade, or the whole catalog when ``grade`` is None."""
    return catalog.by_grade(grade) if grade is not None else catalog.all()


def build_drill_queue(
    catalog: KanjiCatalog,
    grade: int | None,
    size: int = DEFAULT_QUEUE_SIZE,
    rng: random.Random | None = None,
) -> list[KanjiItem]:
    """
    Build a shuffled drill queue from a grade of the catalog.

    Args:
        catalog: Kanji reference catalog.
        grade: Grade to draw from; None for every grade.
        size: Maximum number of questions.
        rng: Random source for the shuffle.

    Returns:
        Up to ``size`` items in random order.
    """
    pool = candidate_pool(catalog, grade)
    queue = shuffle(pool, rng)[:size]
    logger.debug(f"Drill queue: {len(queue)} of {len(pool)} items (grade={grade})")
    return queue


def build_due_queue(
    scheduler: SrsScheduler,
    catalog: KanjiCatalog,
    grade: int | None,
    size: int = DEFAULT_QUEUE_SIZE,
    now: datetime | None = None,
) -> list[KanjiItem]:
    """
    Build a queue of the due items of a grade, in card order.

    Characters of the pool that were never studied are seeded first, so they
    show up as due.
    """
    now = now or scheduler.now()
    pool = candidate_pool(catalog, grade)
    cards = scheduler.seed([item.character for item in pool], now)
    due = {card.character for card in scheduler.get_due_cards(cards, now)}
    return [item for item in pool if item.character in due][:size]


def build_focused_queue(
    aggregator: MistakeAggregator,
    size: int = DEFAULT_QUEUE_SIZE,
    rng: random.Random | None = None,
) -> list[KanjiItem]:
    """Shuffled queue over the focused mistake pool."""
    return shuffle(aggregator.build_focused_candidate_list(), rng)[:size]


def build_photo_queue(characters: Iterable[str], catalog: KanjiCatalog) -> list[KanjiItem]:
    """Queue of characters picked from a worksheet photo; unknown characters are skipped."""
    queue: list[KanjiItem] = []
    for character in dict.fromkeys(characters):
        item = catalog.lookup(character)
        if item is None:
            logger.info(f"Skipping {character}: not in the catalog")
            continue
        queue.append(item)
    return queue


def correct_answer(item: KanjiItem, mode: QuestionMode) -> str:
    if mode == QuestionMode.MEANING:
        return item.meaning
    return item.primary_reading or MISSING_ANSWER


def generate_choices(
    item: KanjiItem,
    pool: Sequence[KanjiItem],
    mode: QuestionMode,
    rng: random.Random | None = None,
    count: int = DEFAULT_CHOICE_COUNT,
) -> list[str]:
    """
    Build the answer choices for a multiple-choice question.

    Distractors are the answers of other pool items, skipping blanks,
    duplicates and anything equal to the correct answer.

    Returns:
        The correct answer plus up to ``count - 1`` distractors, shuffled.
    """
    answer = correct_answer(item, mode)

    distractors: list[str] = []
    for other in pool:
        if len(distractors) >= count - 1:
            break
        if other.character == item.character:
            continue
        candidate = other.meaning if mode == QuestionMode.MEANING else other.primary_reading
        if not candidate or candidate == answer or candidate in distractors:
            continue
        distractors.append(candidate)

    return shuffle([answer, *distractors], rng)

"""
Progress report for a set of kanji.

Pure computation: combines a catalog pool with the review state and the
session tracker. Characters without a card count as box 0.
"""

from dataclasses import asdict, dataclass

from kanzi.application.score import SessionScoreTracker
from kanzi.application.srs import SrsScheduler, percentage
from kanzi.domain.models import KanjiItem


@dataclass
class ProgressReport:
    total: int
    box_counts: list[int]  # index = box level
    mastered: int
    mastery_percentage: int

    # Session
    correct: int
    incorrect: int
    accuracy_percentage: int
    current_streak: int
    max_streak: int

    def to_dict(self) -> dict:
        return asdict(self)


def build_progress_report(
    pool: list[KanjiItem],
    scheduler: SrsScheduler,
    tracker: SessionScoreTracker,
) -> ProgressReport:
    box_counts = [0] * (scheduler.max_box_level + 1)
    for item in pool:
        card = scheduler.state.get(item.character)
        box_counts[card.box_level if card else 0] += 1

    mastered = sum(box_counts[scheduler.mastery_threshold :])
    score = tracker.score

    return ProgressReport(
        total=len(pool),
        box_counts=box_counts,
        mastered=mastered,
        mastery_percentage=percentage(mastered, len(pool)),
        correct=score.correct,
        incorrect=score.incorrect,
        accuracy_percentage=percentage(score.correct, score.total),
        current_streak=tracker.streak.current,
        max_streak=tracker.streak.max,
    )

"""Session score and streak tracking."""

import logging

from kanzi.domain.models import SessionScore, Streak

logger = logging.getLogger(__name__)


class SessionScoreTracker:
    """
    Tallies answers for the active session.

    The streak spans sessions: ``reset`` clears the session tally and the
    current streak but never the max streak.
    """

    def __init__(self, max_streak: int = 0):
        self.score = SessionScore()
        self.streak = Streak(current=0, max=max(max_streak, 0))

    def record_answer(self, is_correct: bool) -> None:
        self.score.total += 1
        if is_correct:
            self.score.correct += 1
            self.streak.current += 1
        else:
            self.streak.current = 0
        self.streak.max = max(self.streak.max, self.streak.current)

    def reset(self) -> None:
        logger.debug(f"Resetting session score ({self.score.correct}/{self.score.total})")
        self.score = SessionScore()
        self.streak.current = 0

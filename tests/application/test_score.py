"""Tests for session score and streak tracking."""

from kanzi.application.score import SessionScoreTracker


def test_record_answer_counts_and_streaks():
    tracker = SessionScoreTracker()

    for verdict in [True, True, True, False, True]:
        tracker.record_answer(verdict)

    assert tracker.score.correct == 4
    assert tracker.score.total == 5
    assert tracker.score.incorrect == 1
    assert tracker.streak.current == 1
    assert tracker.streak.max == 3


def test_incorrect_resets_current_streak_to_zero():
    tracker = SessionScoreTracker()
    tracker.record_answer(True)
    tracker.record_answer(True)

    tracker.record_answer(False)

    assert tracker.streak.current == 0
    assert tracker.streak.max == 2


def test_max_streak_never_decreases():
    tracker = SessionScoreTracker()
    seen = []
    for verdict in [True, False, True, True, False, False, True, True, True]:
        tracker.record_answer(verdict)
        seen.append(tracker.streak.max)
    assert seen == sorted(seen)
    assert seen[-1] == 3


def test_reset_keeps_max_streak():
    tracker = SessionScoreTracker(max_streak=7)
    tracker.record_answer(True)
    tracker.record_answer(True)

    tracker.reset()

    assert tracker.score.correct == 0
    assert tracker.score.total == 0
    assert tracker.streak.current == 0
    assert tracker.streak.max == 7


def test_reset_restarts_current_streak():
    tracker = SessionScoreTracker()
    tracker.record_answer(True)
    tracker.reset()
    tracker.record_answer(True)
    tracker.record_answer(True)
    assert tracker.streak.max == 2


def test_accuracy():
    tracker = SessionScoreTracker()
    assert tracker.score.accuracy is None
    tracker.record_answer(True)
    tracker.record_answer(False)
    assert tracker.score.accuracy == 0.5

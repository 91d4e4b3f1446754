"""Centralized constants for the kanzi application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Leitner boxes ----------
BOX_INTERVALS_DAYS = (0, 1, 3, 7, 14, 30)
MASTERY_THRESHOLD = 4

# ---------- Drill ----------
DEFAULT_QUEUE_SIZE = 15
DEFAULT_CHOICE_COUNT = 4
MISSING_ANSWER = "?"
EXCELLENT_RATIO = 0.8
GOOD_RATIO = 0.5

# ---------- Progress ----------
# Number of catalog items sampled when no grade is selected.
PROGRESS_SAMPLE_SIZE = 40

# ---------- Grades ----------
MIN_GRADE = 1
MAX_GRADE = 6
DEFAULT_GRADE = 1

# ---------- Mistakes ----------
PLACEHOLDER_MEANING = "(not in the catalog)"

# ---------- Extraction ----------
# Wavy lines and underlines printed next to the kanji a worksheet asks about.
TARGET_MARKERS = "~〰～-_=＝"

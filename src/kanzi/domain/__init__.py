# Domain Package
from .errors import (
    CatalogLoadError,
    DuplicateCardError,
    KanziError,
    StateLoadError,
    UnknownCardError,
)
from .models import KanjiItem, MistakeEntry, ReviewCard, ReviewState, SessionScore, Streak
from .ports import KanjiCatalog, StateRepository, TextRecognizer

__all__ = [
    "KanjiItem",
    "ReviewCard",
    "ReviewState",
    "MistakeEntry",
    "SessionScore",
    "Streak",
    "KanjiCatalog",
    "StateRepository",
    "TextRecognizer",
    "KanziError",
    "UnknownCardError",
    "DuplicateCardError",
    "CatalogLoadError",
    "StateLoadError",
]

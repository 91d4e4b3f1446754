"""Domain exceptions. The CLI is the only layer that catches these."""


class KanziError(Exception):
    """Base class for all kanzi errors."""


class UnknownCardError(KanziError, KeyError):
    """A verdict was recorded for a character that has no review card."""

    def __init__(self, character: str):
        self.character = character
        super().__init__(f"No review card for {character!r}; seed it before recording results")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateCardError(KanziError):
    """A card was created for a character that already has one."""

    def __init__(self, character: str):
        self.character = character
        super().__init__(f"Review card for {character!r} already exists")


class CatalogLoadError(KanziError):
    """The kanji catalog file is missing or unreadable."""


class StateLoadError(KanziError):
    """The persisted state file could not be parsed."""

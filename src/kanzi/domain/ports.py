"""
Ports (interfaces) for the collaborators of the review core.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from .models import KanjiItem

if TYPE_CHECKING:
    from kanzi.infrastructure.persistence.snapshot import StateSnapshot


class KanjiCatalog(ABC):
    """
    Port for the read-only kanji reference dataset.

    Implementations:
        - YamlKanjiCatalog: Loads the bundled (or a configured) YAML dataset.
    """

    @abstractmethod
    def lookup(self, character: str) -> KanjiItem | None:
        """
        Find a single character.

        Returns:
            The catalog item, or None when the character is not in the catalog.
        """
        pass

    @abstractmethod
    def by_grade(self, grade: int) -> list[KanjiItem]:
        """Return every item taught in ``grade``, in catalog order."""
        pass

    @abstractmethod
    def all(self) -> list[KanjiItem]:
        """Return every item, in catalog order."""
        pass


class StateRepository(ABC):
    """
    Port for loading and saving the review state.

    Implementations:
        - JsonStateRepository: A single JSON file on local disk.
    """

    @abstractmethod
    def load(self) -> "StateSnapshot":
        """Return the stored snapshot, or an empty one if nothing was saved yet."""
        pass

    @abstractmethod
    def save(self, snapshot: "StateSnapshot") -> None:
        pass


class TextRecognizer(ABC):
    """Port for an OCR engine. Invoked by the driving session, never by the core."""

    @abstractmethod
    def recognize_text(self, image: Path) -> str:
        pass

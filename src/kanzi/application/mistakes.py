"""
Mistake aggregator for focused review.

Keeps two independent channels of characters that need remedial practice:
mistakes reported from outside (e.g. a graded school test) and mistakes made
during drills. Both feed one deduplicated candidate list.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from kanzi.domain.constants import PLACEHOLDER_MEANING
from kanzi.domain.models import KanjiItem, MistakeEntry
from kanzi.domain.ports import KanjiCatalog

logger = logging.getLogger(__name__)


def _normalize(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


class MistakeAggregator:
    """
    Deduplicated pool of characters flagged for focused review.

    Malformed input (non-strings, blank strings) is dropped, never raised.
    """

    def __init__(
        self,
        catalog: KanjiCatalog,
        profile_grade: int | None = None,
        external: Iterable[MistakeEntry] = (),
        drill: Iterable[str] = (),
    ):
        self._catalog = catalog
        self.profile_grade = profile_grade
        self._external: dict[str, MistakeEntry] = {}
        self._drill: list[str] = []

        for entry in external:
            self._external[entry.character] = entry
        for character in drill:
            self.add_drill_mistake(character)

    @property
    def external_mistakes(self) -> list[MistakeEntry]:
        return list(self._external.values())

    @property
    def drill_mistakes(self) -> list[str]:
        return list(self._drill)

    def add_external_mistakes(
        self, characters: Iterable[object], target_grade: int | None = None
    ) -> list[MistakeEntry]:
        """
        Upsert externally reported mistakes.

        The stored grade is the first of ``target_grade``, the grade already
        stored for the character, and the profile grade that is not None.

        Returns:
            The entries written by this call.
        """
        written: list[MistakeEntry] = []
        for raw in characters:
            character = _normalize(raw)
            if character is None:
                logger.debug(f"Dropping malformed mistake entry: {raw!r}")
                continue

            previous = self._external.get(character)
            grade = target_grade
            if grade is None and previous is not None:
                grade = previous.target_grade
            if grade is None:
                grade = self.profile_grade

            entry = MistakeEntry(character=character, target_grade=grade)
            self._external[character] = entry
            written.append(entry)

        logger.debug(f"Recorded {len(written)} external mistakes")
        return written

    def add_drill_mistake(self, character: object) -> bool:
        """Remember a drill mistake. Returns False if it was already known or invalid."""
        normalized = _normalize(character)
        if normalized is None:
            logger.debug(f"Dropping malformed drill mistake: {character!r}")
            return False
        if normalized in self._drill:
            return False
        self._drill.append(normalized)
        return True

    def clear_external_mistakes(self) -> None:
        self._external.clear()

    def clear_drill_mistakes(self) -> None:
        self._drill.clear()

    def build_focused_candidate_list(self) -> list[KanjiItem]:
        """
        Union of both channels as catalog items, external mistakes first.

        Known characters keep their catalog data but take the mistake's grade
        when it has one. Characters the catalog does not know become
        placeholder items carrying the mistake's grade (or the profile grade).
        """
        grades: dict[str, int | None] = {}
        for entry in self._external.values():
            grades[entry.character] = entry.target_grade
        for character in self._drill:
            grades.setdefault(character, None)

        items: list[KanjiItem] = []
        for character, grade in grades.items():
            item = self._catalog.lookup(character)
            if item is None:
                item = KanjiItem(
                    character=character,
                    meaning=PLACEHOLDER_MEANING,
                    grade=grade if grade is not None else self.profile_grade,
                )
            elif grade is not None:
                item = replace(item, grade=grade)
            items.append(item)
        return items

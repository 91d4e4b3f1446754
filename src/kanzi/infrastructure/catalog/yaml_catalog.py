"""
YAML Kanji Catalog: Infrastructure adapter for the kanji reference dataset.

Implements KanjiCatalog over a YAML file: a top-level ``kanji`` list whose
entries carry ``kanji``, ``on``, ``kun``, ``meaning``, ``bushu``, ``strokes``
and ``grade``.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any

import yaml  # type: ignore
import yaml.error

from kanzi.domain.errors import CatalogLoadError
from kanzi.domain.models import KanjiItem
from kanzi.domain.ports import KanjiCatalog

logger = logging.getLogger(__name__)


def _as_readings(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(str(v).strip() for v in value if str(v).strip())


def _on_value(raw: dict) -> Any:
    # YAML 1.1 loads an unquoted ``on`` key as the boolean True.
    if "on" in raw:
        return raw["on"]
    return raw.get(True)


def parse_entry(raw: Any) -> KanjiItem | None:
    """Convert one YAML entry; None if it is unusable."""
    if not isinstance(raw, dict):
        return None
    character = raw.get("kanji")
    if not isinstance(character, str) or len(character.strip()) != 1:
        return None

    try:
        grade = raw.get("grade")
        return KanjiItem(
            character=character.strip(),
            on_readings=_as_readings(_on_value(raw)),
            kun_readings=_as_readings(raw.get("kun")),
            meaning=str(raw.get("meaning") or ""),
            radical=str(raw.get("bushu") or ""),
            stroke_count=int(raw.get("strokes") or 0),
            grade=int(grade) if grade is not None else None,
        )
    except (TypeError, ValueError):
        return None


class YamlKanjiCatalog(KanjiCatalog):
    """
    Read-only catalog loaded once from YAML.

    Lookups are dictionary hits; list results keep file order.
    """

    def __init__(self, items: list[KanjiItem]):
        self._items: list[KanjiItem] = []
        self._by_char: dict[str, KanjiItem] = {}
        for item in items:
            if item.character in self._by_char:
                logger.warning(f"Duplicate catalog entry for {item.character}, keeping the first")
                continue
            self._items.append(item)
            self._by_char[item.character] = item

    @classmethod
    def from_text(cls, text: str, source: str = "<string>") -> "YamlKanjiCatalog":
        try:
            data = yaml.safe_load(text)
        except yaml.error.YAMLError as e:
            raise CatalogLoadError(f"Invalid YAML in {source}: {e}") from e

        entries = data.get("kanji") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise CatalogLoadError(f"{source} has no 'kanji' list")

        items: list[KanjiItem] = []
        for i, raw in enumerate(entries):
            item = parse_entry(raw)
            if item is None:
                logger.warning(f"Skipping malformed catalog entry #{i} in {source}: {raw!r}")
                continue
            items.append(item)

        logger.debug(f"Loaded {len(items)} kanji from {source}")
        return cls(items)

    @classmethod
    def from_file(cls, path: Path) -> "YamlKanjiCatalog":
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e
        return cls.from_text(text, source=str(path))

    @classmethod
    def bundled(cls) -> "YamlKanjiCatalog":
        text = resources.files("kanzi.data").joinpath("kanji.yaml").read_text(encoding="utf-8")
        return cls.from_text(text, source="bundled kanji.yaml")

    def lookup(self, character: str) -> KanjiItem | None:
        return self._by_char.get(character)

    def by_grade(self, grade: int) -> list[KanjiItem]:
        return [item for item in self._items if item.grade == grade]

    def all(self) -> list[KanjiItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

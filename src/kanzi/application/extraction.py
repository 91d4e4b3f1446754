"""
Kanji extraction from free text.

Two sources of text end up here: what a learner types when reporting test
mistakes, and what an OCR engine reads off a photographed worksheet.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from kanzi.domain.constants import TARGET_MARKERS
from kanzi.domain.models import KanjiItem
from kanzi.domain.ports import KanjiCatalog, TextRecognizer

logger = logging.getLogger(__name__)

# CJK Unified Ideographs plus Extension A and the compatibility block.
_HAN_RE = re.compile(r"[\u3400-\u4DBF\u4E00-\u9FFF\uF900-\uFAFF\u3005]")
# Worksheets only ever use the unified block.
_KANJI_RE = re.compile(r"[\u4E00-\u9FFF]")


@dataclass(frozen=True)
class ExtractedKanji:
    """A kanji found in OCR text."""

    character: str
    item: KanjiItem | None  # None if the catalog does not know it
    is_study_target: bool  # printed next to a wavy line or underline


def parse_kanji_input(text: str | None) -> list[str]:
    """Unique Han characters of ``text``, in first-seen order."""
    return list(dict.fromkeys(_HAN_RE.findall(text or "")))


def extract_kanji_from_text(text: str, catalog: KanjiCatalog) -> list[ExtractedKanji]:
    """
    Find every kanji in OCR text and flag the ones a worksheet marks.

    A kanji directly before or after a marker character (wavy lines,
    underscores, hyphens, equals signs) is a study target.
    """
    chars = list(text)
    targets: set[str] = set()
    for i, ch in enumerate(chars):
        if ch not in TARGET_MARKERS:
            continue
        if i > 0 and _KANJI_RE.fullmatch(chars[i - 1]):
            targets.add(chars[i - 1])
        if i < len(chars) - 1 and _KANJI_RE.fullmatch(chars[i + 1]):
            targets.add(chars[i + 1])

    found = dict.fromkeys(_KANJI_RE.findall(text))
    return [
        ExtractedKanji(
            character=character,
            item=catalog.lookup(character),
            is_study_target=character in targets,
        )
        for character in found
    ]


def auto_selected(extracted: list[ExtractedKanji]) -> list[str]:
    """Characters that are both marked on the worksheet and known to the catalog."""
    return [e.character for e in extracted if e.is_study_target and e.item is not None]


def recognize_and_extract(
    recognizer: TextRecognizer, image: Path, catalog: KanjiCatalog
) -> list[ExtractedKanji]:
    """Run OCR on a worksheet photo and extract its kanji."""
    logger.info(f"Recognizing text in {image}")
    text = recognizer.recognize_text(image)
    extracted = extract_kanji_from_text(text, catalog)
    logger.info(
        f"Found {len(extracted)} kanji, {len(auto_selected(extracted))} marked as study targets"
    )
    return extracted

"""Tests for the YAML kanji catalog."""

import pytest

from kanzi.domain.errors import CatalogLoadError
from kanzi.infrastructure.catalog import YamlKanjiCatalog

SAMPLE = """
kanji:
  - kanji: 水
    "on": [スイ]
    kun: [みず]
    meaning: water
    bushu: 水
    strokes: 4
    grade: 1
  - kanji: 界
    on: カイ
    meaning: world
    bushu: 田
    strokes: 9
    grade: 3
  - kanji: 水
    meaning: duplicate
    grade: 2
  - kanji: 二文字
    grade: 1
  - not a mapping
  - kanji: 山
    strokes: lots
    grade: 1
"""


def test_from_text_parses_entries():
    catalog = YamlKanjiCatalog.from_text(SAMPLE)

    water = catalog.lookup("水")
    assert water.on_readings == ("スイ",)
    assert water.kun_readings == ("みず",)
    assert water.meaning == "water"
    assert water.radical == "水"
    assert water.stroke_count == 4
    assert water.grade == 1

    world = catalog.lookup("界")
    assert world.on_readings == ("カイ",)  # unquoted key, a bare string is one reading
    assert world.kun_readings == ()
    assert world.primary_reading == "カイ"


def test_malformed_and_duplicate_entries_are_skipped(caplog):
    catalog = YamlKanjiCatalog.from_text(SAMPLE)

    assert [item.character for item in catalog.all()] == ["水", "界"]
    assert catalog.lookup("水").meaning == "water"
    assert "Skipping malformed catalog entry" in caplog.text
    assert "Duplicate catalog entry" in caplog.text


def test_lookup_miss_returns_none():
    catalog = YamlKanjiCatalog.from_text(SAMPLE)
    assert catalog.lookup("視") is None


def test_by_grade():
    catalog = YamlKanjiCatalog.from_text(SAMPLE)
    assert [item.character for item in catalog.by_grade(3)] == ["界"]
    assert catalog.by_grade(6) == []


@pytest.mark.parametrize("text", ["kanji: [unclosed", "just a string", "other: []"])
def test_invalid_documents(text):
    with pytest.raises(CatalogLoadError):
        YamlKanjiCatalog.from_text(text)


def test_from_file(tmp_path):
    path = tmp_path / "kanji.yaml"
    path.write_text(SAMPLE, encoding="utf-8")
    assert len(YamlKanjiCatalog.from_file(path)) == 2


def test_missing_file(tmp_path):
    with pytest.raises(CatalogLoadError):
        YamlKanjiCatalog.from_file(tmp_path / "missing.yaml")


def test_bundled_dataset():
    catalog = YamlKanjiCatalog.bundled()

    assert len(catalog) > 50
    water = catalog.lookup("水")
    assert water.grade == 1
    assert water.primary_reading == "スイ"
    for grade in range(1, 7):
        assert catalog.by_grade(grade), f"no kanji for grade {grade}"
    assert all(len(item.character) == 1 for item in catalog.all())


def test_unquoted_on_key_still_yields_readings():
    catalog = YamlKanjiCatalog.from_text("kanji:\n  - kanji: 火\n    on: [カ]\n    grade: 1\n")
    assert catalog.lookup("火").on_readings == ("カ",)


def test_bundled_dataset_has_on_readings():
    catalog = YamlKanjiCatalog.bundled()

    assert len(catalog) == 81
    assert all(item.on_readings for item in catalog.all())
    assert catalog.lookup("水").on_readings == ("スイ",)

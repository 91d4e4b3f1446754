from datetime import datetime, timezone

import pytest

from kanzi.application.srs import SrsScheduler
from kanzi.domain.models import KanjiItem
from kanzi.infrastructure.catalog import YamlKanjiCatalog

NOW = datetime(2024, 4, 8, 9, 0, tzinfo=timezone.utc)


def make_item(character, grade=1, on=(), kun=(), meaning=""):
    return KanjiItem(
        character=character,
        on_readings=tuple(on),
        kun_readings=tuple(kun),
        meaning=meaning or f"meaning of {character}",
        radical="",
        stroke_count=1,
        grade=grade,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scheduler():
    """Scheduler whose clock is frozen at NOW."""
    return SrsScheduler(clock=lambda: NOW)


@pytest.fixture
def small_catalog():
    """A handful of grade 1 and 2 kanji with distinct readings and meanings."""
    return YamlKanjiCatalog(
        [
            make_item("水", 1, on=["スイ"], kun=["みず"], meaning="water"),
            make_item("火", 1, on=["カ"], kun=["ひ"], meaning="fire"),
            make_item("木", 1, on=["モク"], kun=["き"], meaning="tree"),
            make_item("山", 1, on=["サン"], kun=["やま"], meaning="mountain"),
            make_item("川", 1, on=["セン"], kun=["かわ"], meaning="river"),
            make_item("海", 2, on=["カイ"], kun=["うみ"], meaning="sea"),
            make_item("星", 2, on=["セイ"], kun=["ほし"], meaning="star"),
        ]
    )


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and state
    monkeypatch.setenv("HOME", str(home))
    for var in ("KANZI_STATE_FILE", "KANZI_CATALOG_FILE", "KANZI_SELECTED_GRADE", "KANZI_SEED"):
        monkeypatch.delenv(var, raising=False)
    return home

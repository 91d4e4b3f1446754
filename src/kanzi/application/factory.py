"""
Study Context Factory
Centralizes the wiring of catalog, persistence and the review core from config.
"""

import logging
from dataclasses import dataclass

from kanzi.application.config import AppConfig
from kanzi.application.mistakes import MistakeAggregator
from kanzi.application.score import SessionScoreTracker
from kanzi.application.srs import SrsScheduler
from kanzi.domain.ports import KanjiCatalog, StateRepository
from kanzi.infrastructure.catalog import YamlKanjiCatalog
from kanzi.infrastructure.persistence import (
    JsonStateRepository,
    restore_mistakes,
    restore_state,
    snapshot_from,
)

logger = logging.getLogger(__name__)


@dataclass
class StudyContext:
    """Everything a command needs, loaded from one state file."""

    config: AppConfig
    catalog: KanjiCatalog
    repository: StateRepository
    scheduler: SrsScheduler
    aggregator: MistakeAggregator
    tracker: SessionScoreTracker

    def save(self) -> None:
        self.repository.save(
            snapshot_from(self.scheduler.state, self.aggregator, self.tracker)
        )


def get_catalog(config: AppConfig) -> KanjiCatalog:
    """
    Returns the configured catalog, or the bundled dataset.
    """
    if config.catalog_file is not None:
        return YamlKanjiCatalog.from_file(config.catalog_file)
    return YamlKanjiCatalog.bundled()


def get_state_repository(config: AppConfig) -> StateRepository:
    return JsonStateRepository(config.state_file)


def load_study_context(
    config: AppConfig,
    catalog: KanjiCatalog | None = None,
    repository: StateRepository | None = None,
) -> StudyContext:
    """
    Load persisted state and build the review core around it.
    """
    catalog = catalog or get_catalog(config)
    repository = repository or get_state_repository(config)
    snapshot = repository.load()

    scheduler = SrsScheduler(
        state=restore_state(snapshot, config.box_intervals_days),
        intervals_days=config.box_intervals_days,
        mastery_threshold=config.mastery_threshold,
    )
    external, drill = restore_mistakes(snapshot)
    aggregator = MistakeAggregator(
        catalog,
        profile_grade=config.selected_grade,
        external=external,
        drill=drill,
    )
    tracker = SessionScoreTracker(max_streak=snapshot.max_streak)
    logger.debug(
        f"Loaded {len(scheduler.state)} cards and "
        f"{len(external) + len(drill)} mistakes"
    )

    return StudyContext(
        config=config,
        catalog=catalog,
        repository=repository,
        scheduler=scheduler,
        aggregator=aggregator,
        tracker=tracker,
    )

"""
JSON State Repository: Infrastructure adapter for local persistence.

Implements StateRepository with a single JSON file. Writes go to a temporary
file in the same directory that then replaces the target, so a crash never
leaves a half-written state file behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from kanzi.domain.errors import StateLoadError
from kanzi.domain.ports import StateRepository

from .snapshot import StateSnapshot

logger = logging.getLogger(__name__)


class JsonStateRepository(StateRepository):
    def __init__(self, path: Path):
        self.path = path

    def load(self) -> StateSnapshot:
        if not self.path.exists():
            logger.info(f"No state file at {self.path}, starting fresh")
            return StateSnapshot()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StateLoadError(f"Cannot read state file {self.path}: {e}") from e

        try:
            snapshot = StateSnapshot.model_validate(raw)
        except ValidationError as e:
            raise StateLoadError(f"State file {self.path} has an invalid layout: {e}") from e

        logger.debug(f"Loaded {len(snapshot.cards)} cards from {self.path}")
        return snapshot

    def save(self, snapshot: StateSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = snapshot.model_dump_json(indent=2)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(snapshot.cards)} cards to {self.path}")

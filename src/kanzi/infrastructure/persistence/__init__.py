# Persistence adapters
from .json_store import JsonStateRepository
from .snapshot import StateSnapshot, restore_mistakes, restore_state, snapshot_from

__all__ = [
    "JsonStateRepository",
    "StateSnapshot",
    "snapshot_from",
    "restore_state",
    "restore_mistakes",
]

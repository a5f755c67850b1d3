"""Storage infrastructure for the orchestrator.

Provides atomic JSON document persistence for the project state, the
planning document and checkpoint snapshots.
"""

from orchestrator.infrastructure.storage.json_storage import JsonStorage
from orchestrator.infrastructure.storage.repositories import (
    CHECKPOINTS_DIR,
    PROJECT_STATE_FILE,
    STATE_DIR,
    TASKS_FILE,
    CheckpointRepository,
    StatePaths,
    StateRepository,
    TaskFileRepository,
    dump_document,
    parse_document,
)

__all__ = [
    "JsonStorage",
    "StatePaths",
    "StateRepository",
    "TaskFileRepository",
    "CheckpointRepository",
    "parse_document",
    "dump_document",
    "STATE_DIR",
    "PROJECT_STATE_FILE",
    "TASKS_FILE",
    "CHECKPOINTS_DIR",
]

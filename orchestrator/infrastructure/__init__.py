"""Infrastructure layer for the orchestrator.

Wraps file I/O behind repositories. Raw JSON access returns Result
monads; repositories turn failures into raised OrchestratorErrors.

Exports:
    Storage:
        - JsonStorage: Atomic JSON document I/O
        - StatePaths: Document locations under a project root
        - StateRepository: Project state persistence
        - TaskFileRepository: Planning document persistence
        - CheckpointRepository: Snapshot persistence
"""

from orchestrator.infrastructure.storage import (
    CheckpointRepository,
    JsonStorage,
    StatePaths,
    StateRepository,
    TaskFileRepository,
)

__all__ = [
    "JsonStorage",
    "StatePaths",
    "StateRepository",
    "TaskFileRepository",
    "CheckpointRepository",
]

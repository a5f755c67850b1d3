"""Repository implementations for orchestrator documents.

Each repository owns one kind of document under a project root and
validates it on the way in and out. Failures are fatal to the calling
operation, so repositories raise NotFoundError / ValidationError /
StorageError rather than returning them.
"""

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from orchestrator.domain.project import ProjectState
from orchestrator.domain.shared.errors import ValidationError
from orchestrator.domain.shared.result import unwrap
from orchestrator.domain.task import TaskFile
from orchestrator.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

STATE_DIR = Path(".claude/orchestrator/state")
PROJECT_STATE_FILE = "project.json"
TASKS_FILE = "tasks.json"
CHECKPOINTS_DIR = Path(".claude/orchestrator/checkpoints")

_CHECKPOINT_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class StatePaths:
    """Document locations under a project root."""

    root: Path

    @property
    def state_file(self) -> Path:
        return self.root / STATE_DIR / PROJECT_STATE_FILE

    @property
    def tasks_file(self) -> Path:
        return self.root / STATE_DIR / TASKS_FILE

    @property
    def checkpoints_dir(self) -> Path:
        return self.root / CHECKPOINTS_DIR

    def checkpoint_file(self, checkpoint_id: str) -> Path:
        """Get the snapshot path for a checkpoint id.

        Raises:
            ValidationError: If the id could escape the checkpoints directory.
        """
        if not _CHECKPOINT_ID.match(checkpoint_id):
            raise ValidationError(f"Invalid checkpoint id: {checkpoint_id!r}", path="checkpointId")
        return self.checkpoints_dir / f"{checkpoint_id}.json"


def parse_document(model: type[M], data: dict[str, Any], source: str) -> M:
    """Validate raw document data against a model.

    Raises:
        ValidationError: With the dotted path of the first failure.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e, source) from e


def dump_document(document: BaseModel) -> dict[str, Any]:
    """Serialize a model to its on-disk JSON shape."""
    return document.model_dump(mode="json", by_alias=True)


def _validated_dump(document: M, source: str) -> dict[str, Any]:
    # Re-parse so values assigned after construction are checked too
    validated = parse_document(type(document), dump_document(document), source)
    return dump_document(validated)


class StateRepository:
    """Repository for the project state document (project.json)."""

    def __init__(self, paths: StatePaths, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            paths: Document locations for the project.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._paths = paths
        self._storage = storage or JsonStorage()

    def exists(self) -> bool:
        """Check if a state document exists."""
        return self._paths.state_file.exists()

    def load(self) -> ProjectState:
        """Load and validate the project state.

        Raises:
            NotFoundError: If no state document exists.
            ValidationError: If the document is malformed.
        """
        data = unwrap(self._storage.load_json(self._paths.state_file))
        state = parse_document(ProjectState, data, "project state")
        logger.debug(f"Loaded state for {state.project.slug} ({state.progress.percentage}% complete)")
        return state

    def save(self, state: ProjectState) -> None:
        """Stamp ``project.updated``, validate and atomically overwrite the state.

        Nothing is written and the state is left unchanged if validation
        fails.

        Raises:
            ValidationError: If the state is invalid.
            StorageError: If the write fails.
        """
        previous = state.project.updated
        state.project.updated = datetime.now(UTC)
        try:
            data = _validated_dump(state, "project state")
        except ValidationError:
            state.project.updated = previous
            raise
        unwrap(self._storage.save_json(self._paths.state_file, data))
        logger.info(f"Saved state for {state.project.slug} ({state.progress.percentage}% complete)")


class TaskFileRepository:
    """Repository for the planning document (tasks.json)."""

    def __init__(self, paths: StatePaths, storage: JsonStorage | None = None) -> None:
        self._paths = paths
        self._storage = storage or JsonStorage()

    def exists(self) -> bool:
        """Check if a task document exists."""
        return self._paths.tasks_file.exists()

    def load(self) -> TaskFile:
        """Load and validate the task document.

        Raises:
            NotFoundError: If no task document exists.
            ValidationError: If the document is malformed.
        """
        data = unwrap(self._storage.load_json(self._paths.tasks_file))
        return parse_document(TaskFile, data, "task file")

    def save(self, task_file: TaskFile) -> None:
        """Validate and atomically overwrite the task document."""
        data = _validated_dump(task_file, "task file")
        unwrap(self._storage.save_json(self._paths.tasks_file, data))
        logger.info(f"Saved {len(task_file.tasks)} tasks to {self._paths.tasks_file}")


class CheckpointRepository:
    """Repository for checkpoint snapshots (one full state per file)."""

    def __init__(self, paths: StatePaths, storage: JsonStorage | None = None) -> None:
        self._paths = paths
        self._storage = storage or JsonStorage()

    def exists(self, checkpoint_id: str) -> bool:
        """Check if a snapshot exists for a checkpoint id."""
        return self._paths.checkpoint_file(checkpoint_id).exists()

    def list_ids(self) -> list[str]:
        """List the ids of all snapshots on disk, sorted."""
        directory = self._paths.checkpoints_dir
        if not directory.is_dir():
            return []
        return sorted(p.stem for p in directory.glob("*.json"))

    def load(self, checkpoint_id: str) -> ProjectState:
        """Load and validate a snapshot.

        Raises:
            NotFoundError: If the snapshot does not exist.
            ValidationError: If the snapshot is malformed.
        """
        data = unwrap(self._storage.load_json(self._paths.checkpoint_file(checkpoint_id)))
        return parse_document(ProjectState, data, f"checkpoint {checkpoint_id}")

    def save(self, checkpoint_id: str, state: ProjectState) -> None:
        """Validate and write a snapshot of the full state."""
        data = _validated_dump(state, f"checkpoint {checkpoint_id}")
        unwrap(self._storage.save_json(self._paths.checkpoint_file(checkpoint_id), data))

"""State manager for one project root.

Wires the repositories to the application services. There is no
process-wide instance: construct a StateManager per project root and
pass it to whatever drives the workflow.

The single-writer model applies: nothing here locks or merges, and the
last save wins.
"""

import logging
import re
from pathlib import Path

from orchestrator.application import (
    add_history,
    add_tasks,
    build_checkpoint,
    initialize_state,
)
from orchestrator.domain.project import Checkpoint, ProjectState
from orchestrator.domain.shared import Err, Result
from orchestrator.domain.task import Task, TaskFile
from orchestrator.global_config import get_default_config
from orchestrator.infrastructure.storage import (
    CheckpointRepository,
    JsonStorage,
    StatePaths,
    StateRepository,
    TaskFileRepository,
)

logger = logging.getLogger(__name__)

_SEQUENCE_ID = re.compile(r"^CP-(\d+)$")


class CheckpointManager:
    """Creates and restores full-state snapshots.

    Snapshots are immutable history: restoring an older checkpoint keeps
    later snapshots on disk, and new ids never reuse an existing one.
    """

    def __init__(self, snapshots: CheckpointRepository, states: StateRepository) -> None:
        self._snapshots = snapshots
        self._states = states

    def _next_sequence(self, state: ProjectState) -> int:
        on_disk = [
            int(match.group(1))
            for match in (_SEQUENCE_ID.match(cid) for cid in self._snapshots.list_ids())
            if match
        ]
        return max([len(state.checkpoints), *on_disk])

    def create_checkpoint(
        self,
        state: ProjectState,
        git_commit: str | None = None,
        description: str | None = None,
    ) -> Checkpoint:
        """Snapshot the state under the next ``CP-NNN`` id.

        The metadata is appended to ``state.checkpoints`` before the
        snapshot is written, so the snapshot lists itself. The
        ``checkpoint_created`` history entry is logged afterwards and
        exists only in the live state. The caller saves the live state.

        Raises:
            ValidationError: If the state is invalid (nothing written).
            StorageError: If the snapshot cannot be written.
        """
        checkpoint = build_checkpoint(
            state,
            self._next_sequence(state),
            git_commit=git_commit,
            description=description,
        )
        state.checkpoints.append(checkpoint)
        try:
            self._snapshots.save(checkpoint.id, state)
        except Exception:
            state.checkpoints.pop()
            raise

        add_history(
            state,
            "checkpoint_created",
            details={"checkpointId": checkpoint.id, "tasksCompleted": checkpoint.tasks_completed},
        )
        logger.info(f"Created checkpoint {checkpoint.id} at {checkpoint.tasks_completed} completed")
        return checkpoint

    def restore_checkpoint(self, checkpoint_id: str) -> ProjectState:
        """Make a snapshot the current state.

        Logs ``checkpoint_restored`` into the restored state and saves it
        as the current state document.

        Raises:
            NotFoundError: If the snapshot does not exist.
            ValidationError: If the snapshot is malformed.
        """
        state = self._snapshots.load(checkpoint_id)
        add_history(state, "checkpoint_restored", details={"checkpointId": checkpoint_id})
        self._states.save(state)
        logger.info(f"Restored checkpoint {checkpoint_id} (phase {state.phase.value})")
        return state

    def list_snapshots(self) -> list[str]:
        """List snapshot ids on disk, including orphaned ones."""
        return self._snapshots.list_ids()

    def has_snapshot(self, checkpoint_id: str) -> bool:
        """Check that a recorded checkpoint still has its snapshot file."""
        return self._snapshots.exists(checkpoint_id)


class StateManager:
    """Persistence and checkpointing for the project under ``root``.

    Example:
        manager = StateManager(Path("/work/todo-app"))
        state = manager.load()
        result = get_next_task(state)
        if is_ok(result):
            start_task(state, result.value.id)
            manager.save(state)
    """

    def __init__(self, root: Path | str, storage: JsonStorage | None = None) -> None:
        """Initialize the manager.

        Args:
            root: Project root directory; documents live below it.
            storage: JsonStorage to share between repositories.
        """
        self.paths = StatePaths(Path(root))
        storage = storage or JsonStorage()
        self.states = StateRepository(self.paths, storage)
        self.task_files = TaskFileRepository(self.paths, storage)
        self.checkpoints = CheckpointManager(CheckpointRepository(self.paths, storage), self.states)

    # =========================================================================
    # Project state
    # =========================================================================

    def exists(self) -> bool:
        """Check if a project state exists."""
        return self.states.exists()

    def load(self) -> ProjectState:
        """Load the project state (NotFoundError / ValidationError on failure)."""
        return self.states.load()

    def save(self, state: ProjectState) -> None:
        """Save the project state (ValidationError / StorageError on failure)."""
        self.states.save(state)

    def initialize(
        self,
        name: str,
        description: str,
        slug: str | None = None,
    ) -> Result[ProjectState, str]:
        """Create and save a new project state with the user's default config.

        Returns:
            Ok(ProjectState) once saved, or Err(str) if the inputs are invalid.
        """
        result = initialize_state(name, description, slug=slug, config=get_default_config())
        if isinstance(result, Err):
            return result

        self.save(result.value)
        logger.info(f"Initialized project {result.value.project.slug} at {self.paths.root}")
        return result

    # =========================================================================
    # Planning document
    # =========================================================================

    def load_tasks(self) -> TaskFile:
        """Load the planning document (NotFoundError / ValidationError on failure)."""
        return self.task_files.load()

    def save_tasks(self, task_file: TaskFile) -> None:
        """Save the planning document."""
        self.task_files.save(task_file)

    def import_tasks(self, state: ProjectState) -> Result[list[Task], str]:
        """Bulk-add the planning document's tasks to the state.

        Returns:
            Ok(list[Task]) with the added tasks, or Err(str) on duplicate ids.

        Raises:
            NotFoundError: If there is no planning document.
            ValidationError: If the planning document is malformed.
        """
        task_file = self.load_tasks()
        if task_file.project_id != state.project.id:
            logger.warning(
                f"Task file belongs to project {task_file.project_id}, "
                f"importing into {state.project.id}"
            )
        return add_tasks(state, [task.model_copy(deep=True) for task in task_file.tasks])

    # =========================================================================
    # Checkpoints
    # =========================================================================

    def create_checkpoint(
        self,
        state: ProjectState,
        git_commit: str | None = None,
        description: str | None = None,
    ) -> Checkpoint:
        """Snapshot the state; see CheckpointManager.create_checkpoint."""
        return self.checkpoints.create_checkpoint(state, git_commit, description)

    def restore_checkpoint(self, checkpoint_id: str) -> ProjectState:
        """Restore a snapshot; see CheckpointManager.restore_checkpoint."""
        return self.checkpoints.restore_checkpoint(checkpoint_id)


__all__ = ["CheckpointManager", "StateManager"]

"""Checkpoint policy.

Pure decisions about when and how to checkpoint. Writing and reading
snapshots is done by the CheckpointManager in ``orchestrator.manager``.
"""

from datetime import UTC, datetime

from orchestrator.application.ledger_service import sequential_id
from orchestrator.domain.project import Checkpoint, ProjectState


def tasks_since_checkpoint(state: ProjectState) -> int:
    """Count completions since the last checkpoint (or since the start)."""
    last = state.checkpoints[-1] if state.checkpoints else None
    baseline = last.tasks_completed if last else 0
    return state.progress.completed - baseline


def should_checkpoint(state: ProjectState) -> bool:
    """Check whether ``checkpoint_frequency`` completions have piled up."""
    return tasks_since_checkpoint(state) >= state.config.checkpoint_frequency


def build_checkpoint(
    state: ProjectState,
    sequence: int,
    git_commit: str | None = None,
    description: str | None = None,
) -> Checkpoint:
    """Capture checkpoint metadata for the current moment.

    Args:
        state: The state being captured.
        sequence: Number of checkpoints already issued; the new id is
            the next one, e.g. 2 -> ``CP-003``.
        git_commit: Optional external commit reference.
        description: Optional free-text note.

    Returns:
        New Checkpoint (not yet attached to the state).
    """
    return Checkpoint(
        id=sequential_id("CP", sequence),
        timestamp=datetime.now(UTC),
        phase=state.phase,
        tasks_completed=state.progress.completed,
        git_commit=git_commit,
        description=description,
    )

"""Application service layer for the orchestrator.

Services operate on an in-memory ProjectState, mutating it in place.
They perform no I/O; the StateManager persists the result.

Services:
    task_service - Scheduling queries and task lifecycle
    phase_service - Phase state machine
    progress_service - Progress and metrics refresh
    ledger_service - Decisions and history
    checkpoint_service - Checkpoint policy and metadata
    project_service - Initialization, summaries and hook bookkeeping

Example usage:
    >>> from orchestrator.application import get_next_task, start_task
    >>> from orchestrator.domain.shared import is_ok
    >>>
    >>> result = get_next_task(state)
    >>> if is_ok(result):
    ...     start_task(state, result.value.id)
"""

from orchestrator.application.checkpoint_service import (
    build_checkpoint,
    should_checkpoint,
    tasks_since_checkpoint,
)
from orchestrator.application.ledger_service import add_decision, add_history
from orchestrator.application.phase_service import (
    is_forward_step,
    next_phase,
    transition_phase,
)
from orchestrator.application.progress_service import update_metrics, update_progress
from orchestrator.application.project_service import (
    get_summary,
    initialize_state,
    is_complete,
    record_delegation_completed,
    record_session_stopped,
    set_tech_stack,
    slugify,
)
from orchestrator.application.task_service import (
    add_tasks,
    complete_task,
    fail_task,
    get_next_task,
    get_parallelizable_tasks,
    start_task,
)

__all__ = [
    # Task service
    "get_next_task",
    "get_parallelizable_tasks",
    "add_tasks",
    "start_task",
    "complete_task",
    "fail_task",
    # Phase service
    "next_phase",
    "is_forward_step",
    "transition_phase",
    # Progress service
    "update_progress",
    "update_metrics",
    # Ledger service
    "add_history",
    "add_decision",
    # Checkpoint service
    "build_checkpoint",
    "should_checkpoint",
    "tasks_since_checkpoint",
    # Project service
    "slugify",
    "initialize_state",
    "set_tech_stack",
    "is_complete",
    "get_summary",
    "record_delegation_completed",
    "record_session_stopped",
]

"""Project application service.

Orchestrates project-level operations: initialization, tech stack,
completion checks, summaries and the bookkeeping that session hooks
perform. All functions are pure - no I/O, no side effects beyond the
state passed in.
"""

import re
import uuid
from datetime import UTC, datetime

from orchestrator.application.checkpoint_service import should_checkpoint
from orchestrator.application.ledger_service import add_history
from orchestrator.application.progress_service import update_progress
from orchestrator.domain.project import (
    HistoryEntry,
    Phase,
    PhaseState,
    Project,
    ProjectConfig,
    ProjectState,
    TechStack,
    default_phases,
)
from orchestrator.domain.shared import Err, Ok, Result
from orchestrator.domain.task import TaskStatus


def slugify(text: str) -> str:
    """Convert text to a URL-safe slug.

    Examples:
        >>> slugify("My Todo App!")
        'my-todo-app'
        >>> slugify("  snake_case  name ")
        'snake-case-name'
    """
    slug = text.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def initialize_state(
    name: str,
    description: str,
    slug: str | None = None,
    config: ProjectConfig | None = None,
) -> Result[ProjectState, str]:
    """Create a fresh project state in the ideation phase.

    Args:
        name: Human-readable project name.
        description: What the project is about.
        slug: URL-safe slug; derived from the name when omitted.
        config: Orchestration settings; defaults when omitted.

    Returns:
        Ok(ProjectState) ready to be saved, or Err(str) with a
        validation message.
    """
    if not name or not name.strip():
        return Err("Project name cannot be empty")

    project_slug = slugify(slug or name)
    if not project_slug:
        return Err(f"Cannot derive a slug from {slug or name!r}")

    now = datetime.now(UTC)
    phases = default_phases()
    phases[Phase.IDEATION].status = PhaseState.IN_PROGRESS
    phases[Phase.IDEATION].started_at = now

    state = ProjectState(
        project=Project(
            id=str(uuid.uuid4()),
            name=name.strip(),
            slug=project_slug,
            description=description,
            created=now,
            updated=now,
        ),
        phase=Phase.IDEATION,
        phases=phases,
        config=config or ProjectConfig(),
    )
    add_history(
        state,
        "project_initialized",
        details={"name": name.strip(), "description": description},
    )
    return Ok(state)


def set_tech_stack(state: ProjectState, tech_stack: TechStack) -> None:
    """Record the technology choices, logged as made by the architect."""
    state.tech_stack = tech_stack
    add_history(
        state,
        "tech_stack_set",
        agent="architect",
        details=tech_stack.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def is_complete(state: ProjectState) -> bool:
    """Check that tasks exist and all are completed or skipped."""
    finished = (TaskStatus.COMPLETED, TaskStatus.SKIPPED)
    return bool(state.tasks) and all(t.status in finished for t in state.tasks)


def get_summary(state: ProjectState) -> str:
    """Render a markdown summary of the state for display."""
    progress = state.progress
    lines = [
        f"## {state.project.name}",
        "",
        f"**Phase:** {state.phase.value}",
        f"**Progress:** {progress.completed}/{progress.total} tasks ({progress.percentage}%)",
        "",
    ]

    if progress.in_progress > 0:
        lines.append(f"**In Progress:** {progress.in_progress} tasks")
    if progress.blocked > 0:
        lines.append(f"**Blocked:** {progress.blocked} tasks")
    if is_complete(state):
        lines.append("**Status:** all tasks complete")

    if state.current_tasks:
        lines.extend(["", "### Current Tasks"])
        for current in state.current_tasks:
            task = state.get_task(current.id)
            if task:
                lines.append(f"- [{current.id}] {task.title} ({current.agent})")

    if state.blockers:
        lines.extend(["", "### Blockers"])
        for blocker in state.blockers:
            lines.append(f"- [{blocker.task_id}] {blocker.reason}")

    return "\n".join(lines)


# =============================================================================
# Hook Bookkeeping
# =============================================================================


def record_delegation_completed(state: ProjectState) -> bool:
    """Refresh progress after an external delegation finishes.

    Returns:
        True if a checkpoint is due.
    """
    progress = update_progress(state)
    add_history(
        state,
        "task_delegation_completed",
        details={"progress": progress.model_dump(mode="json", by_alias=True)},
    )
    return should_checkpoint(state)


def record_session_stopped(state: ProjectState) -> HistoryEntry:
    """Log the end of a driver session with the phase and progress."""
    return add_history(
        state,
        "session_stopped",
        details={
            "phase": state.phase.value,
            "progress": state.progress.model_dump(mode="json", by_alias=True),
        },
    )

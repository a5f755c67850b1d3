"""Task domain models.

Pure domain models for the task collection of a project. Uses Pydantic
so the same classes validate documents on load and before save.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import Field

from orchestrator.domain.shared.models import DocumentModel

TASKS_SCHEMA = "orchestrator-tasks-v1"


class TaskStatus(str, Enum):
    """Status of a task in the collection."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    SKIPPED = "skipped"


class TaskPriority(str, Enum):
    """Scheduling priority, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(DocumentModel):
    """An atomic, dependency-aware unit of work for one worker type.

    Tasks are never deleted. They move through the lifecycle until they
    reach ``completed`` or ``skipped``, or stay ``blocked`` once their
    retry budget is exhausted.
    """

    id: str = Field(min_length=1)
    title: str
    description: str
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    agent: str = Field(min_length=1, description="Worker type, e.g. 'backend-dev'")
    epic: str | None = None
    story: str | None = None
    dependencies: list[str] = Field(default_factory=list)
    outputs: list[str] = Field(
        default_factory=list,
        description="Output identifiers (usually file paths) used for conflict detection",
    )
    acceptance_criteria: list[str] = Field(default_factory=list)
    estimated_minutes: float | None = Field(default=None, ge=0)
    actual_minutes: int | None = Field(default=None, ge=0)
    attempts: int = Field(default=0, ge=0)
    max_attempts: int = Field(default=3, ge=0)
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error: str | None = None


class CurrentTask(DocumentModel):
    """Pointer to a task that is actively running."""

    id: str
    agent: str
    started_at: datetime
    attempt: int = Field(ge=0)


class Blocker(DocumentModel):
    """A task that exhausted its attempts and needs outside intervention."""

    task_id: str
    reason: str
    since: datetime
    attempts: int = Field(ge=0)


class Progress(DocumentModel):
    """Counts derived from task statuses. Never mutated directly."""

    total: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)
    blocked: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    percentage: int = Field(default=0, ge=0, le=100)


class Metrics(DocumentModel):
    """Optional delivery metrics.

    Time values are human-readable durations such as ``"1h 5m"``.
    """

    total_time: str | None = None
    avg_task_time: str | None = None
    retry_rate: float | None = Field(default=None, ge=0, le=1)
    test_coverage: float | None = Field(default=None, ge=0)
    lint_errors: int | None = Field(default=None, ge=0)
    type_errors: int | None = Field(default=None, ge=0)


class Story(DocumentModel):
    """A user story grouping tasks inside an epic."""

    id: str
    title: str
    description: str = ""
    tasks: list[Task] = Field(default_factory=list)


class Epic(DocumentModel):
    """A top-level grouping of stories produced during planning."""

    id: str
    title: str
    description: str = ""
    stories: list[Story] = Field(default_factory=list)


class TaskFile(DocumentModel):
    """The planning document (tasks.json).

    Independently loadable from the project state. ``tasks`` is the flat
    list that gets bulk-added to the state; ``epics`` keeps the planning
    breakdown for display.
    """

    schema_: Literal["orchestrator-tasks-v1"] = Field(default=TASKS_SCHEMA, alias="$schema")
    project_id: str
    generated_at: datetime
    epics: list[Epic] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    dependency_graph: dict[str, list[str]] | None = None

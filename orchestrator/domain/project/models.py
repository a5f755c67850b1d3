"""Project domain models.

This module contains the ProjectState root aggregate and the records it
owns. These are pure data structures with no I/O or side effects.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import Field, field_validator

from orchestrator.domain.shared.models import DocumentModel
from orchestrator.domain.task.models import Blocker, CurrentTask, Metrics, Progress, Task

STATE_SCHEMA = "orchestrator-state-v1"


class Phase(str, Enum):
    """Macro lifecycle stage of the whole project."""

    IDEATION = "ideation"
    SPECIFICATION = "specification"
    ARCHITECTURE = "architecture"
    PLANNING = "planning"
    IMPLEMENTATION = "implementation"
    TESTING = "testing"
    DEPLOYMENT = "deployment"
    COMPLETE = "complete"


# Linear order; COMPLETE is terminal
PHASE_ORDER: tuple[Phase, ...] = tuple(Phase)


class PhaseState(str, Enum):
    """Status of a single phase."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    SKIPPED = "skipped"


class PhaseStatus(DocumentModel):
    """Status record for one phase with its start/completion timestamps."""

    status: PhaseState = PhaseState.PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None


def default_phases() -> dict[Phase, PhaseStatus]:
    """Build a phases map with every phase pending."""
    return {phase: PhaseStatus() for phase in PHASE_ORDER}


class Project(DocumentModel):
    """Project identity. Created once at initialization."""

    id: str = Field(description="UUID4 string")
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1, description="URL-safe slug, e.g. 'todo-app'")
    description: str
    created: datetime
    updated: datetime
    version: str = "0.1.0"


class FrontendStack(DocumentModel):
    framework: str
    version: str | None = None
    build_tool: str | None = None
    styling: str | None = None
    state_management: str | None = None
    router: str | None = None
    component_library: str | None = None


class BackendStack(DocumentModel):
    runtime: str
    version: str | None = None
    framework: str | None = None
    orm: str | None = None
    database: str | None = None


class TestingStack(DocumentModel):
    unit: str | None = None
    integration: str | None = None
    e2e: str | None = None


class DeploymentStack(DocumentModel):
    platform: str | None = None
    ci: str | None = None
    containerization: str | None = None


class TechStack(DocumentModel):
    """Technology choices recorded during architecture."""

    frontend: FrontendStack | None = None
    backend: BackendStack | None = None
    testing: TestingStack | None = None
    deployment: DeploymentStack | None = None


class AutonomyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    FULL = "full"


class ProjectConfig(DocumentModel):
    """Per-project orchestration settings."""

    autonomy_level: AutonomyLevel = AutonomyLevel.HIGH
    checkpoint_frequency: int = Field(default=5, ge=1)
    auto_commit: bool = True
    max_parallel_tasks: int = Field(default=3, ge=1)
    max_retries: int = Field(default=3, ge=0)


class Decision(DocumentModel):
    """Immutable record of a notable decision (``DEC-NNN``)."""

    id: str
    topic: str
    decision: str
    rationale: str
    alternatives: list[str] | None = None
    decided_at: datetime
    decided_by: str


class Checkpoint(DocumentModel):
    """Metadata for a restorable snapshot (``CP-NNN``)."""

    id: str
    timestamp: datetime
    phase: Phase
    tasks_completed: int = Field(ge=0)
    git_commit: str | None = None
    description: str | None = None


class HistoryEntry(DocumentModel):
    """Append-only audit record of a state-changing action."""

    timestamp: datetime
    action: str
    agent: str | None = None
    task_id: str | None = None
    details: dict[str, Any] | None = None


class ProjectState(DocumentModel):
    """The single root aggregate persisted as project.json.

    Invariant: ``phases`` has an entry for every Phase, so ``phase``
    always names a key of ``phases``.
    """

    schema_: Literal["orchestrator-state-v1"] = Field(default=STATE_SCHEMA, alias="$schema")
    project: Project
    phase: Phase = Phase.IDEATION
    phases: dict[Phase, PhaseStatus] = Field(default_factory=default_phases)
    tech_stack: TechStack | None = None
    tasks: list[Task] = Field(default_factory=list)
    current_tasks: list[CurrentTask] = Field(default_factory=list)
    progress: Progress = Field(default_factory=Progress)
    blockers: list[Blocker] = Field(default_factory=list)
    decisions: list[Decision] = Field(default_factory=list)
    checkpoints: list[Checkpoint] = Field(default_factory=list)
    history: list[HistoryEntry] = Field(default_factory=list)
    metrics: Metrics | None = None
    config: ProjectConfig = Field(default_factory=ProjectConfig)

    @field_validator("phases")
    @classmethod
    def _every_phase_present(cls, phases: dict[Phase, PhaseStatus]) -> dict[Phase, PhaseStatus]:
        missing = [p.value for p in PHASE_ORDER if p not in phases]
        if missing:
            raise ValueError(f"missing phase entries: {', '.join(missing)}")
        return phases

    def get_task(self, task_id: str) -> Task | None:
        """Get the first task with the given id."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

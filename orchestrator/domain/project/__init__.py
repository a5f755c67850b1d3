"""Project domain package.

This package contains the ProjectState aggregate - phases, project
identity, configuration and the decision/checkpoint/history records.
"""

from orchestrator.domain.project.models import (
    PHASE_ORDER,
    STATE_SCHEMA,
    AutonomyLevel,
    BackendStack,
    Checkpoint,
    Decision,
    DeploymentStack,
    FrontendStack,
    HistoryEntry,
    Phase,
    PhaseState,
    PhaseStatus,
    Project,
    ProjectConfig,
    ProjectState,
    TechStack,
    TestingStack,
    default_phases,
)

__all__ = [
    "STATE_SCHEMA",
    "Phase",
    "PHASE_ORDER",
    "PhaseState",
    "PhaseStatus",
    "default_phases",
    "Project",
    "TechStack",
    "FrontendStack",
    "BackendStack",
    "TestingStack",
    "DeploymentStack",
    "AutonomyLevel",
    "ProjectConfig",
    "Decision",
    "Checkpoint",
    "HistoryEntry",
    "ProjectState",
]

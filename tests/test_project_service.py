"""Tests for project initialization, summaries and hook bookkeeping."""

import uuid

import pytest

from orchestrator.application import (
    add_tasks,
    build_checkpoint,
    complete_task,
    get_summary,
    initialize_state,
    is_complete,
    record_delegation_completed,
    record_session_stopped,
    set_tech_stack,
    should_checkpoint,
    slugify,
    start_task,
    tasks_since_checkpoint,
)
from orchestrator.domain.project import Phase, ProjectConfig, TechStack
from orchestrator.domain.shared import Err, Ok
from orchestrator.domain.task import TaskStatus

from conftest import make_task


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("My Todo App!", "my-todo-app"),
            ("  snake_case  name ", "snake-case-name"),
            ("--Already-Slugged--", "already-slugged"),
            ("v2.0 Release", "v20-release"),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestInitializeState:
    def test_fresh_state(self):
        result = initialize_state("Todo App", "A small todo service")
        assert isinstance(result, Ok)
        state = result.value
        uuid.UUID(state.project.id)
        assert state.project.slug == "todo-app"
        assert state.project.version == "0.1.0"
        assert state.phase == Phase.IDEATION
        assert state.phases[Phase.IDEATION].started_at is not None
        assert state.tasks == []
        assert state.progress.total == 0

    def test_logs_initialization(self, state):
        assert len(state.history) == 1
        entry = state.history[0]
        assert entry.action == "project_initialized"
        assert entry.details == {"name": "Todo App", "description": "A small todo service"}

    def test_explicit_slug_and_config(self):
        config = ProjectConfig(checkpoint_frequency=2)
        state = initialize_state("Todo App", "", slug="Custom Slug", config=config).value
        assert state.project.slug == "custom-slug"
        assert state.config.checkpoint_frequency == 2

    def test_empty_name_rejected(self):
        assert isinstance(initialize_state("   ", "x"), Err)

    def test_unsluggable_name_rejected(self):
        result = initialize_state("!!!", "x")
        assert isinstance(result, Err)
        assert "slug" in result.error


class TestTechStack:
    def test_set_tech_stack(self, state):
        stack = TechStack.model_validate(
            {"frontend": {"framework": "react", "buildTool": "vite"}, "backend": {"runtime": "node"}}
        )
        set_tech_stack(state, stack)
        assert state.tech_stack.frontend.build_tool == "vite"
        entry = state.history[-1]
        assert entry.action == "tech_stack_set"
        assert entry.agent == "architect"
        assert entry.details["frontend"] == {"framework": "react", "buildTool": "vite"}


class TestIsComplete:
    def test_no_tasks_is_not_complete(self, state):
        assert not is_complete(state)

    def test_completed_or_skipped(self, state):
        add_tasks(state, [make_task("T-001", status="completed"), make_task("T-002", status="skipped")])
        assert is_complete(state)

    def test_pending_task_not_complete(self, state_with_tasks):
        assert not is_complete(state_with_tasks)


class TestGetSummary:
    def test_summary_lines(self, state_with_tasks):
        start_task(state_with_tasks, "T-001")
        summary = get_summary(state_with_tasks)
        assert summary.startswith("## Todo App")
        assert "**Phase:** ideation" in summary
        assert "**Progress:** 0/3 tasks (0%)" in summary
        assert "**In Progress:** 1 tasks" in summary
        assert "- [T-001] Task T-001 (backend-dev)" in summary
        assert "Blocked" not in summary
        assert "all tasks complete" not in summary

    def test_completion_line(self, state):
        add_tasks(state, [make_task("T-001", status="completed"), make_task("T-002", status="skipped")])
        assert "**Status:** all tasks complete" in get_summary(state)


class TestCheckpointPolicy:
    def test_due_after_frequency_completions(self, state):
        state.config.checkpoint_frequency = 2
        add_tasks(state, [make_task(f"T-00{i}") for i in range(1, 5)])
        complete_task(state, "T-001")
        assert not should_checkpoint(state)
        complete_task(state, "T-002")
        assert should_checkpoint(state)

    def test_counts_from_last_checkpoint(self, state):
        state.config.checkpoint_frequency = 2
        add_tasks(state, [make_task(f"T-00{i}") for i in range(1, 5)])
        complete_task(state, "T-001")
        complete_task(state, "T-002")
        state.checkpoints.append(build_checkpoint(state, len(state.checkpoints)))
        assert tasks_since_checkpoint(state) == 0
        complete_task(state, "T-003")
        assert not should_checkpoint(state)

    def test_build_checkpoint_metadata(self, state):
        checkpoint = build_checkpoint(state, 2, git_commit="abc123", description="before refactor")
        assert checkpoint.id == "CP-003"
        assert checkpoint.phase == Phase.IDEATION
        assert checkpoint.tasks_completed == 0
        assert checkpoint.git_commit == "abc123"


class TestHookBookkeeping:
    def test_delegation_completed_refreshes_progress(self, state_with_tasks):
        state_with_tasks.get_task("T-001").status = TaskStatus.COMPLETED
        due = record_delegation_completed(state_with_tasks)
        assert due is False
        assert state_with_tasks.progress.completed == 1
        entry = state_with_tasks.history[-1]
        assert entry.action == "task_delegation_completed"
        assert entry.details["progress"]["completed"] == 1
        assert entry.details["progress"]["inProgress"] == 0

    def test_delegation_completed_reports_due_checkpoint(self, state_with_tasks):
        state_with_tasks.config.checkpoint_frequency = 1
        state_with_tasks.get_task("T-001").status = TaskStatus.COMPLETED
        assert record_delegation_completed(state_with_tasks) is True

    def test_session_stopped(self, state):
        entry = record_session_stopped(state)
        assert state.history[-1] is entry
        assert entry.action == "session_stopped"
        assert entry.details["phase"] == "ideation"
        assert entry.details["progress"]["total"] == 0

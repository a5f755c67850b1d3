"""Tests for the StateManager and checkpoint create/restore."""

import json

import pytest

from orchestrator.application import add_tasks, complete_task, start_task, transition_phase
from orchestrator.domain.project import Phase, ProjectConfig
from orchestrator.domain.shared import Err, NotFoundError, Ok, ValidationError
from orchestrator.domain.task import TaskFile, TaskStatus
from orchestrator.global_config import save_default_config
from orchestrator.manager import StateManager

from conftest import make_task


@pytest.fixture
def saved_state(manager, state_with_tasks):
    manager.save(state_with_tasks)
    return state_with_tasks


class TestStateManager:
    def test_initialize_saves_state(self, manager):
        result = manager.initialize("Todo App", "A small todo service")
        assert isinstance(result, Ok)
        assert manager.exists()
        assert manager.load().project.slug == "todo-app"

    def test_initialize_uses_user_defaults(self, manager):
        save_default_config(ProjectConfig(checkpoint_frequency=10, max_parallel_tasks=6))
        state = manager.initialize("Todo App", "").value
        assert state.config.checkpoint_frequency == 10
        assert manager.load().config.max_parallel_tasks == 6

    def test_initialize_invalid_name_writes_nothing(self, manager):
        assert isinstance(manager.initialize("", ""), Err)
        assert not manager.exists()

    def test_load_without_state(self, manager):
        with pytest.raises(NotFoundError):
            manager.load()

    def test_roots_are_independent(self, tmp_path):
        first = StateManager(tmp_path / "one")
        second = StateManager(tmp_path / "two")
        first.initialize("One", "")
        assert first.exists()
        assert not second.exists()


class TestImportTasks:
    def test_imports_planning_document(self, manager, state):
        manager.save_tasks(
            TaskFile(
                project_id=state.project.id,
                generated_at=state.project.created,
                tasks=[make_task("T-001"), make_task("T-002", dependencies=["T-001"])],
            )
        )
        result = manager.import_tasks(state)
        assert isinstance(result, Ok)
        assert [t.id for t in state.tasks] == ["T-001", "T-002"]
        assert state.progress.total == 2

    def test_duplicate_ids_rejected(self, manager, state_with_tasks):
        manager.save_tasks(
            TaskFile(
                project_id=state_with_tasks.project.id,
                generated_at=state_with_tasks.project.created,
                tasks=[make_task("T-001")],
            )
        )
        assert isinstance(manager.import_tasks(state_with_tasks), Err)
        assert len(state_with_tasks.tasks) == 3

    def test_missing_document(self, manager, state):
        with pytest.raises(NotFoundError):
            manager.import_tasks(state)


class TestCreateCheckpoint:
    def test_sequential_ids(self, manager, saved_state):
        first = manager.create_checkpoint(saved_state)
        second = manager.create_checkpoint(saved_state, git_commit="abc123", description="mid")
        assert first.id == "CP-001"
        assert second.id == "CP-002"
        assert second.git_commit == "abc123"
        assert [c.id for c in saved_state.checkpoints] == ["CP-001", "CP-002"]

    def test_snapshot_lists_itself(self, manager, saved_state):
        checkpoint = manager.create_checkpoint(saved_state)
        data = json.loads(manager.paths.checkpoint_file(checkpoint.id).read_text())
        assert [c["id"] for c in data["checkpoints"]] == ["CP-001"]
        assert data["history"][-1]["action"] != "checkpoint_created"

    def test_logs_history_in_live_state(self, manager, saved_state):
        checkpoint = manager.create_checkpoint(saved_state)
        entry = saved_state.history[-1]
        assert entry.action == "checkpoint_created"
        assert entry.details == {"checkpointId": checkpoint.id, "tasksCompleted": 0}

    def test_live_state_not_saved(self, manager, saved_state):
        manager.create_checkpoint(saved_state)
        assert manager.load().checkpoints == []

    def test_never_overwrites_orphan_snapshot(self, manager, saved_state):
        manager.checkpoints._snapshots.save("CP-004", saved_state)
        checkpoint = manager.create_checkpoint(saved_state)
        assert checkpoint.id == "CP-005"

    def test_invalid_state_leaves_checkpoints_untouched(self, manager, saved_state):
        saved_state.progress.percentage = 250
        with pytest.raises(ValidationError):
            manager.create_checkpoint(saved_state)
        assert saved_state.checkpoints == []
        assert manager.checkpoints.list_snapshots() == []


class TestRestoreCheckpoint:
    def test_round_trip(self, manager, saved_state):
        start_task(saved_state, "T-001")
        complete_task(saved_state, "T-001")
        transition_phase(saved_state, Phase.SPECIFICATION)
        captured_statuses = {t.id: t.status for t in saved_state.tasks}
        captured_history = len(saved_state.history)

        checkpoint = manager.create_checkpoint(saved_state)
        manager.save(saved_state)

        start_task(saved_state, "T-002")
        transition_phase(saved_state, Phase.ARCHITECTURE)
        manager.save(saved_state)

        restored = manager.restore_checkpoint(checkpoint.id)
        assert restored.phase == Phase.SPECIFICATION
        assert {t.id: t.status for t in restored.tasks} == captured_statuses
        assert restored.get_task("T-002").status == TaskStatus.PENDING
        # only checkpoint_restored is added to the snapshot's history
        assert len(restored.history) == captured_history + 1
        assert restored.history[-1].action == "checkpoint_restored"
        assert restored.history[-1].details == {"checkpointId": checkpoint.id}

    def test_restore_becomes_current_state(self, manager, saved_state):
        checkpoint = manager.create_checkpoint(saved_state)
        add_tasks(saved_state, [make_task("T-009")])
        manager.save(saved_state)

        manager.restore_checkpoint(checkpoint.id)
        assert [t.id for t in manager.load().tasks] == ["T-001", "T-002", "T-003"]

    def test_later_snapshots_survive_restore(self, manager, saved_state):
        first = manager.create_checkpoint(saved_state)
        manager.create_checkpoint(saved_state)

        restored = manager.restore_checkpoint(first.id)
        assert [c.id for c in restored.checkpoints] == ["CP-001"]
        assert manager.checkpoints.list_snapshots() == ["CP-001", "CP-002"]

        assert manager.create_checkpoint(restored).id == "CP-003"

    def test_missing_checkpoint(self, manager, saved_state):
        with pytest.raises(NotFoundError):
            manager.restore_checkpoint("CP-404")
        assert manager.load().phase == saved_state.phase

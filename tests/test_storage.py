"""Tests for JSON storage and the document repositories."""

import json
from pathlib import Path

import pytest

from orchestrator.domain.shared import (
    Err,
    NotFoundError,
    Ok,
    StorageError,
    ValidationError,
)
from orchestrator.infrastructure.storage import (
    CheckpointRepository,
    JsonStorage,
    StatePaths,
    StateRepository,
    TaskFileRepository,
)

from conftest import make_task


@pytest.fixture
def paths(project_root: Path) -> StatePaths:
    return StatePaths(project_root)


class TestJsonStorage:
    def test_save_and_load(self, tmp_path):
        storage = JsonStorage()
        path = tmp_path / "nested" / "doc.json"
        assert isinstance(storage.save_json(path, {"a": 1}), Ok)
        assert storage.load_json(path) == Ok({"a": 1})

    def test_missing_file(self, tmp_path):
        result = JsonStorage().load_json(tmp_path / "missing.json")
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = JsonStorage().load_json(path)
        assert isinstance(result.error, ValidationError)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff{")
        result = JsonStorage().load_json(path)
        assert isinstance(result.error, ValidationError)
        assert "Invalid UTF-8" in str(result.error)

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        result = JsonStorage().load_json(path)
        assert isinstance(result.error, ValidationError)

    def test_unserializable_data(self, tmp_path):
        path = tmp_path / "doc.json"
        result = JsonStorage().save_json(path, {"a": object()})
        assert isinstance(result.error, StorageError)
        assert not path.exists()

    def test_no_temp_files_left(self, tmp_path):
        storage = JsonStorage()
        path = tmp_path / "doc.json"
        storage.save_json(path, {"a": 1})
        storage.save_json(path, {"a": 2})
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]

    def test_failed_write_keeps_previous_document(self, tmp_path, monkeypatch):
        storage = JsonStorage()
        path = tmp_path / "doc.json"
        storage.save_json(path, {"a": 1})

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("orchestrator.infrastructure.storage.json_storage.os.replace", broken_replace)
        result = storage.save_json(path, {"a": 2})

        assert isinstance(result.error, StorageError)
        assert json.loads(path.read_text()) == {"a": 1}
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]


class TestStatePaths:
    def test_layout(self, paths, project_root):
        base = project_root / ".claude" / "orchestrator"
        assert paths.state_file == base / "state" / "project.json"
        assert paths.tasks_file == base / "state" / "tasks.json"
        assert paths.checkpoint_file("CP-001") == base / "checkpoints" / "CP-001.json"

    @pytest.mark.parametrize("bad_id", ["../project", "CP/001", "", ".hidden"])
    def test_rejects_unsafe_checkpoint_ids(self, paths, bad_id):
        with pytest.raises(ValidationError) as exc_info:
            paths.checkpoint_file(bad_id)
        assert exc_info.value.path == "checkpointId"


class TestStateRepository:
    def test_load_missing(self, paths):
        repo = StateRepository(paths)
        assert not repo.exists()
        with pytest.raises(NotFoundError):
            repo.load()

    def test_save_and_load(self, paths, state_with_tasks):
        repo = StateRepository(paths)
        repo.save(state_with_tasks)
        assert repo.exists()

        loaded = repo.load()
        assert [t.id for t in loaded.tasks] == ["T-001", "T-002", "T-003"]
        assert loaded.project.id == state_with_tasks.project.id

    def test_save_writes_camel_case(self, paths, state):
        StateRepository(paths).save(state)
        data = json.loads(paths.state_file.read_text())
        assert data["$schema"] == "orchestrator-state-v1"
        assert "currentTasks" in data
        assert data["config"]["checkpointFrequency"] == 5

    def test_save_stamps_updated(self, paths, state):
        before = state.project.updated
        StateRepository(paths).save(state)
        assert state.project.updated >= before

    def test_invalid_state_not_written(self, paths, state):
        repo = StateRepository(paths)
        repo.save(state)
        original = paths.state_file.read_text()

        state.progress.percentage = 250
        with pytest.raises(ValidationError) as exc_info:
            repo.save(state)

        assert exc_info.value.path == "progress.percentage"
        assert paths.state_file.read_text() == original

    def test_load_malformed_json(self, paths):
        paths.state_file.parent.mkdir(parents=True)
        paths.state_file.write_text("{")
        with pytest.raises(ValidationError):
            StateRepository(paths).load()

    def test_load_undecodable_bytes(self, paths):
        paths.state_file.parent.mkdir(parents=True)
        paths.state_file.write_bytes(b"\xff{")
        with pytest.raises(ValidationError):
            StateRepository(paths).load()

    def test_failed_save_keeps_updated(self, paths, state):
        before = state.project.updated
        state.progress.percentage = 250
        with pytest.raises(ValidationError):
            StateRepository(paths).save(state)
        assert state.project.updated == before

    def test_load_schema_violation(self, paths, state):
        repo = StateRepository(paths)
        repo.save(state)
        data = json.loads(paths.state_file.read_text())
        data["tasks"] = [{"id": "T-001"}]
        paths.state_file.write_text(json.dumps(data))

        with pytest.raises(ValidationError) as exc_info:
            repo.load()
        assert exc_info.value.path.startswith("tasks.0.")


class TestTaskFileRepository:
    def test_load_missing(self, paths):
        repo = TaskFileRepository(paths)
        assert not repo.exists()
        with pytest.raises(NotFoundError):
            repo.load()

    def test_load_document(self, paths):
        paths.tasks_file.parent.mkdir(parents=True)
        paths.tasks_file.write_text(
            json.dumps(
                {
                    "$schema": "orchestrator-tasks-v1",
                    "projectId": "p-1",
                    "generatedAt": "2026-01-05T10:00:00Z",
                    "tasks": [{"id": "T-001", "title": "A", "description": "", "agent": "qa"}],
                }
            )
        )
        task_file = TaskFileRepository(paths).load()
        assert task_file.project_id == "p-1"
        assert task_file.tasks[0].agent == "qa"


class TestCheckpointRepository:
    def test_save_load_list(self, paths, state):
        repo = CheckpointRepository(paths)
        assert repo.list_ids() == []

        repo.save("CP-002", state)
        repo.save("CP-001", state)

        assert repo.exists("CP-001")
        assert repo.list_ids() == ["CP-001", "CP-002"]
        assert repo.load("CP-001").project.id == state.project.id

    def test_load_missing(self, paths):
        with pytest.raises(NotFoundError):
            CheckpointRepository(paths).load("CP-404")

    def test_snapshot_is_full_state(self, paths, state):
        state.tasks.append(make_task("T-001"))
        CheckpointRepository(paths).save("CP-001", state)
        data = json.loads(paths.checkpoint_file("CP-001").read_text())
        assert data["$schema"] == "orchestrator-state-v1"
        assert data["tasks"][0]["id"] == "T-001"

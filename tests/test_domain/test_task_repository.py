"""Tests for TaskRepository."""

from datetime import datetime

import pytest

from tribetask.db.storage import StorageKeys
from tribetask.domain.entities.task import Task, TaskFilter, TaskPriority, TaskStatus
from tribetask.domain.repositories.task_repository import normalize_loaded_task
from tribetask.utils.errors import NotFoundError, ValidationError

from conftest import FIXED_NOW


class TestTaskCreate:
    """Test suite for task creation."""

    def test_create_defaults(self, task_repo):
        """Test that a bare title gets the default fields."""
        task = task_repo.create({"title": "Draft report"})

        assert task.id == 1
        assert task.priority == TaskPriority.MEDIUM
        assert task.status == TaskStatus.PENDING
        assert task.completed is False
        assert task.completed_at is None
        assert task.starred is False
        assert task.assigned_role == "personal"
        assert task.created_at == FIXED_NOW
        assert task.updated_at == FIXED_NOW

    def test_create_parses_fields(self, task_repo, sample_task):
        """Test that incoming values are normalized."""
        task = task_repo.create(sample_task)

        assert task.priority == TaskPriority.HIGH
        assert task.due_date == datetime(2026, 3, 14, 9, 0)
        assert task.tribe == "Work Team"
        assert task.tags == ["GROUP"]

    def test_create_inserts_newest_first(self, task_repo):
        """Test that new tasks are placed at the front."""
        task_repo.create({"title": "Older"})
        task_repo.create({"title": "Newer"})

        assert [t.title for t in task_repo.find()] == ["Newer", "Older"]

    def test_create_completed_sets_triple(self, task_repo):
        """Test creating an already completed task."""
        task = task_repo.create({"title": "Done", "completed": True})

        assert task.status == TaskStatus.COMPLETED
        assert task.completed_at == FIXED_NOW

    def test_create_with_completed_status(self, task_repo):
        """Test that status=completed implies completed."""
        task = task_repo.create({"title": "Done", "status": "completed"})

        assert task.completed is True
        assert task.completed_at == FIXED_NOW

    def test_create_requires_title(self, task_repo):
        """Test that a blank title is rejected without consuming an ID."""
        with pytest.raises(ValidationError):
            task_repo.create({"title": "   "})

        assert task_repo.create({"title": "Valid"}).id == 1

    def test_create_rejects_unknown_field(self, task_repo):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            task_repo.create({"title": "X", "colour": "red"})

        assert exc_info.value.field == "colour"

    def test_create_rejects_read_only_field(self, task_repo):
        """Test that callers cannot choose the ID."""
        with pytest.raises(ValidationError):
            task_repo.create({"title": "X", "id": 99})

    def test_create_rejects_bad_priority(self, task_repo):
        """Test enum validation."""
        with pytest.raises(ValidationError):
            task_repo.create({"title": "X", "priority": "urgent"})

    def test_create_persists(self, task_repo, store):
        """Test that the collection is saved after creation."""
        task_repo.create({"title": "Saved"})

        saved = store.load(StorageKeys.TASKS, [])
        assert [t["title"] for t in saved] == ["Saved"]

    def test_returned_task_is_a_copy(self, task_repo):
        """Test that mutating a returned task does not change stored state."""
        task = task_repo.create({"title": "Original"})
        task.title = "Mutated"
        task.tags.append("x")

        stored = task_repo.get(task.id)
        assert stored.title == "Original"
        assert stored.tags == []


class TestTaskQueries:
    """Test suite for task lookup and filtering."""

    @pytest.fixture
    def populated(self, task_repo):
        task_repo.create({"title": "A", "tribe": "Work Team", "starred": True})
        task_repo.create({"title": "B", "tribe": "Dev Squad", "completed": True})
        task_repo.create({"title": "C", "status": "in-progress", "tribe": "Work Team"})
        return task_repo

    def test_filter_by_tribe(self, populated):
        """Test filtering by tribe reference."""
        titles = [t.title for t in populated.find(TaskFilter(tribe="Work Team"))]
        assert titles == ["C", "A"]

    def test_filter_by_completed(self, populated):
        """Test filtering by completion."""
        titles = [t.title for t in populated.find(TaskFilter(completed=True))]
        assert titles == ["B"]

    def test_filter_by_status_and_tribe(self, populated):
        """Test that filters combine with AND."""
        result = populated.find(TaskFilter(status=TaskStatus.IN_PROGRESS, tribe="Work Team"))
        assert [t.title for t in result] == ["C"]

    def test_filter_by_starred(self, populated):
        """Test filtering by star."""
        assert [t.title for t in populated.find(TaskFilter(starred=True))] == ["A"]

    def test_get_accepts_numeric_string(self, populated):
        """Test that string IDs are normalized."""
        assert populated.get("1").title == "A"

    def test_get_missing(self, populated):
        """Test NotFoundError for unknown IDs."""
        with pytest.raises(NotFoundError) as exc_info:
            populated.get(42)

        assert exc_info.value.entity == "Task"
        assert exc_info.value.entity_id == 42

    def test_get_garbage_id(self, populated):
        """Test that non-numeric IDs are treated as not found."""
        with pytest.raises(NotFoundError):
            populated.get("abc")


class TestTaskUpdate:
    """Test suite for task updates and the completion triple."""

    def test_update_fields(self, task_repo, clock):
        """Test a plain field update."""
        task = task_repo.create({"title": "Draft"})
        clock.advance(minutes=5)

        updated = task_repo.update(task.id, {"title": "Final", "priority": "low"})

        assert updated.title == "Final"
        assert updated.priority == TaskPriority.LOW
        assert updated.updated_at == clock.now
        assert updated.created_at == FIXED_NOW

    def test_update_completed_true(self, task_repo):
        """Test that completing via update keeps the triple in sync."""
        task = task_repo.create({"title": "Draft"})

        updated = task_repo.update(task.id, {"completed": True})

        assert updated.status == TaskStatus.COMPLETED
        assert updated.completed_at == FIXED_NOW
        assert updated.is_consistent

    def test_update_status_completed(self, task_repo):
        """Test that status=completed derives completed and completed_at."""
        task = task_repo.create({"title": "Draft"})

        updated = task_repo.update(task.id, {"status": "completed"})

        assert updated.completed is True
        assert updated.completed_at == FIXED_NOW

    def test_reopen_via_status(self, task_repo):
        """Test that leaving completed clears completed and completed_at."""
        task = task_repo.create({"title": "Draft", "completed": True})

        updated = task_repo.update(task.id, {"status": "in-progress"})

        assert updated.completed is False
        assert updated.completed_at is None
        assert updated.status == TaskStatus.IN_PROGRESS

    def test_reopen_via_completed_false(self, task_repo):
        """Test that completed=False moves status back to pending."""
        task = task_repo.create({"title": "Draft", "completed": True})

        updated = task_repo.update(task.id, {"completed": False})

        assert updated.status == TaskStatus.PENDING
        assert updated.completed_at is None

    def test_completed_false_keeps_in_progress(self, task_repo):
        """Test that an open task keeps its non-completed status."""
        task = task_repo.create({"title": "Draft", "status": "in-progress"})

        updated = task_repo.update(task.id, {"completed": False})

        assert updated.status == TaskStatus.IN_PROGRESS

    def test_conflicting_status_and_completed(self, task_repo):
        """Test that a contradictory patch is rejected and nothing changes."""
        task = task_repo.create({"title": "Draft"})

        with pytest.raises(ValidationError):
            task_repo.update(task.id, {"status": "pending", "completed": True, "title": "New"})

        stored = task_repo.get(task.id)
        assert stored.title == "Draft"
        assert stored.completed is False

    def test_completed_at_is_read_only(self, task_repo):
        """Test that completed_at cannot be written directly."""
        task = task_repo.create({"title": "Draft"})

        with pytest.raises(ValidationError):
            task_repo.update(task.id, {"completed_at": "2026-03-01T00:00:00"})

    def test_update_missing(self, task_repo):
        """Test updating an unknown task."""
        with pytest.raises(NotFoundError):
            task_repo.update(7, {"title": "Ghost"})

    def test_unrelated_update_keeps_completed_at(self, task_repo, clock):
        """Test that completed_at is stamped once, not on every edit."""
        task = task_repo.create({"title": "Draft", "completed": True})
        clock.advance(hours=1)

        updated = task_repo.update(task.id, {"description": "notes"})

        assert updated.completed_at == FIXED_NOW


class TestTaskToggles:
    """Test suite for toggle operations."""

    def test_toggle_completed_twice(self, task_repo, clock):
        """Test toggling complete and back."""
        task = task_repo.create({"title": "Draft"})

        done = task_repo.toggle_completed(task.id)
        assert done.completed is True
        assert done.status == TaskStatus.COMPLETED
        assert done.completed_at == FIXED_NOW

        clock.advance(minutes=1)
        reopened = task_repo.toggle_completed(task.id)
        assert reopened.completed is False
        assert reopened.status == TaskStatus.PENDING
        assert reopened.completed_at is None

    def test_toggle_starred(self, task_repo):
        """Test that starring does not touch completion."""
        task = task_repo.create({"title": "Draft"})

        starred = task_repo.toggle_starred(task.id)

        assert starred.starred is True
        assert starred.completed is False
        assert task_repo.toggle_starred(task.id).starred is False

    def test_toggle_missing(self, task_repo):
        """Test toggling an unknown task."""
        with pytest.raises(NotFoundError):
            task_repo.toggle_completed(99)


class TestTaskDelete:
    """Test suite for task deletion."""

    def test_delete(self, task_repo, store):
        """Test removing a task."""
        task = task_repo.create({"title": "Draft"})

        result = task_repo.delete(task.id)

        assert result == {"message": "Task deleted successfully"}
        assert task_repo.count() == 0
        assert store.load(StorageKeys.TASKS, None) == []

    def test_delete_twice(self, task_repo):
        """Test that a second delete reports not found."""
        task = task_repo.create({"title": "Draft"})
        task_repo.delete(task.id)

        with pytest.raises(NotFoundError):
            task_repo.delete(task.id)


class TestNormalizeLoadedTask:
    """Test suite for repairing persisted tasks."""

    def test_completed_without_timestamp(self):
        """Test that a legacy completed record gets a timestamp and status."""
        task = Task(id=1, title="Legacy", completed=True)

        repaired = normalize_loaded_task(task, FIXED_NOW)

        assert repaired.status == TaskStatus.COMPLETED
        assert repaired.completed_at == FIXED_NOW

    def test_stale_completed_status(self):
        """Test that an open record with completed status is reopened."""
        task = Task(id=1, title="Legacy", status=TaskStatus.COMPLETED, completed=False)

        repaired = normalize_loaded_task(task, FIXED_NOW)

        assert repaired.status == TaskStatus.PENDING
        assert repaired.completed_at is None

    def test_consistent_task_untouched(self):
        """Test that consistent records are returned as-is."""
        stamp = datetime(2026, 3, 1, 8, 0)
        task = Task(
            id=1, title="Done", status=TaskStatus.COMPLETED, completed=True, completed_at=stamp
        )

        assert normalize_loaded_task(task, FIXED_NOW).completed_at == stamp

"""Tests for MockBackend wiring, reload and reset."""

import json

import pytest

from tribetask.backend import MockBackend, build_kv_backend
from tribetask.config import Settings
from tribetask.db.storage import InMemoryKeyValueBackend, PersistentStore, StorageKeys
from tribetask.domain.ids import EntityKind
from tribetask.utils.latency import LatencySimulator


class ReadOnlyBackend(InMemoryKeyValueBackend):
    """Backend that refuses every write."""

    def set(self, key: str, value: str) -> None:
        raise PermissionError("read-only storage")


class TestMockBackend:
    """Test suite for MockBackend."""

    def test_seed_not_persisted_until_mutation(self, kv_backend, seeded_backend):
        """Test that loading the demo data writes nothing."""
        assert kv_backend.keys() == []
        assert seeded_backend.task_repo.count() == 7

    @pytest.mark.asyncio
    async def test_state_survives_restart(self, store, clock):
        """Test that a new backend over the same store sees prior writes."""
        backend = MockBackend(store, LatencySimulator(0), clock=clock)
        await backend.tasks.create_task({"title": "Draft report"})
        await backend.tribes.add_member(1)

        reloaded = MockBackend(store, LatencySimulator(0), clock=clock)

        tasks = await reloaded.tasks.get_tasks()
        assert tasks[0].title == "Draft report"
        assert len(tasks) == 8
        assert (await reloaded.tribes.get_tribe(1)).members == 9

    def test_corrupt_records_are_skipped(self, kv_backend, clock):
        """Test that invalid records are dropped from the collection but kept aside."""
        kv_backend.set("test_tasks", json.dumps([
            {"id": 1, "title": "Good"},
            {"id": "x", "title": "Bad id"},
            {"id": 2},
            {"id": 1, "title": "Duplicate"},
        ]))
        store = PersistentStore(kv_backend, namespace="test")

        backend = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)

        assert [t.title for t in backend.task_repo.find()] == ["Good"]
        assert backend.allocator.peek(EntityKind.TASK) == 3
        rejected = store.load(StorageKeys.REJECTED_TASKS, [])
        assert [r.get("title") for r in rejected] == ["Bad id", None, "Duplicate"]

    def test_counter_seeded_from_unparseable_records(self, kv_backend, clock):
        """Test that IDs of stored records count even when the records are invalid."""
        kv_backend.set("test_tasks", json.dumps([{"id": 1}, {"id": 5}, {"id": 3}]))
        store = PersistentStore(kv_backend, namespace="test")

        backend = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)

        assert backend.task_repo.count() == 0
        assert backend.allocator.peek(EntityKind.TASK) == 6

    @pytest.mark.asyncio
    async def test_rejected_record_id_not_reissued(self, kv_backend, clock):
        """Test that a dropped record keeps its ID reserved across restarts."""
        kv_backend.set("test_tasks", json.dumps([
            {"id": 1, "title": "Good"},
            {"id": 2, "title": ""},
        ]))
        store = PersistentStore(kv_backend, namespace="test")
        backend = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)

        created = await backend.tasks.create_task({"title": "New"})
        assert created.id == 3
        assert [t["id"] for t in store.load(StorageKeys.TASKS, [])] == [3, 1]
        assert store.load(StorageKeys.REJECTED_TASKS, []) == [{"id": 2, "title": ""}]

        kv_backend.delete("test_counters")
        reloaded = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)

        assert reloaded.allocator.peek(EntityKind.TASK) == 4
        assert store.load(StorageKeys.REJECTED_TASKS, []) == [{"id": 2, "title": ""}]

    @pytest.mark.asyncio
    async def test_invalid_user_falls_back_to_default(self, kv_backend, clock):
        """Test that an unreadable stored user does not prevent startup."""
        kv_backend.set("test_user", json.dumps({"check_in_streak": "lots"}))
        store = PersistentStore(kv_backend, namespace="test")

        backend = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=True)

        user = await backend.auth.get_current_user()
        assert user.name == "John"
        assert user.check_in_streak == 5

    @pytest.mark.asyncio
    async def test_stored_user_is_loaded(self, kv_backend, clock):
        """Test that a valid stored user replaces the default."""
        kv_backend.set("test_user", json.dumps({
            "id": 7, "name": "Ana", "email": "ana@example.com", "avatar": "AN", "check_in_streak": 2,
        }))
        store = PersistentStore(kv_backend, namespace="test")

        backend = MockBackend(store, LatencySimulator(0), clock=clock)

        user = await backend.auth.get_current_user()
        assert (user.id, user.name, user.check_in_streak) == ("7", "Ana", 2)

    def test_inconsistent_records_repaired_on_load(self, kv_backend, clock):
        """Test that legacy records get a consistent completion triple."""
        kv_backend.set("test_tasks", json.dumps([
            {"id": 3, "title": "Legacy", "completed": True, "status": "pending"},
        ]))
        store = PersistentStore(kv_backend, namespace="test")

        backend = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)

        task = backend.task_repo.get(3)
        assert task.status.value == "completed"
        assert task.completed_at == clock.now

    @pytest.mark.asyncio
    async def test_writes_succeed_when_storage_fails(self, clock):
        """Test that in-memory state is authoritative when persistence fails."""
        store = PersistentStore(ReadOnlyBackend(), namespace="test")
        backend = MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)

        task = await backend.tasks.create_task({"title": "Unsaved"})

        assert (await backend.tasks.get_task(task.id)).title == "Unsaved"
        assert store.failure_count >= 1
        assert backend.stats.latest.tasks_progress.total == 1

    @pytest.mark.asyncio
    async def test_reset_restores_demo_data(self, kv_backend, seeded_backend):
        """Test that reset drops persisted state and reloads the seeds."""
        await seeded_backend.tasks.delete_task(1)
        await seeded_backend.tasks.create_task({"title": "Extra"})

        seeded_backend.reset()

        assert kv_backend.keys() == []
        assert seeded_backend.task_repo.ids() == [1, 2, 3, 4, 5, 6, 7]
        assert seeded_backend.allocator.to_dict() == {"taskId": 8, "tribeId": 4, "sessionId": 4}
        assert (await seeded_backend.tasks.create_task({"title": "Fresh"})).id == 8

    def test_from_settings_memory(self, clock):
        """Test building a backend from settings."""
        settings = Settings(
            storage_url="memory://",
            simulated_latency_ms=0,
            seed_demo_data=False,
            daily_focus_goal=90,
        )

        backend = MockBackend.from_settings(settings, clock=clock)

        assert backend.task_repo.count() == 0
        assert backend.stats.latest.daily_focus_goal == 90
        assert backend.store.is_healthy()

    def test_build_kv_backend_sqlite(self, tmp_path):
        """Test that a SQLite URL yields a SQL-backed medium."""
        settings = Settings(storage_url=f"sqlite:///{tmp_path / 'kv.db'}")

        kv = build_kv_backend(settings)
        kv.set("k", "v")

        assert kv.get("k") == "v"
        kv.close()

    @pytest.mark.asyncio
    async def test_sqlite_round_trip_across_backends(self, tmp_path, clock):
        """Test persistence through SQLite between two backend instances."""
        settings = Settings(
            storage_url=f"sqlite:///{tmp_path / 'kv.db'}",
            simulated_latency_ms=0,
            seed_demo_data=False,
        )
        first = MockBackend.from_settings(settings, clock=clock)
        await first.focus_sessions.create_session({"title": "Deep work", "duration": 50})
        first.close()

        second = MockBackend.from_settings(settings, clock=clock)

        sessions = await second.focus_sessions.get_sessions()
        assert [(s.id, s.duration) for s in sessions] == [(1, 50)]
        assert second.store.load(StorageKeys.COUNTERS, {})["sessionId"] == 2
        second.close()

"""Pytest configuration and fixtures for TribeTask tests."""

import os
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

# Set test environment
os.environ["APP_ENV"] = "test"
os.environ["DEBUG"] = "true"
os.environ["STORAGE_URL"] = "memory://"
os.environ["SIMULATED_LATENCY_MS"] = "0"

from tribetask.backend import MockBackend  # noqa: E402
from tribetask.db.storage import InMemoryKeyValueBackend, PersistentStore  # noqa: E402
from tribetask.utils.latency import LatencySimulator  # noqa: E402

FIXED_NOW = datetime(2026, 3, 14, 12, 0, 0)


class FakeClock:
    """Controllable clock injected into the backend."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW."""
    return FakeClock(FIXED_NOW)


@pytest.fixture
def kv_backend():
    """Raw in-memory key-value medium."""
    return InMemoryKeyValueBackend()


@pytest.fixture
def store(kv_backend):
    """PersistentStore over the in-memory medium."""
    return PersistentStore(kv_backend, namespace="test")


@pytest.fixture
def backend(store, clock):
    """Empty backend (no demo data) with zero latency."""
    return MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=False)


@pytest.fixture
def seeded_backend(store, clock):
    """Backend seeded with the demo data."""
    return MockBackend(store, LatencySimulator(0), clock=clock, seed_demo_data=True)


@pytest.fixture
def task_repo(backend):
    return backend.task_repo


@pytest.fixture
def tribe_repo(backend):
    return backend.tribe_repo


@pytest.fixture
def session_repo(backend):
    return backend.session_repo


@pytest.fixture
def sample_task():
    """Sample task fields for testing."""
    return {
        "title": "Test Task",
        "description": "This is a test task",
        "priority": "high",
        "due_date": "2026-03-14T09:00:00",
        "tribe": "Work Team",
        "tags": ["GROUP"],
    }


# ==================== TEST CLIENT ====================

@pytest.fixture
def test_client(backend):
    """Create a test client for the FastAPI app bound to an isolated backend."""
    from tribetask.main import create_app

    app = create_app(backend)
    with TestClient(app) as client:
        yield client

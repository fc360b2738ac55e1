"""Domain Repositories - Colecciones en memoria con persistencia."""

from tribetask.domain.repositories.base import (
    IRepository,
    InMemoryRepository,
    ChangeListener,
    load_collection,
)
from tribetask.domain.repositories.task_repository import TaskRepository
from tribetask.domain.repositories.tribe_repository import TribeRepository
from tribetask.domain.repositories.focus_session_repository import FocusSessionRepository

__all__ = [
    # Interfaces
    "IRepository",
    "InMemoryRepository",
    "ChangeListener",
    "load_collection",
    # Implementations
    "TaskRepository",
    "TribeRepository",
    "FocusSessionRepository",
]

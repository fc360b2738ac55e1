"""Domain Entities - Dataclasses del dominio."""

from tribetask.domain.entities.task import Task, TaskFilter, TaskPriority, TaskStatus
from tribetask.domain.entities.tribe import Tribe, TribeRole, MIN_MEMBERS
from tribetask.domain.entities.focus_session import FocusSession, FocusSessionStatus
from tribetask.domain.entities.user import UserProfile
from tribetask.domain.entities.stats import (
    Analytics,
    DashboardStats,
    DerivedStats,
    TasksProgress,
)

__all__ = [
    "Task",
    "TaskFilter",
    "TaskPriority",
    "TaskStatus",
    "Tribe",
    "TribeRole",
    "MIN_MEMBERS",
    "FocusSession",
    "FocusSessionStatus",
    "UserProfile",
    "Analytics",
    "DashboardStats",
    "DerivedStats",
    "TasksProgress",
]

"""
Stats Entities - Vistas derivadas, nunca persistidas.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tribetask.domain.entities.task import Task


@dataclass
class TasksProgress:
    """Par {completadas, total}."""

    completed: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"completed": self.completed, "total": self.total}


@dataclass
class DerivedStats:
    """Estadísticas del dashboard recalculadas desde el estado actual."""

    due_today: int
    focus_time: int
    tasks_progress: TasksProgress
    active_tribes: int
    daily_focus_goal: int
    sessions_completed: int
    computed_at: datetime = field(default_factory=datetime.now)

    @property
    def focus_goal_ratio(self) -> float:
        """Progreso hacia la meta diaria de foco (sin tope superior)."""
        if self.daily_focus_goal <= 0:
            return 0.0
        return self.focus_time / self.daily_focus_goal

    def to_dict(self) -> dict[str, Any]:
        return {
            "due_today": self.due_today,
            "focus_time": self.focus_time,
            "tasks_progress": self.tasks_progress.to_dict(),
            "active_tribes": self.active_tribes,
            "daily_focus_goal": self.daily_focus_goal,
            "sessions_completed": self.sessions_completed,
        }


@dataclass
class DashboardStats:
    """Stats + feed de tareas recientes/relevantes."""

    stats: DerivedStats
    recent_tasks: list[Task]

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.stats.to_dict(),
            "recent_tasks": [t.to_dict() for t in self.recent_tasks],
        }


@dataclass
class Analytics:
    """
    Analítica agregada.

    `weekly_tasks` y `weekly_focus` son series decorativas, no se
    derivan del estado persistido.
    """

    tasks_by_priority: dict[str, int]
    tasks_by_status: dict[str, int]
    completion_rate: float
    total_focus_time: int
    total_sessions: int
    weekly_tasks: list[int] = field(default_factory=list)
    weekly_focus: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks_by_priority": dict(self.tasks_by_priority),
            "tasks_by_status": dict(self.tasks_by_status),
            "completion_rate": self.completion_rate,
            "total_focus_time": self.total_focus_time,
            "total_sessions": self.total_sessions,
            "weekly_tasks": list(self.weekly_tasks),
            "weekly_focus": list(self.weekly_focus),
        }

"""
Aggregation - Estadísticas derivadas y feed del dashboard.

Funciones puras sobre el estado actual de las colecciones y el momento
actual. No guardan estado: se recalculan completas en cada llamada.
"""

from datetime import datetime
from typing import Iterable, Sequence

from tribetask.domain.entities.focus_session import FocusSession
from tribetask.domain.entities.stats import Analytics, DerivedStats, TasksProgress
from tribetask.domain.entities.task import Task, TaskPriority, TaskStatus
from tribetask.domain.entities.tribe import Tribe
from tribetask.utils.dates import (
    is_on_or_after_today,
    is_same_calendar_day,
    is_within_day,
)

DEFAULT_DAILY_FOCUS_GOAL = 180  # minutos
DEFAULT_FEED_LIMIT = 10

# Series ilustrativas para la vista de analítica
WEEKLY_TASKS_SERIES = (3, 5, 4, 6, 8, 5, 7)
WEEKLY_FOCUS_SERIES = (120, 150, 90, 180, 135, 160, 140)


def todays_sessions(sessions: Iterable[FocusSession], now: datetime) -> list[FocusSession]:
    """Sesiones con fecha igual o posterior al inicio de hoy."""
    return [s for s in sessions if is_on_or_after_today(s.date, now)]


def compute_stats(
    tasks: Sequence[Task],
    tribes: Sequence[Tribe],
    sessions: Sequence[FocusSession],
    now: datetime,
    daily_focus_goal: int = DEFAULT_DAILY_FOCUS_GOAL,
) -> DerivedStats:
    """
    Calcula las estadísticas del dashboard.

    Args:
        tasks: Tareas actuales
        tribes: Tribus actuales
        sessions: Sesiones de foco actuales
        now: Momento de referencia para "hoy"
        daily_focus_goal: Meta diaria de foco en minutos

    Returns:
        DerivedStats recién calculadas
    """
    due_today = sum(
        1 for task in tasks
        if not task.completed and is_within_day(task.due_date, now)
    )

    today = todays_sessions(sessions, now)
    focus_time = sum(session.duration or 0 for session in today)

    completed = sum(1 for task in tasks if task.completed)

    return DerivedStats(
        due_today=due_today,
        focus_time=focus_time,
        tasks_progress=TasksProgress(completed=completed, total=len(tasks)),
        active_tribes=len(tribes),
        daily_focus_goal=daily_focus_goal,
        sessions_completed=len(today),
        computed_at=now,
    )


def build_dashboard_feed(
    tasks: Sequence[Task],
    now: datetime,
    limit: int = DEFAULT_FEED_LIMIT,
) -> list[Task]:
    """
    Construye el feed de tareas del dashboard.

    Bandas en orden de prioridad, cada una excluye lo ya colocado:
    1. Tareas con vencimiento hoy (completadas o no)
    2. Tareas pendientes con estrella
    3. Resto de tareas pendientes

    El orden dentro de cada banda es el del repositorio.
    """
    placed: set[int] = set()
    feed: list[Task] = []

    def take(candidates: Iterable[Task]) -> None:
        for task in candidates:
            if task.id not in placed:
                placed.add(task.id)
                feed.append(task)

    take(t for t in tasks if is_same_calendar_day(t.due_date, now))
    take(t for t in tasks if t.starred and not t.completed)
    take(t for t in tasks if not t.completed)

    return feed[:max(limit, 0)]


def compute_analytics(
    tasks: Sequence[Task],
    sessions: Sequence[FocusSession],
) -> Analytics:
    """
    Analítica general: desglose por prioridad (tareas abiertas), por
    estado, tasa de completado (porcentaje) y totales de foco.
    """
    open_tasks = [t for t in tasks if not t.completed]
    by_priority = {
        priority.value: sum(1 for t in open_tasks if t.priority == priority)
        for priority in (TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW)
    }
    by_status = {
        status.value: sum(1 for t in tasks if t.status == status)
        for status in TaskStatus
    }

    completed = len(tasks) - len(open_tasks)
    completion_rate = (completed / len(tasks)) * 100 if tasks else 0.0

    return Analytics(
        tasks_by_priority=by_priority,
        tasks_by_status=by_status,
        completion_rate=completion_rate,
        total_focus_time=sum(s.duration or 0 for s in sessions),
        total_sessions=len(sessions),
        weekly_tasks=list(WEEKLY_TASKS_SERIES),
        weekly_focus=list(WEEKLY_FOCUS_SERIES),
    )

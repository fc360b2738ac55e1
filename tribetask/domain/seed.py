"""
Datos de demostración para el primer arranque.

Las fechas se generan relativas a `now` para que el dashboard siempre
tenga algo vencido hoy, mañana y en días pasados.
"""

from datetime import datetime, timedelta
from typing import Any

from tribetask.utils.mappers import format_datetime

DAY = timedelta(days=1)


def seed_user() -> dict[str, Any]:
    return {
        "id": "1",
        "name": "John",
        "email": "john@example.com",
        "avatar": "JD",
        "check_in_streak": 5,
    }


def _task(
    id: int,
    title: str,
    description: str,
    priority: str,
    due_date: datetime,
    tribe: str,
    status: str = "pending",
    completed_at: datetime | None = None,
    starred: bool = False,
    is_group_task: bool = False,
    tribe_role: str | None = None,
    assigned_role: str = "personal",
    tags: list[str] | None = None,
    created_at: datetime | None = None,
) -> dict[str, Any]:
    completed = status == "completed"
    return {
        "id": id,
        "title": title,
        "description": description,
        "priority": priority,
        "status": status,
        "due_date": format_datetime(due_date),
        "tribe": tribe,
        "tribe_role": tribe_role,
        "is_group_task": is_group_task,
        "assigned_role": assigned_role,
        "completed": completed,
        "starred": starred,
        "completed_at": format_datetime(completed_at) if completed else None,
        "tags": tags or [],
        "created_at": format_datetime(created_at),
        "updated_at": format_datetime(created_at),
    }


def seed_tasks(now: datetime) -> list[dict[str, Any]]:
    created = now - 7 * DAY
    return [
        _task(1, "Complete project proposal", "Finalize the Q1 project proposal", "high",
              now, "Work Team", status="in-progress", tribe_role="Leader",
              assigned_role="leader", tags=["RECOMMENDED TODAY"], created_at=created),
        _task(2, "Team sync meeting prep", "Prepare agenda for team sync", "high",
              now, "Work Team", tribe_role="Leader", is_group_task=True,
              assigned_role="leader", tags=["GROUP"], created_at=created),
        _task(3, "Review code changes", "Review PR #234", "medium",
              now + DAY, "Dev Squad", starred=True, tribe_role="Member",
              assigned_role="member", created_at=created),
        _task(4, "Update documentation", "Update API documentation", "low",
              now + 2 * DAY, "Dev Squad", starred=True, is_group_task=True,
              tribe_role="Member", assigned_role="member", tags=["GROUP"], created_at=created),
        _task(5, "Fix login bug", "Resolve authentication issue", "high",
              now - DAY, "Dev Squad", status="completed",
              completed_at=now - timedelta(hours=12), created_at=created),
        _task(6, "Design new landing page", "Create mockups for homepage redesign", "medium",
              now - 2 * DAY, "Work Team", status="completed",
              completed_at=now - DAY, created_at=created),
        _task(7, "Client presentation", "Present Q1 results to client", "high",
              now - 3 * DAY, "Work Team", status="completed",
              completed_at=now - 3 * DAY, created_at=created),
    ]


def seed_tribes(now: datetime) -> list[dict[str, Any]]:
    created = format_datetime(now - 30 * DAY)
    return [
        {
            "id": 1, "name": "Work Team", "description": "Product development team",
            "members": 8, "active_tasks": 12, "active_today": 3,
            "role": "leader", "color": "blue", "created_at": created,
        },
        {
            "id": 2, "name": "Dev Squad", "description": "Engineering collaboration",
            "members": 5, "active_tasks": 8, "active_today": 2,
            "role": "member", "color": "purple", "created_at": created,
        },
        {
            "id": 3, "name": "Study Group", "description": "Learning and growth",
            "members": 4, "active_tasks": 6, "active_today": 1,
            "role": "member", "color": "green", "created_at": created,
        },
    ]


def seed_sessions(now: datetime) -> list[dict[str, Any]]:
    sessions = []
    for id, title, duration, days_ago in (
        (1, "Deep work on project", 135, 1),
        (2, "Code review session", 90, 2),
        (3, "Documentation writing", 105, 3),
    ):
        date = now - days_ago * DAY
        sessions.append({
            "id": id,
            "title": title,
            "duration": duration,
            "date": format_datetime(date),
            "status": "completed",
            "task_id": None,
            "completed_at": format_datetime(date + timedelta(minutes=duration)),
        })
    return sessions

"""
Task Entity - Representación de una tarea del dominio.

Invariante de tres estados: `completed` es True si y solo si
`status == COMPLETED` si y solo si `completed_at` no es None.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from tribetask.utils.mappers import (
    format_datetime,
    parse_bool,
    parse_datetime,
    parse_enum,
    parse_int,
    parse_optional_text,
    parse_tags,
    parse_text,
)


class TaskStatus(str, Enum):
    """Estados de tarea."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Prioridades de tarea."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Task:
    """
    Entidad de Tarea.

    `tribe` es una referencia opaca a la tribu dueña (nombre o ID).
    """

    id: int
    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING

    # Fechas
    due_date: datetime | None = None
    completed_at: datetime | None = None

    # Relación con tribu
    tribe: str | None = None
    tribe_role: str | None = None  # Snapshot del rol del creador en la tribu
    is_group_task: bool = False
    assigned_role: str = "personal"  # personal, member, leader, delegate

    # Estado
    completed: bool = False
    starred: bool = False
    tags: list[str] = field(default_factory=list)

    # Metadata
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_consistent(self) -> bool:
        """Verifica el invariante completed/status/completed_at."""
        is_done = self.status == TaskStatus.COMPLETED
        return self.completed == is_done == (self.completed_at is not None)

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "due_date": format_datetime(self.due_date),
            "tribe": self.tribe,
            "tribe_role": self.tribe_role,
            "is_group_task": self.is_group_task,
            "assigned_role": self.assigned_role,
            "completed": self.completed,
            "starred": self.starred,
            "completed_at": format_datetime(self.completed_at),
            "tags": list(self.tags),
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Reconstruye una tarea desde un registro persistido."""
        return cls(
            id=parse_int(data.get("id"), "id", minimum=1),
            title=parse_text(data.get("title"), "title", required=True),
            description=parse_text(data.get("description"), "description"),
            priority=parse_enum(TaskPriority, data.get("priority", "medium"), "priority"),
            status=parse_enum(TaskStatus, data.get("status", "pending"), "status"),
            due_date=parse_datetime(data.get("due_date"), "due_date"),
            completed_at=parse_datetime(data.get("completed_at"), "completed_at"),
            tribe=parse_tribe_ref(data.get("tribe")),
            tribe_role=parse_optional_text(data.get("tribe_role"), "tribe_role"),
            is_group_task=parse_bool(data.get("is_group_task", False), "is_group_task"),
            assigned_role=parse_text(data.get("assigned_role") or "personal", "assigned_role"),
            completed=parse_bool(data.get("completed", False), "completed"),
            starred=parse_bool(data.get("starred", False), "starred"),
            tags=parse_tags(data.get("tags")),
            created_at=parse_datetime(data.get("created_at"), "created_at"),
            updated_at=parse_datetime(data.get("updated_at"), "updated_at"),
        )


def parse_tribe_ref(value: Any) -> str | None:
    """Normaliza la referencia a tribu (acepta nombre o ID numérico)."""
    if value is None or value == "":
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return parse_optional_text(value, "tribe")


@dataclass
class TaskFilter:
    """Filtros exactos para listar tareas."""

    status: TaskStatus | None = None
    completed: bool | None = None
    tribe: str | None = None
    starred: bool | None = None

    def matches(self, task: Task) -> bool:
        """Verifica si una tarea cumple todos los filtros dados."""
        if self.status is not None and task.status != self.status:
            return False
        if self.completed is not None and task.completed != self.completed:
            return False
        if self.tribe is not None and task.tribe != self.tribe:
            return False
        if self.starred is not None and task.starred != self.starred:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convierte a dict para logging/debugging."""
        return {
            k: v for k, v in {
                "status": self.status.value if self.status else None,
                "completed": self.completed,
                "tribe": self.tribe,
                "starred": self.starred,
            }.items() if v is not None
        }

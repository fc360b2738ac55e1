"""
FocusSession Entity - Bloque de trabajo enfocado.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from tribetask.utils.mappers import (
    format_datetime,
    parse_datetime,
    parse_enum,
    parse_int,
    parse_optional_int,
    parse_text,
)


class FocusSessionStatus(str, Enum):
    """Estados de sesión de foco."""
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class FocusSession:
    """Entidad de Sesión de Foco (duración en minutos)."""

    id: int
    title: str
    duration: int = 0
    date: datetime = field(default_factory=datetime.now)
    status: FocusSessionStatus = FocusSessionStatus.ACTIVE
    task_id: int | None = None
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == FocusSessionStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario."""
        return {
            "id": self.id,
            "title": self.title,
            "duration": self.duration,
            "date": format_datetime(self.date),
            "status": self.status.value,
            "task_id": self.task_id,
            "completed_at": format_datetime(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FocusSession":
        """Reconstruye una sesión desde un registro persistido."""
        return cls(
            id=parse_int(data.get("id"), "id", minimum=1),
            title=parse_text(data.get("title"), "title", required=True),
            duration=parse_int(data.get("duration", 0), "duration", minimum=0),
            date=parse_datetime(data.get("date"), "date") or datetime.now(),
            status=parse_enum(FocusSessionStatus, data.get("status", "active"), "status"),
            task_id=parse_optional_int(data.get("task_id"), "task_id"),
            completed_at=parse_datetime(data.get("completed_at"), "completed_at"),
        )

"""
Tribe Entity - Grupo colaborativo de usuarios.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from tribetask.utils.mappers import (
    format_datetime,
    parse_datetime,
    parse_enum,
    parse_int,
    parse_text,
)

MIN_MEMBERS = 1


class TribeRole(str, Enum):
    """Rol del usuario actual en la tribu."""
    LEADER = "leader"
    MEMBER = "member"


@dataclass
class Tribe:
    """
    Entidad de Tribu.

    `members` nunca baja de 1: la tribu siempre conserva a su creador.
    """

    id: int
    name: str
    description: str = ""
    members: int = MIN_MEMBERS
    active_tasks: int = 0
    active_today: int = 0
    role: TribeRole = TribeRole.LEADER
    color: str = "blue"

    # Metadata
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "members": self.members,
            "active_tasks": self.active_tasks,
            "active_today": self.active_today,
            "role": self.role.value,
            "color": self.color,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tribe":
        """Reconstruye una tribu desde un registro persistido."""
        return cls(
            id=parse_int(data.get("id"), "id", minimum=1),
            name=parse_text(data.get("name"), "name", required=True),
            description=parse_text(data.get("description"), "description"),
            members=max(MIN_MEMBERS, parse_int(data.get("members", MIN_MEMBERS), "members")),
            active_tasks=parse_int(data.get("active_tasks", 0), "active_tasks", minimum=0),
            active_today=parse_int(data.get("active_today", 0), "active_today", minimum=0),
            role=parse_enum(TribeRole, data.get("role", "leader"), "role"),
            color=parse_text(data.get("color") or "blue", "color"),
            created_at=parse_datetime(data.get("created_at"), "created_at"),
            updated_at=parse_datetime(data.get("updated_at"), "updated_at"),
        )

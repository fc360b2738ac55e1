"""
UserProfile Entity - Identidad del usuario actual.

El backend simulado no autentica: solo guarda quién está "logueado".
"""

from dataclasses import dataclass
from typing import Any

from tribetask.utils.errors import ValidationError
from tribetask.utils.mappers import parse_int, parse_text


@dataclass
class UserProfile:
    """Perfil del usuario actual."""

    id: str
    name: str
    email: str
    avatar: str = ""
    check_in_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "check_in_streak": self.check_in_streak,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        """Reconstruye el perfil guardado (ValidationError si no es válido)."""
        if not isinstance(data, dict):
            raise ValidationError("Invalid user: expected an object")
        user_id = data.get("id", "")
        if isinstance(user_id, int) and not isinstance(user_id, bool):
            user_id = str(user_id)
        return cls(
            id=parse_text(user_id, "id"),
            name=parse_text(data.get("name"), "name"),
            email=parse_text(data.get("email"), "email"),
            avatar=parse_text(data.get("avatar"), "avatar"),
            check_in_streak=parse_int(data.get("check_in_streak", 0) or 0, "check_in_streak", minimum=0),
        )


def make_avatar(text: str) -> str:
    """Iniciales para el avatar (dos primeras letras en mayúscula)."""
    return text[:2].upper()

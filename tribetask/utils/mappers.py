"""
Mappers centralizados - Conversión de valores crudos a tipos del dominio.

Los repositorios reciben dicts desde la capa HTTP o desde el
almacenamiento persistido; estas funciones normalizan esos valores
y lanzan ValidationError cuando no son interpretables.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from tribetask.utils.errors import ValidationError

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], value: Any, field: str) -> E:
    """Parsea un string (o el mismo enum) al enum indicado."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_cls:
            if member.value == normalized:
                return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"Invalid {field}: {value!r} (allowed: {allowed})", field=field)


def parse_datetime(value: Any, field: str) -> datetime | None:
    """
    Parsea un datetime desde ISO string, date o datetime.

    Los datetimes con zona horaria se convierten a hora local sin tzinfo.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid {field}: {value!r}", field=field) from None
    else:
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_datetime(value: datetime | None) -> str | None:
    """Serializa un datetime a ISO string."""
    return value.isoformat() if value else None


def parse_bool(value: Any, field: str) -> bool:
    """Acepta solo booleanos reales."""
    if isinstance(value, bool):
        return value
    raise ValidationError(f"Invalid {field}: expected boolean", field=field)


def parse_int(value: Any, field: str, minimum: int | None = None) -> int:
    """Parsea un entero, opcionalmente con valor mínimo."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Invalid {field}: expected integer", field=field)
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be >= {minimum}", field=field)
    return value


def parse_optional_int(value: Any, field: str) -> int | None:
    """Como parse_int pero admite None."""
    if value is None:
        return None
    return parse_int(value, field)


def parse_text(value: Any, field: str, required: bool = False) -> str:
    """Normaliza un campo de texto; los requeridos no pueden estar vacíos."""
    if value is None:
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field}: expected string", field=field)
    text = value.strip()
    if required and not text:
        raise ValidationError(f"{field} is required", field=field)
    return text


def parse_optional_text(value: Any, field: str) -> str | None:
    """Texto opcional: None o vacío se guardan como None."""
    if value is None:
        return None
    text = parse_text(value, field)
    return text or None


def parse_tags(value: Any, field: str = "tags") -> list[str]:
    """Parsea una lista de tags de texto."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(t, str) for t in value):
        raise ValidationError(f"Invalid {field}: expected list of strings", field=field)
    return list(value)

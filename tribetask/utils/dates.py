"""
Date Helpers - Utilidades para ventanas de "hoy".

Todas las fechas se manejan como datetimes locales sin tzinfo.
"""

from datetime import datetime, timedelta
from typing import Callable

Clock = Callable[[], datetime]


def start_of_day(dt: datetime | None = None) -> datetime:
    """Retorna la medianoche local del día de `dt`."""
    if dt is None:
        dt = datetime.now()
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def is_within_day(value: datetime | None, now: datetime) -> bool:
    """Verifica si `value` cae en [inicio de hoy, inicio de hoy + 24h)."""
    if value is None:
        return False
    start = start_of_day(now)
    return start <= value < start + timedelta(days=1)


def is_on_or_after_today(value: datetime | None, now: datetime) -> bool:
    """Verifica si `value` es igual o posterior al inicio de hoy."""
    if value is None:
        return False
    return value >= start_of_day(now)


def is_same_calendar_day(value: datetime | None, now: datetime) -> bool:
    """Compara solo el día calendario."""
    if value is None:
        return False
    return value.date() == now.date()

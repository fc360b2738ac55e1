"""
Domain module - Entidades, repositorios en memoria y servicios.

Estructura:
    - entities/: Dataclasses que representan el dominio
    - repositories/: Colecciones autoritativas en memoria
    - services/: Superficie async consumida por la UI (con latencia simulada)

NOTA: Los repositories y services NO se exportan aquí para evitar imports
circulares. Importar directamente de sus módulos cuando se necesiten.
"""

from tribetask.domain.entities import (
    Task,
    Tribe,
    FocusSession,
    UserProfile,
)

__all__ = [
    "Task",
    "Tribe",
    "FocusSession",
    "UserProfile",
]

"""
FocusSessionRepository - Colección autoritativa de sesiones de foco.
"""

import copy
import logging
from typing import Any

from tribetask.db.storage import StorageKeys
from tribetask.domain.entities.focus_session import FocusSession, FocusSessionStatus
from tribetask.domain.ids import EntityKind
from tribetask.domain.repositories.base import InMemoryRepository, check_fields
from tribetask.utils.mappers import (
    parse_datetime,
    parse_enum,
    parse_int,
    parse_optional_int,
    parse_text,
)

logger = logging.getLogger(__name__)

CREATE_FIELDS = frozenset({"title", "duration", "task_id", "date"})
UPDATE_FIELDS = frozenset({"title", "duration", "task_id", "date", "status"})
READ_ONLY_FIELDS = frozenset({"id", "completed_at"})


class FocusSessionRepository(InMemoryRepository[FocusSession]):
    """
    Repositorio de sesiones de foco en memoria.

    Orden: más reciente primero.
    """

    entity_name = "FocusSession"
    storage_key = StorageKeys.SESSIONS
    kind = EntityKind.SESSION

    def find(self, status: FocusSessionStatus | None = None) -> list[FocusSession]:
        """Lista sesiones, opcionalmente filtradas por estado."""
        sessions = [
            copy.deepcopy(session)
            for session in self._items
            if status is None or session.status == status
        ]
        logger.debug(f"Sesiones encontradas: {len(sessions)} (status={status})")
        return sessions

    def create(self, fields: dict[str, Any]) -> FocusSession:
        """Inicia una sesión de foco (estado activo)."""
        check_fields(fields, CREATE_FIELDS, READ_ONLY_FIELDS)
        now = self._clock()

        session = FocusSession(
            id=0,
            title=parse_text(fields.get("title"), "title", required=True),
            duration=parse_int(fields.get("duration") or 0, "duration", minimum=0),
            date=parse_datetime(fields.get("date"), "date") or now,
            status=FocusSessionStatus.ACTIVE,
            task_id=parse_optional_int(fields.get("task_id"), "task_id"),
        )
        session.id = self._allocate_id()

        self._items.insert(0, session)
        self._persist()
        self._notify("created")
        logger.info(f"Sesión de foco creada: id={session.id} '{session.title}'")
        return copy.deepcopy(session)

    def update(self, id: int, patch: dict[str, Any]) -> FocusSession:
        """Actualiza una sesión; `completed_at` sigue al estado."""
        index = self._index_of(id)
        check_fields(patch, UPDATE_FIELDS, READ_ONLY_FIELDS)
        now = self._clock()

        updated = copy.deepcopy(self._items[index])
        for name, value in patch.items():
            if name == "title":
                updated.title = parse_text(value, "title", required=True)
            elif name == "duration":
                updated.duration = parse_int(value, "duration", minimum=0)
            elif name == "task_id":
                updated.task_id = parse_optional_int(value, "task_id")
            elif name == "date":
                updated.date = parse_datetime(value, "date") or updated.date
            elif name == "status":
                updated.status = parse_enum(FocusSessionStatus, value, "status")

        if updated.is_completed:
            updated.completed_at = updated.completed_at or now
        else:
            updated.completed_at = None

        self._items[index] = updated
        self._persist()
        self._notify("updated")
        logger.info(f"Sesión de foco actualizada: id={updated.id} campos={sorted(patch)}")
        return copy.deepcopy(updated)

    def complete(self, id: int, duration: int | None = None) -> FocusSession:
        """
        Marca la sesión como completada.

        Args:
            id: ID de la sesión
            duration: Duración final en minutos; None conserva la actual
        """
        index = self._index_of(id)
        final_duration = None
        if duration is not None:
            final_duration = parse_int(duration, "duration", minimum=0)

        session = self._items[index]
        session.status = FocusSessionStatus.COMPLETED
        if final_duration is not None:
            session.duration = final_duration
        session.completed_at = self._clock()

        self._persist()
        self._notify("completed")
        logger.info(f"Sesión de foco completada: id={session.id} ({session.duration} min)")
        return copy.deepcopy(session)

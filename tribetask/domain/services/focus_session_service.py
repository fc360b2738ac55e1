"""
FocusSession Service - Superficie async de sesiones de foco.
"""

import logging
from typing import Any

from tribetask.domain.entities.focus_session import FocusSession, FocusSessionStatus
from tribetask.domain.repositories.focus_session_repository import FocusSessionRepository
from tribetask.utils.latency import LatencySimulator, simulated_latency
from tribetask.utils.mappers import parse_enum

logger = logging.getLogger(__name__)


class FocusSessionService:
    """Servicio de sesiones de foco."""

    def __init__(self, repo: FocusSessionRepository, latency: LatencySimulator):
        self._repo = repo
        self._latency = latency

    @simulated_latency
    async def get_sessions(
        self,
        status: FocusSessionStatus | str | None = None,
    ) -> list[FocusSession]:
        """Lista sesiones, opcionalmente por estado."""
        if status is not None:
            status = parse_enum(FocusSessionStatus, status, "status")
        return self._repo.find(status)

    @simulated_latency
    async def get_session(self, session_id: int) -> FocusSession:
        return self._repo.get(session_id)

    @simulated_latency
    async def create_session(self, fields: dict[str, Any]) -> FocusSession:
        return self._repo.create(fields)

    @simulated_latency
    async def update_session(self, session_id: int, patch: dict[str, Any]) -> FocusSession:
        return self._repo.update(session_id, patch)

    @simulated_latency
    async def complete_session(
        self,
        session_id: int,
        duration: int | None = None,
    ) -> FocusSession:
        """Completa una sesión, opcionalmente fijando la duración final."""
        return self._repo.complete(session_id, duration)

    @simulated_latency
    async def delete_session(self, session_id: int) -> dict[str, str]:
        return self._repo.delete(session_id)

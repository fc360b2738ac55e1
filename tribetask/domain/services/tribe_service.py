"""
Tribe Service - Superficie async de tribus.
"""

import logging
from typing import Any

from tribetask.domain.entities.tribe import Tribe
from tribetask.domain.repositories.tribe_repository import TribeRepository
from tribetask.utils.latency import LatencySimulator, simulated_latency

logger = logging.getLogger(__name__)


class TribeService:
    """Servicio de tribus."""

    def __init__(self, repo: TribeRepository, latency: LatencySimulator):
        self._repo = repo
        self._latency = latency

    @simulated_latency
    async def get_tribes(self) -> list[Tribe]:
        return self._repo.find()

    @simulated_latency
    async def get_tribe(self, tribe_id: int) -> Tribe:
        return self._repo.get(tribe_id)

    @simulated_latency
    async def create_tribe(self, fields: dict[str, Any]) -> Tribe:
        return self._repo.create(fields)

    @simulated_latency
    async def update_tribe(self, tribe_id: int, patch: dict[str, Any]) -> Tribe:
        return self._repo.update(tribe_id, patch)

    @simulated_latency
    async def delete_tribe(self, tribe_id: int) -> dict[str, str]:
        return self._repo.delete(tribe_id)

    @simulated_latency
    async def add_member(self, tribe_id: int, user_id: str | None = None) -> Tribe:
        """Agrega un miembro (el conteo es lo único que se modela)."""
        if user_id:
            logger.debug(f"Agregando usuario {user_id} a tribu {tribe_id}")
        return self._repo.add_member(tribe_id)

    @simulated_latency
    async def remove_member(self, tribe_id: int, user_id: str | None = None) -> Tribe:
        """Remueve un miembro; la tribu nunca queda con menos de 1."""
        return self._repo.remove_member(tribe_id, user_id)

"""
Admin API endpoints.

- Reiniciar los datos simulados
- Ver estado del almacenamiento
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tribetask.api.deps import get_backend
from tribetask.backend import MockBackend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class ResetResponse(BaseModel):
    """Respuesta de reinicio."""
    status: str
    message: str
    timestamp: str


class StorageResponse(BaseModel):
    """Estado del almacenamiento."""
    namespace: str
    healthy: bool
    persistence_failures: int
    last_failure: str | None = None
    counters: dict[str, int]


@router.post("/reset", response_model=ResetResponse)
async def reset_data(backend: MockBackend = Depends(get_backend)):
    """Borra lo persistido y recarga los datos iniciales."""
    backend.reset()
    return ResetResponse(
        status="completed",
        message="Mock data reset",
        timestamp=datetime.now().isoformat(),
    )


@router.get("/storage", response_model=StorageResponse)
async def get_storage_status(backend: MockBackend = Depends(get_backend)):
    """Estado del medio durable y fallos de persistencia absorbidos."""
    store = backend.store
    last = store.last_failure
    return StorageResponse(
        namespace=store.namespace,
        healthy=store.is_healthy(),
        persistence_failures=store.failure_count,
        last_failure=last.message if last else None,
        counters=backend.allocator.to_dict(),
    )

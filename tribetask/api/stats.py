"""Endpoints de estadísticas."""

from fastapi import APIRouter, Depends

from tribetask.api.deps import get_backend
from tribetask.backend import MockBackend

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard")
async def get_dashboard_stats(backend: MockBackend = Depends(get_backend)):
    """Stats del día + feed de tareas recientes."""
    dashboard = await backend.stats.get_dashboard_stats()
    return dashboard.to_dict()


@router.get("/analytics")
async def get_analytics(backend: MockBackend = Depends(get_backend)):
    """Analítica general (series semanales ilustrativas)."""
    analytics = await backend.stats.get_analytics()
    return analytics.to_dict()

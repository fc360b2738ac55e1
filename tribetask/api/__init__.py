"""API HTTP de desarrollo sobre el backend simulado."""

from fastapi import APIRouter

from tribetask.api import admin, auth, focus_sessions, stats, tasks, tribes

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(tasks.router)
api_router.include_router(tribes.router)
api_router.include_router(focus_sessions.router)
api_router.include_router(stats.router)
api_router.include_router(admin.router)

__all__ = ["api_router"]

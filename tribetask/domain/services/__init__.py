"""
Domain Services - Operaciones async consumidas por la UI.

Cada servicio envuelve un repositorio con latencia simulada.
"""

from tribetask.domain.services.task_service import TaskService
from tribetask.domain.services.tribe_service import TribeService
from tribetask.domain.services.focus_session_service import FocusSessionService
from tribetask.domain.services.stats_service import StatsService
from tribetask.domain.services.auth_service import AuthResult, AuthService

__all__ = [
    "TaskService",
    "TribeService",
    "FocusSessionService",
    "StatsService",
    "AuthService",
    "AuthResult",
]

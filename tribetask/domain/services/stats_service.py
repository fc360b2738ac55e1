"""
Stats Service - Estadísticas del dashboard y analítica.

Las estadísticas se recalculan completas después de cada mutación
(vía `refresh`, registrado como listener de cambios de los
repositorios) y también en cada lectura. No hay estado incremental.
"""

import logging
from datetime import datetime

from tribetask.domain.aggregation import (
    DEFAULT_DAILY_FOCUS_GOAL,
    DEFAULT_FEED_LIMIT,
    build_dashboard_feed,
    compute_analytics,
    compute_stats,
)
from tribetask.domain.entities.stats import Analytics, DashboardStats, DerivedStats
from tribetask.domain.repositories.focus_session_repository import FocusSessionRepository
from tribetask.domain.repositories.task_repository import TaskRepository
from tribetask.domain.repositories.tribe_repository import TribeRepository
from tribetask.utils.dates import Clock
from tribetask.utils.latency import LatencySimulator, simulated_latency

logger = logging.getLogger(__name__)


class StatsService:
    """
    Servicio de estadísticas.

    `latest` guarda la última foto calculada tras una mutación; se
    reemplaza completa en cada cambio, nunca se parchea.
    """

    def __init__(
        self,
        tasks: TaskRepository,
        tribes: TribeRepository,
        sessions: FocusSessionRepository,
        latency: LatencySimulator,
        clock: Clock = datetime.now,
        daily_focus_goal: int = DEFAULT_DAILY_FOCUS_GOAL,
        feed_limit: int = DEFAULT_FEED_LIMIT,
    ):
        self._tasks = tasks
        self._tribes = tribes
        self._sessions = sessions
        self._latency = latency
        self._clock = clock
        self._daily_focus_goal = daily_focus_goal
        self._feed_limit = feed_limit
        self._latest: DerivedStats | None = None

    @property
    def latest(self) -> DerivedStats | None:
        return self._latest

    def compute(self) -> DerivedStats:
        """Calcula las estadísticas sobre el estado actual (síncrono)."""
        return compute_stats(
            self._tasks.snapshot(),
            self._tribes.snapshot(),
            self._sessions.snapshot(),
            now=self._clock(),
            daily_focus_goal=self._daily_focus_goal,
        )

    def refresh(self, reason: str = "") -> DerivedStats:
        """Listener de cambios: recalcula y reemplaza la última foto."""
        self._latest = self.compute()
        logger.debug(f"Stats recalculadas ({reason or 'manual'}): {self._latest.to_dict()}")
        return self._latest

    @simulated_latency
    async def get_dashboard_stats(self) -> DashboardStats:
        """Stats del dashboard más el feed de tareas recientes."""
        stats = self.refresh("dashboard")
        feed = build_dashboard_feed(
            self._tasks.snapshot(),
            now=self._clock(),
            limit=self._feed_limit,
        )
        logger.debug(f"Dashboard con {len(feed)} tareas recientes")
        return DashboardStats(stats=stats, recent_tasks=feed)

    @simulated_latency
    async def get_analytics(self) -> Analytics:
        """Analítica general (las series semanales son ilustrativas)."""
        return compute_analytics(self._tasks.snapshot(), self._sessions.snapshot())

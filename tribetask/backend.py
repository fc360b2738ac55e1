"""
MockBackend - Raíz de composición del backend simulado.

Construye una sola vez por proceso el store, el asignador de IDs, los
repositorios y los servicios, y los conecta por referencia. Los tests
crean instancias aisladas con almacenamiento en memoria.
"""

import logging
from datetime import datetime
from typing import Any

from tribetask.config import Settings, get_settings
from tribetask.db.storage import (
    IKeyValueBackend,
    InMemoryKeyValueBackend,
    PersistentStore,
    SQLAlchemyKeyValueBackend,
    StorageKeys,
)
from tribetask.domain.entities.focus_session import FocusSession
from tribetask.domain.entities.task import Task
from tribetask.domain.entities.tribe import Tribe
from tribetask.domain.entities.user import UserProfile
from tribetask.domain.ids import EntityKind, IdentifierAllocator
from tribetask.domain.repositories import (
    FocusSessionRepository,
    TaskRepository,
    TribeRepository,
    load_collection,
)
from tribetask.domain.repositories.base import raw_record_id
from tribetask.domain.repositories.task_repository import normalize_loaded_task
from tribetask.domain.seed import seed_sessions, seed_tasks, seed_tribes, seed_user
from tribetask.domain.services import (
    AuthService,
    FocusSessionService,
    StatsService,
    TaskService,
    TribeService,
)
from tribetask.utils.dates import Clock
from tribetask.utils.errors import ValidationError
from tribetask.utils.latency import LatencySimulator

logger = logging.getLogger(__name__)

GUEST_USER: dict[str, Any] = {
    "id": "guest",
    "name": "Guest",
    "email": "",
    "avatar": "GU",
    "check_in_streak": 0,
}


class MockBackend:
    """
    Backend simulado completo.

    Uso:
        backend = MockBackend.from_settings()
        task = await backend.tasks.create_task({"title": "Draft report"})
        dashboard = await backend.stats.get_dashboard_stats()
    """

    def __init__(
        self,
        store: PersistentStore,
        latency: LatencySimulator | None = None,
        clock: Clock = datetime.now,
        seed_demo_data: bool = True,
        daily_focus_goal: int = 180,
        feed_limit: int = 10,
    ):
        self.store = store
        self.latency = latency or LatencySimulator(0)
        self._clock = clock
        self._seed_demo_data = seed_demo_data
        self._daily_focus_goal = daily_focus_goal
        self._feed_limit = feed_limit
        self._load()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        clock: Clock = datetime.now,
    ) -> "MockBackend":
        """Construye el backend según la configuración."""
        settings = settings or get_settings()
        store = PersistentStore(build_kv_backend(settings), namespace=settings.storage_namespace)
        return cls(
            store=store,
            latency=LatencySimulator(settings.simulated_latency_ms),
            clock=clock,
            seed_demo_data=settings.seed_demo_data,
            daily_focus_goal=settings.daily_focus_goal,
            feed_limit=settings.dashboard_feed_limit,
        )

    # ==================== Inicialización ====================

    def _load(self) -> None:
        """Carga (o siembra) el estado y conecta los componentes."""
        now = self._clock()
        store = self.store

        if self._seed_demo_data:
            defaults = (seed_tasks(now), seed_tribes(now), seed_sessions(now), seed_user())
        else:
            defaults = ([], [], [], dict(GUEST_USER))
        default_tasks, default_tribes, default_sessions, default_user = defaults

        loaded_tasks = load_collection(store, StorageKeys.TASKS, default_tasks, Task.from_dict, "Task")
        loaded_tribes = load_collection(store, StorageKeys.TRIBES, default_tribes, Tribe.from_dict, "Tribe")
        loaded_sessions = load_collection(
            store, StorageKeys.SESSIONS, default_sessions, FocusSession.from_dict, "FocusSession"
        )
        tasks = [normalize_loaded_task(task, now) for task in loaded_tasks.items]
        tribes = loaded_tribes.items
        sessions = loaded_sessions.items

        user = self._load_user(default_user)

        self.allocator = IdentifierAllocator(
            store,
            {
                EntityKind.TASK: loaded_tasks.ids
                + self._keep_rejected(StorageKeys.REJECTED_TASKS, loaded_tasks.rejected),
                EntityKind.TRIBE: loaded_tribes.ids
                + self._keep_rejected(StorageKeys.REJECTED_TRIBES, loaded_tribes.rejected),
                EntityKind.SESSION: loaded_sessions.ids
                + self._keep_rejected(StorageKeys.REJECTED_SESSIONS, loaded_sessions.rejected),
            },
        )

        self.task_repo = TaskRepository(store, self.allocator, tasks, clock=self._clock)
        self.tribe_repo = TribeRepository(store, self.allocator, tribes, clock=self._clock)
        self.session_repo = FocusSessionRepository(store, self.allocator, sessions, clock=self._clock)

        self.stats = StatsService(
            self.task_repo,
            self.tribe_repo,
            self.session_repo,
            self.latency,
            clock=self._clock,
            daily_focus_goal=self._daily_focus_goal,
            feed_limit=self._feed_limit,
        )
        for repo in (self.task_repo, self.tribe_repo, self.session_repo):
            repo.set_change_listener(self.stats.refresh)

        self.tasks = TaskService(self.task_repo, self.latency)
        self.tribes = TribeService(self.tribe_repo, self.latency)
        self.focus_sessions = FocusSessionService(self.session_repo, self.latency)
        self.auth = AuthService(store, user, self.latency, clock=self._clock)

        self.stats.refresh("startup")
        logger.info(
            f"Backend simulado listo: {len(tasks)} tareas, {len(tribes)} tribus, "
            f"{len(sessions)} sesiones (namespace={store.namespace})"
        )

    def _load_user(self, default_user: dict[str, Any]) -> UserProfile:
        """Carga el perfil guardado; si no es válido usa el por defecto."""
        user_data = self.store.load(StorageKeys.USER, default_user)
        try:
            return UserProfile.from_dict(user_data)
        except ValidationError as e:
            logger.warning(f"Perfil de usuario inválido en almacenamiento, usando el por defecto: {e}")
            return UserProfile.from_dict(default_user)

    def _keep_rejected(self, key: str, rejected: list[Any]) -> list[int]:
        """
        Guarda aparte los registros descartados al cargar.

        Returns:
            IDs de todos los registros descartados conocidos
        """
        kept = self.store.load(key, [])
        if not isinstance(kept, list):
            kept = []
        new_records = [record for record in rejected if record not in kept]
        if new_records:
            kept.extend(new_records)
            self.store.save(key, kept)
            logger.warning(f"{len(new_records)} registros descartados guardados en '{key}'")

        ids = (raw_record_id(record) for record in kept)
        return [record_id for record_id in ids if record_id is not None]

    def close(self) -> None:
        """Cierra el medio durable."""
        self.store.close()

    def reset(self) -> None:
        """Borra todo lo persistido y vuelve a los datos iniciales."""
        logger.warning("Reiniciando datos del backend simulado")
        self.store.clear(StorageKeys.ALL)
        self._load()


def build_kv_backend(settings: Settings) -> IKeyValueBackend:
    """Elige el medio durable según `storage_url`."""
    if settings.uses_memory_storage:
        return InMemoryKeyValueBackend()

    from tribetask.db.database import create_storage_engine, init_db

    engine = create_storage_engine(settings.storage_url)
    init_db(engine)
    return SQLAlchemyKeyValueBackend(engine)

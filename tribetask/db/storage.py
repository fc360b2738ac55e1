"""
Persistent Store - Adaptador best-effort sobre un almacenamiento key-value.

Modelo de dos niveles:
- El estado en memoria de los repositorios es la fuente de verdad.
- El almacenamiento es un sumidero durable que puede fallar.

Los fallos de escritura se registran y se notifican a los listeners,
nunca se propagan a los llamadores.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Iterable

from sqlalchemy import Engine, delete
from sqlalchemy.orm import Session

from tribetask.db.database import check_db_connection
from tribetask.db.models import KeyValueModel
from tribetask.utils.errors import (
    ErrorCategory,
    ErrorContext,
    PersistenceError,
    log_error,
)

logger = logging.getLogger(__name__)

FailureListener = Callable[[ErrorContext], None]


class StorageKeys:
    """Claves persistidas (sin namespace)."""

    TASKS = "tasks"
    TRIBES = "tribes"
    SESSIONS = "sessions"
    USER = "user"
    COUNTERS = "counters"

    # Registros descartados al cargar, guardados aparte para no perderlos
    REJECTED_TASKS = "tasks_rejected"
    REJECTED_TRIBES = "tribes_rejected"
    REJECTED_SESSIONS = "sessions_rejected"

    ALL = (
        TASKS,
        TRIBES,
        SESSIONS,
        USER,
        COUNTERS,
        REJECTED_TASKS,
        REJECTED_TRIBES,
        REJECTED_SESSIONS,
    )


# ==================== Backends ====================


class IKeyValueBackend(ABC):
    """Interface para el medio durable (strings crudos)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Obtiene el valor crudo de una clave."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Guarda el valor crudo de una clave."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Elimina una clave (no falla si no existe)."""
        pass

    def is_healthy(self) -> bool:
        """Verifica que el medio responde."""
        return True

    def close(self) -> None:
        """Libera recursos del medio."""
        pass


class InMemoryKeyValueBackend(IKeyValueBackend):
    """Backend en memoria; útil para tests y `storage_url=memory://`."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SQLAlchemyKeyValueBackend(IKeyValueBackend):
    """Backend sobre la tabla `kv_store` usando sesiones síncronas."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def get(self, key: str) -> str | None:
        with Session(self._engine) as session:
            row = session.get(KeyValueModel, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with Session(self._engine) as session:
            row = session.get(KeyValueModel, key)
            if row is None:
                session.add(KeyValueModel(key=key, value=value))
            else:
                row.value = value
                row.updated_at = datetime.now()
            session.commit()

    def delete(self, key: str) -> None:
        with Session(self._engine) as session:
            session.execute(delete(KeyValueModel).where(KeyValueModel.key == key))
            session.commit()

    def is_healthy(self) -> bool:
        return check_db_connection(self._engine)

    def close(self) -> None:
        self._engine.dispose()
        logger.info("Conexiones de base de datos cerradas")


# ==================== Store ====================


class PersistentStore:
    """
    Conducto de durabilidad sin estado propio.

    Uso:
        store = PersistentStore(InMemoryKeyValueBackend())
        tasks = store.load(StorageKeys.TASKS, [])
        store.save(StorageKeys.TASKS, tasks)
    """

    def __init__(self, backend: IKeyValueBackend, namespace: str = "tribetask_mock"):
        self._backend = backend
        self._namespace = namespace
        self._listeners: list[FailureListener] = []
        self._failure_count = 0
        self._last_failure: ErrorContext | None = None

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def failure_count(self) -> int:
        """Número de fallos de durabilidad desde el arranque."""
        return self._failure_count

    @property
    def last_failure(self) -> ErrorContext | None:
        return self._last_failure

    def is_healthy(self) -> bool:
        """Verifica que el medio durable responde."""
        return self._backend.is_healthy()

    def close(self) -> None:
        self._backend.close()

    def add_failure_listener(self, listener: FailureListener) -> None:
        """Registra un callback que recibe cada fallo de durabilidad."""
        self._listeners.append(listener)

    def _full_key(self, key: str) -> str:
        return f"{self._namespace}_{key}"

    def load(self, key: str, default: Any) -> Any:
        """
        Carga un valor persistido.

        Args:
            key: Clave sin namespace
            default: Valor a usar si no hay nada guardado o no parsea

        Returns:
            El valor guardado, o una copia profunda e independiente de `default`
        """
        full_key = self._full_key(key)
        try:
            raw = self._backend.get(full_key)
            if raw:
                return json.loads(raw)
        except Exception as e:
            log_error(
                PersistenceError(f"Error loading {full_key}: {e}", key=full_key),
                operation="store.load",
            )
        return copy.deepcopy(default)

    def save(self, key: str, value: Any) -> None:
        """
        Serializa y guarda `value`.

        Cualquier fallo (serialización, disco lleno, DB bloqueada) se
        registra, se notifica a los listeners y se absorbe.
        """
        full_key = self._full_key(key)
        try:
            raw = json.dumps(value)
            self._backend.set(full_key, raw)
            logger.debug(f"Guardado {full_key} ({len(raw)} bytes)")
        except Exception as e:
            self._record_failure(
                PersistenceError(f"Error saving {full_key}: {e}", key=full_key),
                operation="store.save",
            )

    def clear(self, keys: Iterable[str] = StorageKeys.ALL) -> None:
        """Elimina claves persistidas (best effort)."""
        for key in keys:
            full_key = self._full_key(key)
            try:
                self._backend.delete(full_key)
            except Exception as e:
                self._record_failure(
                    PersistenceError(f"Error removing {full_key}: {e}", key=full_key),
                    operation="store.clear",
                )
        logger.info(f"Almacenamiento limpiado (namespace={self._namespace})")

    def _record_failure(self, error: PersistenceError, operation: str) -> None:
        context = log_error(error, operation=operation, category=ErrorCategory.PERSISTENCE)
        self._failure_count += 1
        self._last_failure = context
        for listener in self._listeners:
            try:
                listener(context)
            except Exception as e:
                logger.warning(f"Listener de fallos de persistencia falló: {e}")

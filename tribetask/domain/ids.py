"""
Identifier Allocator - Contadores monotónicos por tipo de entidad.

Los IDs nunca se reutilizan, ni siquiera tras borrar entidades. El
trío de contadores se persiste después de cada asignación.
"""

import logging
from enum import Enum
from typing import Any, Iterable

from tribetask.db.storage import PersistentStore, StorageKeys

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    """Tipos de entidad, cada uno con su propio espacio de IDs."""
    TASK = "taskId"
    TRIBE = "tribeId"
    SESSION = "sessionId"


def next_id_after(ids: Iterable[int]) -> int:
    """max(ids) + 1, o 1 si no hay IDs."""
    return max(ids, default=0) + 1


class IdentifierAllocator:
    """
    Asignador de IDs.

    Al inicializar, cada contador parte de `max(ids existentes) + 1` y
    luego se sobreescribe con el valor persistido si existe. Si el valor
    persistido es menor que el derivado (contador corrupto o perdido
    parcialmente) se usa el derivado para no reemitir un ID vivo.
    """

    def __init__(self, store: PersistentStore, existing: dict[EntityKind, Iterable[int]]):
        self._store = store
        derived = {kind: next_id_after(existing.get(kind, ())) for kind in EntityKind}

        persisted = store.load(StorageKeys.COUNTERS, {})
        self._counters: dict[EntityKind, int] = {}
        for kind in EntityKind:
            self._counters[kind] = max(derived[kind], _coerce_counter(persisted, kind))

        logger.debug(f"Contadores inicializados: {self.to_dict()}")

    def next(self, kind: EntityKind) -> int:
        """Retorna el siguiente ID de `kind` e incrementa el contador."""
        value = self._counters[kind]
        self._counters[kind] = value + 1
        self._store.save(StorageKeys.COUNTERS, self.to_dict())
        return value

    def peek(self, kind: EntityKind) -> int:
        """Retorna el próximo ID sin asignarlo."""
        return self._counters[kind]

    def to_dict(self) -> dict[str, int]:
        return {kind.value: self._counters[kind] for kind in EntityKind}


def _coerce_counter(persisted: Any, kind: EntityKind) -> int:
    """Lee un contador persistido; valores inválidos cuentan como 0."""
    if not isinstance(persisted, dict):
        return 0
    value = persisted.get(kind.value)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value

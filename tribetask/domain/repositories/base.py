"""
Repository Interfaces - Contratos y base en memoria.

Cada repositorio es dueño exclusivo de su colección en memoria: es la
fuente de verdad del proceso. Toda escritura se persiste de inmediato a
través del PersistentStore y notifica al listener de cambios (que
recalcula las estadísticas). Las lecturas devuelven copias, nunca
referencias a la colección viva.
"""

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Generic, Iterable, Protocol, TypeVar

from tribetask.db.storage import PersistentStore
from tribetask.domain.ids import EntityKind, IdentifierAllocator
from tribetask.utils.dates import Clock
from tribetask.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class Entity(Protocol):
    id: int

    def to_dict(self) -> dict[str, Any]: ...


T = TypeVar("T", bound=Entity)

ChangeListener = Callable[[str], None]


class IRepository(ABC, Generic[T]):
    """
    Interface base para repositorios.

    Define operaciones CRUD genéricas.
    """

    @abstractmethod
    def find(self) -> list[T]:
        """Lista las entidades."""
        pass

    @abstractmethod
    def get(self, id: int) -> T:
        """Obtiene una entidad por su ID (NotFoundError si no existe)."""
        pass

    @abstractmethod
    def create(self, fields: dict[str, Any]) -> T:
        """Crea una nueva entidad."""
        pass

    @abstractmethod
    def update(self, id: int, patch: dict[str, Any]) -> T:
        """Actualiza una entidad existente."""
        pass

    @abstractmethod
    def delete(self, id: int) -> dict[str, str]:
        """Elimina una entidad por su ID."""
        pass


class InMemoryRepository(IRepository[T]):
    """
    Base para repositorios en memoria con persistencia best-effort.

    Subclases definen `entity_name`, `storage_key` y `kind`.
    """

    entity_name: str = "Entity"
    storage_key: str = ""
    kind: EntityKind

    def __init__(
        self,
        store: PersistentStore,
        allocator: IdentifierAllocator,
        items: Iterable[T] = (),
        clock: Clock = datetime.now,
        on_change: ChangeListener | None = None,
    ):
        self._store = store
        self._allocator = allocator
        self._items: list[T] = list(items)
        self._clock = clock
        self._on_change = on_change

    # ==================== Lectura ====================

    def find(self) -> list[T]:
        return [copy.deepcopy(item) for item in self._items]

    def get(self, id: int) -> T:
        return copy.deepcopy(self._items[self._index_of(id)])

    def count(self) -> int:
        return len(self._items)

    def ids(self) -> list[int]:
        return [item.id for item in self._items]

    def snapshot(self) -> list[T]:
        """Copia de la colección para cálculos derivados."""
        return [copy.deepcopy(item) for item in self._items]

    # ==================== Escritura ====================

    def delete(self, id: int) -> dict[str, str]:
        index = self._index_of(id)
        deleted = self._items.pop(index)
        self._persist()
        self._notify("deleted")
        logger.info(f"{self.entity_name} eliminado: id={deleted.id}")
        return {"message": f"{self.entity_name} deleted successfully"}

    def set_change_listener(self, listener: ChangeListener | None) -> None:
        self._on_change = listener

    # ==================== Helpers ====================

    def _allocate_id(self) -> int:
        return self._allocator.next(self.kind)

    def _index_of(self, id: Any) -> int:
        entity_id = coerce_id(id, self.entity_name)
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        raise NotFoundError(self.entity_name, entity_id)

    def _persist(self) -> None:
        self._store.save(self.storage_key, [item.to_dict() for item in self._items])

    def _notify(self, action: str) -> None:
        if self._on_change is not None:
            self._on_change(f"{self.storage_key}.{action}")


def coerce_id(value: Any, entity_name: str) -> int:
    """
    Normaliza un ID recibido (int o string numérico).

    Un ID no interpretable no puede referenciar nada: NotFoundError.
    """
    entity_id = parse_id(value)
    if entity_id is None:
        raise NotFoundError(entity_name, value)
    return entity_id


def parse_id(value: Any) -> int | None:
    """int o string numérico a int; cualquier otra cosa a None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def check_fields(
    fields: dict[str, Any],
    allowed: frozenset[str],
    read_only: frozenset[str] = frozenset(),
) -> None:
    """Rechaza campos desconocidos o de solo lectura."""
    if not isinstance(fields, dict):
        raise ValidationError("Expected an object of fields")
    for name in fields:
        if name in read_only:
            raise ValidationError(f"Field '{name}' is read-only", field=name)
        if name not in allowed:
            raise ValidationError(f"Unknown field '{name}'", field=name)


@dataclass
class LoadedCollection(Generic[T]):
    """
    Resultado de cargar una colección persistida.

    `ids` incluye los IDs de registros descartados: el asignador debe
    contarlos para no reemitirlos.
    """

    items: list[T] = field(default_factory=list)
    ids: list[int] = field(default_factory=list)
    rejected: list[Any] = field(default_factory=list)


def raw_record_id(record: Any) -> int | None:
    """ID entero de un registro crudo, si se puede leer."""
    if not isinstance(record, dict):
        return None
    return parse_id(record.get("id"))


def load_collection(
    store: PersistentStore,
    key: str,
    default: list[dict[str, Any]],
    from_dict: Callable[[dict[str, Any]], T],
    entity_name: str,
) -> LoadedCollection[T]:
    """
    Carga y parsea una colección persistida.

    Registros corruptos o con ID duplicado se descartan con un warning
    y se devuelven en `rejected`; sus IDs siguen contando en `ids`.
    """
    raw = store.load(key, default)
    if not isinstance(raw, list):
        logger.warning(f"Colección '{key}' inválida en almacenamiento, usando valores por defecto")
        raw = copy.deepcopy(default)

    loaded: LoadedCollection[T] = LoadedCollection()
    seen: set[int] = set()
    for record in raw:
        record_id = raw_record_id(record)
        if record_id is not None:
            loaded.ids.append(record_id)
        try:
            item = from_dict(record)
        except (ValidationError, AttributeError, TypeError) as e:
            logger.warning(f"Registro de {entity_name} descartado (id={record_id}): {e}")
            loaded.rejected.append(record)
            continue
        if item.id in seen:
            logger.warning(f"{entity_name} con ID duplicado descartado: id={item.id}")
            loaded.rejected.append(record)
            continue
        seen.add(item.id)
        loaded.items.append(item)

    logger.info(
        f"{entity_name}: {len(loaded.items)} registros cargados, {len(loaded.rejected)} descartados"
    )
    return loaded

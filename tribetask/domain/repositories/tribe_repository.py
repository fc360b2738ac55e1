"""
TribeRepository - Colección autoritativa de tribus.
"""

import copy
import logging
from typing import Any

from tribetask.db.storage import StorageKeys
from tribetask.domain.entities.tribe import MIN_MEMBERS, Tribe, TribeRole
from tribetask.domain.ids import EntityKind
from tribetask.domain.repositories.base import InMemoryRepository, check_fields
from tribetask.utils.mappers import parse_enum, parse_int, parse_text

logger = logging.getLogger(__name__)

CREATE_FIELDS = frozenset({"name", "description", "color"})
UPDATE_FIELDS = frozenset({
    "name",
    "description",
    "color",
    "role",
    "members",
    "active_tasks",
    "active_today",
})
READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})


class TribeRepository(InMemoryRepository[Tribe]):
    """
    Repositorio de tribus en memoria.

    Orden: de inserción (las nuevas al final). El creador queda como
    líder y único miembro.
    """

    entity_name = "Tribe"
    storage_key = StorageKeys.TRIBES
    kind = EntityKind.TRIBE

    def find(self) -> list[Tribe]:
        """Lista todas las tribus."""
        tribes = [copy.deepcopy(tribe) for tribe in self._items]
        logger.debug(f"Tribus encontradas: {len(tribes)}")
        return tribes

    def create(self, fields: dict[str, Any]) -> Tribe:
        """Crea una tribu con el usuario actual como líder."""
        check_fields(fields, CREATE_FIELDS, READ_ONLY_FIELDS)

        tribe = Tribe(
            id=0,
            name=parse_text(fields.get("name"), "name", required=True),
            description=parse_text(fields.get("description"), "description"),
            color=parse_text(fields.get("color"), "color") or "blue",
            members=MIN_MEMBERS,
            role=TribeRole.LEADER,
        )
        tribe.id = self._allocate_id()
        tribe.created_at = self._clock()

        self._items.append(tribe)
        self._persist()
        self._notify("created")
        logger.info(f"Tribu creada: id={tribe.id} '{tribe.name}'")
        return copy.deepcopy(tribe)

    def update(self, id: int, patch: dict[str, Any]) -> Tribe:
        """Actualiza campos de una tribu; `members` nunca baja de 1."""
        index = self._index_of(id)
        check_fields(patch, UPDATE_FIELDS, READ_ONLY_FIELDS)

        updated = copy.deepcopy(self._items[index])
        for name, value in patch.items():
            if name == "name":
                updated.name = parse_text(value, "name", required=True)
            elif name == "description":
                updated.description = parse_text(value, "description")
            elif name == "color":
                updated.color = parse_text(value, "color") or "blue"
            elif name == "role":
                updated.role = parse_enum(TribeRole, value, "role")
            elif name == "members":
                updated.members = parse_int(value, "members", minimum=MIN_MEMBERS)
            elif name == "active_tasks":
                updated.active_tasks = parse_int(value, "active_tasks", minimum=0)
            elif name == "active_today":
                updated.active_today = parse_int(value, "active_today", minimum=0)
        updated.updated_at = self._clock()

        self._items[index] = updated
        self._persist()
        self._notify("updated")
        logger.info(f"Tribu actualizada: id={updated.id} campos={sorted(patch)}")
        return copy.deepcopy(updated)

    # ==================== Miembros ====================

    def add_member(self, id: int) -> Tribe:
        """Incrementa el conteo de miembros."""
        tribe = self._items[self._index_of(id)]
        tribe.members += 1
        self._persist()
        logger.info(f"Miembro agregado a tribu {tribe.id}: members={tribe.members}")
        return copy.deepcopy(tribe)

    def remove_member(self, id: int, user_id: str | None = None) -> Tribe:
        """Decrementa el conteo de miembros, con piso en 1."""
        tribe = self._items[self._index_of(id)]
        tribe.members = max(MIN_MEMBERS, tribe.members - 1)
        self._persist()
        logger.info(
            f"Miembro removido de tribu {tribe.id} (user={user_id}): members={tribe.members}"
        )
        return copy.deepcopy(tribe)

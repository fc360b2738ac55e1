"""
TaskRepository - Colección autoritativa de tareas.

Garantiza el invariante de tres estados en cada camino de escritura:
`completed` <=> `status == completed` <=> `completed_at is not None`.
"""

import copy
import logging
from datetime import datetime
from typing import Any

from tribetask.db.storage import StorageKeys
from tribetask.domain.entities.task import (
    Task,
    TaskFilter,
    TaskPriority,
    TaskStatus,
    parse_tribe_ref,
)
from tribetask.domain.ids import EntityKind
from tribetask.domain.repositories.base import InMemoryRepository, check_fields
from tribetask.utils.errors import ValidationError
from tribetask.utils.mappers import (
    parse_bool,
    parse_datetime,
    parse_enum,
    parse_optional_text,
    parse_tags,
    parse_text,
)

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = frozenset({
    "title",
    "description",
    "priority",
    "status",
    "due_date",
    "tribe",
    "tribe_role",
    "is_group_task",
    "assigned_role",
    "completed",
    "starred",
    "tags",
})
READ_ONLY_FIELDS = frozenset({"id", "completed_at", "created_at", "updated_at"})


class TaskRepository(InMemoryRepository[Task]):
    """
    Repositorio de tareas en memoria.

    Orden: más reciente primero (las nuevas se insertan al inicio).
    """

    entity_name = "Task"
    storage_key = StorageKeys.TASKS
    kind = EntityKind.TASK

    # ==================== Queries ====================

    def find(self, filter: TaskFilter | None = None) -> list[Task]:
        """Lista tareas aplicando filtros exactos."""
        tasks = [
            copy.deepcopy(task)
            for task in self._items
            if filter is None or filter.matches(task)
        ]
        logger.debug(f"Tareas encontradas: {len(tasks)} (filtros: {filter.to_dict() if filter else {}})")
        return tasks

    # ==================== CRUD ====================

    def create(self, fields: dict[str, Any]) -> Task:
        """
        Crea una tarea.

        Args:
            fields: Campos de la tarea; `title` es obligatorio

        Returns:
            Copia de la tarea creada
        """
        check_fields(fields, WRITABLE_FIELDS, READ_ONLY_FIELDS)
        now = self._clock()

        task = Task(id=0, title=parse_text(fields.get("title"), "title", required=True))
        self._apply_fields(task, {k: v for k, v in fields.items() if k != "title"})
        reconcile_completion(task, fields, now)

        # Asignar ID solo cuando la validación ya pasó
        task.id = self._allocate_id()
        task.created_at = now
        task.updated_at = now

        self._items.insert(0, task)
        self._persist()
        self._notify("created")
        logger.info(f"Tarea creada: id={task.id} '{task.title}'")
        return copy.deepcopy(task)

    def update(self, id: int, patch: dict[str, Any]) -> Task:
        """
        Actualiza campos de una tarea.

        El trío completed/status/completed_at se re-deriva después del
        merge; un patch con `status` y `completed` contradictorios se
        rechaza.
        """
        index = self._index_of(id)
        check_fields(patch, WRITABLE_FIELDS, READ_ONLY_FIELDS)
        now = self._clock()

        # Trabajar sobre una copia: si algo falla, el estado no cambia
        updated = copy.deepcopy(self._items[index])
        self._apply_fields(updated, patch)
        reconcile_completion(updated, patch, now)
        updated.updated_at = now

        self._items[index] = updated
        self._persist()
        self._notify("updated")
        logger.info(f"Tarea actualizada: id={updated.id} campos={sorted(patch)}")
        return copy.deepcopy(updated)

    # ==================== Updates Específicos ====================

    def toggle_completed(self, id: int) -> Task:
        """Alterna completado, manteniendo status y completed_at en sincronía."""
        task = self._items[self._index_of(id)]
        now = self._clock()

        if task.completed:
            task.completed = False
            task.status = TaskStatus.PENDING
            task.completed_at = None
        else:
            task.completed = True
            task.status = TaskStatus.COMPLETED
            task.completed_at = now
        task.updated_at = now

        self._persist()
        self._notify("completion_toggled")
        logger.info(f"Completado alternado: id={task.id} completed={task.completed}")
        return copy.deepcopy(task)

    def toggle_starred(self, id: int) -> Task:
        """Alterna la estrella. No afecta el estado de completado."""
        task = self._items[self._index_of(id)]
        task.starred = not task.starred
        task.updated_at = self._clock()

        self._persist()
        logger.info(f"Estrella alternada: id={task.id} starred={task.starred}")
        return copy.deepcopy(task)

    # ==================== Helpers ====================

    def _apply_fields(self, task: Task, fields: dict[str, Any]) -> None:
        """Aplica campos validados uno por uno sobre `task`."""
        for name, value in fields.items():
            if name == "title":
                task.title = parse_text(value, "title", required=True)
            elif name == "description":
                task.description = parse_text(value, "description")
            elif name == "priority":
                task.priority = parse_enum(TaskPriority, value, "priority")
            elif name == "status":
                task.status = parse_enum(TaskStatus, value, "status")
            elif name == "due_date":
                task.due_date = parse_datetime(value, "due_date")
            elif name == "tribe":
                task.tribe = parse_tribe_ref(value)
            elif name == "tribe_role":
                task.tribe_role = parse_optional_text(value, "tribe_role")
            elif name == "is_group_task":
                task.is_group_task = parse_bool(value, "is_group_task")
            elif name == "assigned_role":
                task.assigned_role = parse_text(value, "assigned_role") or "personal"
            elif name == "completed":
                task.completed = parse_bool(value, "completed")
            elif name == "starred":
                task.starred = parse_bool(value, "starred")
            elif name == "tags":
                task.tags = parse_tags(value)


def reconcile_completion(task: Task, patch: dict[str, Any], now: datetime) -> None:
    """
    Re-deriva el trío completed/status/completed_at tras un merge.

    - Si el patch trae `completed`, manda sobre `status`.
    - Si trae `status`, `completed` se deriva de él.
    - Si trae ambos, deben coincidir.
    - `completed_at` se sella al completar y se limpia al reabrir.
    """
    has_status = "status" in patch
    has_completed = "completed" in patch

    if has_status and has_completed:
        if (task.status == TaskStatus.COMPLETED) != task.completed:
            raise ValidationError(
                "Fields 'status' and 'completed' disagree",
                field="completed",
                details={"status": task.status.value, "completed": task.completed},
            )
    elif has_completed:
        if task.completed:
            task.status = TaskStatus.COMPLETED
        elif task.status == TaskStatus.COMPLETED:
            task.status = TaskStatus.PENDING
    elif has_status:
        task.completed = task.status == TaskStatus.COMPLETED

    if task.completed:
        if task.completed_at is None:
            task.completed_at = now
    else:
        task.completed_at = None


def normalize_loaded_task(task: Task, now: datetime) -> Task:
    """
    Repara el trío en registros cargados del almacenamiento.

    `completed` es la fuente para registros heredados inconsistentes.
    """
    if not task.is_consistent:
        logger.warning(f"Tarea {task.id} inconsistente en almacenamiento, reparando")
        reconcile_completion(task, {"completed": task.completed}, now)
    return task

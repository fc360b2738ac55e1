"""
Task Service - Superficie async de tareas para la UI.

Cada operación espera la latencia simulada una sola vez y luego delega
de forma síncrona en el repositorio, así ningún paso de
asignar-mutar-persistir queda partido por un punto de suspensión.
"""

import logging
from typing import Any

from tribetask.domain.entities.task import Task, TaskFilter, TaskStatus, parse_tribe_ref
from tribetask.domain.repositories.task_repository import TaskRepository
from tribetask.utils.latency import LatencySimulator, simulated_latency
from tribetask.utils.mappers import parse_bool, parse_enum

logger = logging.getLogger(__name__)


class TaskService:
    """
    Servicio de tareas.

    Uso:
        task = await backend.tasks.create_task({"title": "Draft report"})
        task = await backend.tasks.toggle_completed(task.id)
    """

    def __init__(self, repo: TaskRepository, latency: LatencySimulator):
        self._repo = repo
        self._latency = latency

    @simulated_latency
    async def get_tasks(
        self,
        status: TaskStatus | str | None = None,
        completed: bool | None = None,
        tribe: str | int | None = None,
        starred: bool | None = None,
    ) -> list[Task]:
        """Lista tareas con filtros exactos opcionales."""
        filter = TaskFilter(
            status=parse_enum(TaskStatus, status, "status") if status is not None else None,
            completed=parse_bool(completed, "completed") if completed is not None else None,
            tribe=parse_tribe_ref(tribe),
            starred=parse_bool(starred, "starred") if starred is not None else None,
        )
        return self._repo.find(filter)

    @simulated_latency
    async def get_task(self, task_id: int) -> Task:
        """Obtiene una tarea por su ID."""
        return self._repo.get(task_id)

    @simulated_latency
    async def create_task(self, fields: dict[str, Any]) -> Task:
        """Crea una tarea."""
        return self._repo.create(fields)

    @simulated_latency
    async def update_task(self, task_id: int, patch: dict[str, Any]) -> Task:
        """Actualiza una tarea."""
        return self._repo.update(task_id, patch)

    @simulated_latency
    async def delete_task(self, task_id: int) -> dict[str, str]:
        """Elimina una tarea."""
        return self._repo.delete(task_id)

    @simulated_latency
    async def toggle_completed(self, task_id: int) -> Task:
        """Alterna el estado de completado."""
        return self._repo.toggle_completed(task_id)

    @simulated_latency
    async def toggle_starred(self, task_id: int) -> Task:
        """Alterna la estrella."""
        return self._repo.toggle_starred(task_id)

"""Endpoints de tareas."""

from fastapi import APIRouter, Depends

from tribetask.api.deps import get_backend
from tribetask.api.schemas import TaskCreate, TaskUpdate
from tribetask.backend import MockBackend
from tribetask.domain.entities.task import TaskStatus

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(
    status: TaskStatus | None = None,
    completed: bool | None = None,
    tribe: str | None = None,
    starred: bool | None = None,
    backend: MockBackend = Depends(get_backend),
):
    tasks = await backend.tasks.get_tasks(
        status=status, completed=completed, tribe=tribe, starred=starred
    )
    return [task.to_dict() for task in tasks]


@router.get("/{task_id}")
async def get_task(task_id: int, backend: MockBackend = Depends(get_backend)):
    task = await backend.tasks.get_task(task_id)
    return task.to_dict()


@router.post("", status_code=201)
async def create_task(body: TaskCreate, backend: MockBackend = Depends(get_backend)):
    task = await backend.tasks.create_task(body.to_fields())
    return task.to_dict()


@router.put("/{task_id}")
async def update_task(
    task_id: int,
    body: TaskUpdate,
    backend: MockBackend = Depends(get_backend),
):
    task = await backend.tasks.update_task(task_id, body.to_fields())
    return task.to_dict()


@router.delete("/{task_id}")
async def delete_task(task_id: int, backend: MockBackend = Depends(get_backend)):
    return await backend.tasks.delete_task(task_id)


@router.patch("/{task_id}/complete")
async def toggle_completed(task_id: int, backend: MockBackend = Depends(get_backend)):
    task = await backend.tasks.toggle_completed(task_id)
    return task.to_dict()


@router.patch("/{task_id}/star")
async def toggle_starred(task_id: int, backend: MockBackend = Depends(get_backend)):
    task = await backend.tasks.toggle_starred(task_id)
    return task.to_dict()

"""
Schemas Pydantic para los cuerpos de request.

`extra="forbid"` rechaza campos desconocidos antes de llegar a los
repositorios (que además validan su propio esquema).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from tribetask.domain.entities.focus_session import FocusSessionStatus
from tribetask.domain.entities.task import TaskPriority, TaskStatus
from tribetask.domain.entities.tribe import TribeRole


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_fields(self) -> dict:
        """Solo los campos enviados por el cliente."""
        return self.model_dump(exclude_unset=True)


# ==================== Auth ====================


class RegisterRequest(StrictModel):
    name: str
    email: str
    password: str | None = None


class LoginRequest(StrictModel):
    email: str
    password: str | None = None


# ==================== Tasks ====================


class TaskCreate(StrictModel):
    title: str
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    tribe: str | None = None
    tribe_role: str | None = None
    is_group_task: bool | None = None
    assigned_role: str | None = None
    completed: bool | None = None
    starred: bool | None = None
    tags: list[str] | None = None


class TaskUpdate(StrictModel):
    title: str | None = None
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None
    tribe: str | None = None
    tribe_role: str | None = None
    is_group_task: bool | None = None
    assigned_role: str | None = None
    completed: bool | None = None
    starred: bool | None = None
    tags: list[str] | None = None


# ==================== Tribes ====================


class TribeCreate(StrictModel):
    name: str
    description: str | None = None
    color: str | None = None


class TribeUpdate(StrictModel):
    name: str | None = None
    description: str | None = None
    color: str | None = None
    role: TribeRole | None = None
    members: int | None = None
    active_tasks: int | None = None
    active_today: int | None = None


class MemberRequest(StrictModel):
    user_id: str | None = None


# ==================== Focus Sessions ====================


class FocusSessionCreate(StrictModel):
    title: str
    duration: int | None = None
    task_id: int | None = None
    date: datetime | None = None


class FocusSessionUpdate(StrictModel):
    title: str | None = None
    duration: int | None = None
    task_id: int | None = None
    date: datetime | None = None
    status: FocusSessionStatus | None = None


class FocusSessionComplete(StrictModel):
    duration: int | None = None

"""Endpoints de sesiones de foco."""

from fastapi import APIRouter, Depends

from tribetask.api.deps import get_backend
from tribetask.api.schemas import (
    FocusSessionComplete,
    FocusSessionCreate,
    FocusSessionUpdate,
)
from tribetask.backend import MockBackend
from tribetask.domain.entities.focus_session import FocusSessionStatus

router = APIRouter(prefix="/focus-sessions", tags=["focus-sessions"])


@router.get("")
async def list_sessions(
    status: FocusSessionStatus | None = None,
    backend: MockBackend = Depends(get_backend),
):
    sessions = await backend.focus_sessions.get_sessions(status)
    return [session.to_dict() for session in sessions]


@router.get("/{session_id}")
async def get_session(session_id: int, backend: MockBackend = Depends(get_backend)):
    session = await backend.focus_sessions.get_session(session_id)
    return session.to_dict()


@router.post("", status_code=201)
async def create_session(
    body: FocusSessionCreate,
    backend: MockBackend = Depends(get_backend),
):
    session = await backend.focus_sessions.create_session(body.to_fields())
    return session.to_dict()


@router.put("/{session_id}")
async def update_session(
    session_id: int,
    body: FocusSessionUpdate,
    backend: MockBackend = Depends(get_backend),
):
    session = await backend.focus_sessions.update_session(session_id, body.to_fields())
    return session.to_dict()


@router.patch("/{session_id}/complete")
async def complete_session(
    session_id: int,
    body: FocusSessionComplete | None = None,
    backend: MockBackend = Depends(get_backend),
):
    duration = body.duration if body else None
    session = await backend.focus_sessions.complete_session(session_id, duration)
    return session.to_dict()


@router.delete("/{session_id}")
async def delete_session(session_id: int, backend: MockBackend = Depends(get_backend)):
    return await backend.focus_sessions.delete_session(session_id)

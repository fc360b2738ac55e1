"""Endpoints de tribus."""

from fastapi import APIRouter, Depends

from tribetask.api.deps import get_backend
from tribetask.api.schemas import MemberRequest, TribeCreate, TribeUpdate
from tribetask.backend import MockBackend

router = APIRouter(prefix="/tribes", tags=["tribes"])


@router.get("")
async def list_tribes(backend: MockBackend = Depends(get_backend)):
    tribes = await backend.tribes.get_tribes()
    return [tribe.to_dict() for tribe in tribes]


@router.get("/{tribe_id}")
async def get_tribe(tribe_id: int, backend: MockBackend = Depends(get_backend)):
    tribe = await backend.tribes.get_tribe(tribe_id)
    return tribe.to_dict()


@router.post("", status_code=201)
async def create_tribe(body: TribeCreate, backend: MockBackend = Depends(get_backend)):
    tribe = await backend.tribes.create_tribe(body.to_fields())
    return tribe.to_dict()


@router.put("/{tribe_id}")
async def update_tribe(
    tribe_id: int,
    body: TribeUpdate,
    backend: MockBackend = Depends(get_backend),
):
    tribe = await backend.tribes.update_tribe(tribe_id, body.to_fields())
    return tribe.to_dict()


@router.delete("/{tribe_id}")
async def delete_tribe(tribe_id: int, backend: MockBackend = Depends(get_backend)):
    return await backend.tribes.delete_tribe(tribe_id)


@router.post("/{tribe_id}/members")
async def add_member(
    tribe_id: int,
    body: MemberRequest | None = None,
    backend: MockBackend = Depends(get_backend),
):
    tribe = await backend.tribes.add_member(tribe_id, body.user_id if body else None)
    return tribe.to_dict()


@router.delete("/{tribe_id}/members/{user_id}")
async def remove_member(
    tribe_id: int,
    user_id: str,
    backend: MockBackend = Depends(get_backend),
):
    tribe = await backend.tribes.remove_member(tribe_id, user_id)
    return tribe.to_dict()

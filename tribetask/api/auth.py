"""Endpoints de identidad (sin autenticación real)."""

from fastapi import APIRouter, Depends

from tribetask.api.deps import get_backend
from tribetask.api.schemas import LoginRequest, RegisterRequest
from tribetask.backend import MockBackend

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me")
async def get_current_user(backend: MockBackend = Depends(get_backend)):
    user = await backend.auth.get_current_user()
    return user.to_dict()


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, backend: MockBackend = Depends(get_backend)):
    result = await backend.auth.register(body.name, body.email, body.password)
    return result.to_dict()


@router.post("/login")
async def login(body: LoginRequest, backend: MockBackend = Depends(get_backend)):
    result = await backend.auth.login(body.email, body.password)
    return result.to_dict()


@router.post("/logout")
async def logout(backend: MockBackend = Depends(get_backend)):
    return await backend.auth.logout()

"""Dependencias compartidas de los routers."""

from fastapi import Request

from tribetask.backend import MockBackend


def get_backend(request: Request) -> MockBackend:
    """Obtiene el backend simulado creado en el lifespan."""
    return request.app.state.backend

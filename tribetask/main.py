"""
TribeTask - Mock Backend

FastAPI application de desarrollo sobre el backend simulado.
El estado vive en memoria y se persiste en el almacenamiento local.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tribetask.api import api_router
from tribetask.backend import MockBackend
from tribetask.config import get_settings
from tribetask.utils.errors import NotFoundError, TribeTaskError, ValidationError

# Configurar logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle de la aplicación."""
    logger.info("Iniciando TribeTask - Mock Backend")

    owns_backend = getattr(app.state, "backend", None) is None
    if owns_backend:
        app.state.backend = MockBackend.from_settings(settings)

    yield

    logger.info("Deteniendo TribeTask...")
    if owns_backend:
        app.state.backend.close()
        app.state.backend = None
    logger.info("TribeTask detenido.")


def create_app(backend: MockBackend | None = None) -> FastAPI:
    """
    Crea la aplicación.

    Args:
        backend: Backend ya construido (tests); si es None se crea en el lifespan
    """
    app = FastAPI(
        title="TribeTask - Mock Backend",
        description="Backend simulado de tareas, tribus y sesiones de foco",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.backend = backend
    app.include_router(api_router)

    # ==================== ERRORES ====================

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"message": exc.message, "details": exc.details},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"message": exc.message, "details": exc.details},
        )

    @app.exception_handler(TribeTaskError)
    async def generic_handler(request: Request, exc: TribeTaskError):
        logger.error(f"Error no manejado en {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": exc.message})

    # ==================== HEALTH ====================

    @app.get("/health")
    async def health_check(request: Request):
        """Health check básico."""
        current = request.app.state.backend
        storage_ok = current.store.is_healthy() if current else False
        return {
            "status": "healthy" if storage_ok else "degraded",
            "service": "tribetask-mock-backend",
            "environment": settings.app_env,
            "storage": {
                "healthy": storage_ok,
                "persistence_failures": current.store.failure_count if current else 0,
            },
        }

    return app


app = create_app()


# ==================== DEV MODE ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tribetask.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )

"""
Database - SQLite (u otro motor SQL) como medio durable key-value.

El engine es síncrono a propósito: guardar no introduce puntos de
suspensión en las operaciones del backend simulado.
"""

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class para modelos SQLAlchemy."""
    pass


def create_storage_engine(url: str, echo: bool = False) -> Engine:
    """Crea un engine, preparando el directorio si es un archivo SQLite."""
    parsed = make_url(url)
    kwargs: dict = {"echo": echo}

    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            # Una sola conexión para que la DB en memoria sobreviva
            kwargs["poolclass"] = StaticPool
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs["pool_pre_ping"] = True

    return create_engine(url, **kwargs)


def init_db(engine: Engine) -> None:
    """Crea las tablas si no existen."""
    # Importar modelos para que se registren
    from tribetask.db.models import KeyValueModel  # noqa: F401

    logger.info(f"Inicializando almacenamiento: {engine.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(engine)
    logger.info("Almacenamiento inicializado")


def check_db_connection(engine: Engine) -> bool:
    """Verifica la conexión a la base de datos."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Error conectando a la base de datos: {e}")
        return False

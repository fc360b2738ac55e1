"""
Modelos SQLAlchemy - Tabla key-value del backend simulado.

Cada fila guarda un valor JSON bajo una clave con namespace
(p. ej. `tribetask_mock_tasks`).
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tribetask.db.database import Base


class KeyValueModel(Base):
    """Entrada del almacenamiento persistente."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now
    )

    def __repr__(self) -> str:
        return f"<KeyValueModel key={self.key!r}>"

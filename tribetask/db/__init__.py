"""Capa de almacenamiento key-value."""

from tribetask.db.storage import (
    IKeyValueBackend,
    InMemoryKeyValueBackend,
    PersistentStore,
    SQLAlchemyKeyValueBackend,
    StorageKeys,
)

__all__ = [
    "IKeyValueBackend",
    "InMemoryKeyValueBackend",
    "PersistentStore",
    "SQLAlchemyKeyValueBackend",
    "StorageKeys",
]

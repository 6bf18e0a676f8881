"""Shared FastAPI dependencies: the configured storage backend."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from dossier.core.config import get_settings
from dossier.core.database import get_db
from dossier.storage import MemoryStorage, SqlStorage, Storage
from dossier.storage.seed import load_world


@lru_cache
def get_memory_storage() -> MemoryStorage:
    """Process-wide memory backend, seeded once when SEED_ON_STARTUP is set."""
    storage = MemoryStorage()
    if get_settings().SEED_ON_STARTUP:
        load_world(storage)
    return storage


def get_storage(db: Annotated[Session, Depends(get_db)]) -> Storage:
    """Dependency: storage for this request (SQL session-scoped, or the shared memory store)."""
    if get_settings().STORAGE_BACKEND == "memory":
        return get_memory_storage()
    return SqlStorage(db)


StorageDep = Annotated[Storage, Depends(get_storage)]

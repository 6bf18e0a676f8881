"""Storage contract and its backends."""

from dossier.storage.base import Storage
from dossier.storage.memory import MemoryStorage
from dossier.storage.sql import SqlStorage

__all__ = ["MemoryStorage", "SqlStorage", "Storage"]

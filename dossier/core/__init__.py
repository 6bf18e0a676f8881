"""Core app configuration, database and error taxonomy."""

from dossier.core.config import get_settings, settings
from dossier.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]

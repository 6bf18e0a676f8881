"""SQLAlchemy ORM models."""

from dossier.models.base import Base
from dossier.models.credential import Credential, UserCredential
from dossier.models.resource import Document, PersonnelFile, Terminal
from dossier.models.user import User

__all__ = [
    "Base",
    "Credential",
    "Document",
    "PersonnelFile",
    "Terminal",
    "User",
    "UserCredential",
]

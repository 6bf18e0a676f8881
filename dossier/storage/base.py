"""Storage contract consumed by the credential and access services.

Backends (memory, SQL) implement the same capability set; services never touch
ORM rows or dicts directly, only the schema records returned here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from dossier.core.errors import ValidationFailedError
from dossier.schemas.auth import User
from dossier.schemas.clearance import ClearanceLevels
from dossier.schemas.credentials import Binding, Credential, CredentialCreate, HeldCredential
from dossier.schemas.resources import (
    Document,
    DocumentCreate,
    PersonnelFile,
    PersonnelFileCreate,
    Terminal,
    TerminalCreate,
)
from dossier.services.access import filter_accessible

CreateT = TypeVar("CreateT", bound=BaseModel)


def coerce_create(model: type[CreateT], data: CreateT | Mapping[str, Any]) -> CreateT:
    """Validate a create payload; missing required fields raise ValidationFailedError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        raise ValidationFailedError(
            f"Invalid {model.__name__} data",
            errors=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


class Storage(ABC):
    """Persistence capability set for users, credentials, bindings and protected content."""

    name: str = "abstract"

    # Users

    @abstractmethod
    def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> User: ...

    @abstractmethod
    def update_user_last_login(self, user_id: int) -> User | None: ...

    @abstractmethod
    def list_users(self) -> list[User]: ...

    # Credential catalog

    @abstractmethod
    def get_credential(self, credential_id: int) -> Credential | None: ...

    @abstractmethod
    def get_credential_by_username(self, username: str) -> Credential | None: ...

    @abstractmethod
    def list_credentials(self) -> list[Credential]: ...

    @abstractmethod
    def create_credential(self, data: CredentialCreate | Mapping[str, Any]) -> Credential:
        """Insert with a fresh id, is_active=True and discovered_at=now."""

    # Bindings

    @abstractmethod
    def get_user_credentials(self, user_id: int) -> list[HeldCredential]:
        """
        Held credentials in binding order.

        Raises CredentialIntegrityError if a binding points at a missing credential.
        """

    @abstractmethod
    def add_credential_to_user(
        self, user_id: int, credential_id: int, is_selected: bool = False
    ) -> Binding:
        """
        Create a binding. With is_selected=True every other binding of the user is
        unselected in the same unit of work. Raises AlreadyAcquiredError on a duplicate.
        """

    @abstractmethod
    def set_selected_credential(self, user_id: int, credential_id: int) -> Binding | None:
        """
        Make credential_id the user's only selected binding, atomically per user.
        Returns None (and changes nothing) when the user does not hold it.
        """

    @abstractmethod
    def remove_credential_from_user(self, user_id: int, credential_id: int) -> bool: ...

    # Protected content

    @abstractmethod
    def get_document(self, document_id: int) -> Document | None: ...

    @abstractmethod
    def get_documents(self) -> list[Document]: ...

    @abstractmethod
    def create_document(self, data: DocumentCreate | Mapping[str, Any]) -> Document: ...

    @abstractmethod
    def get_terminal(self, terminal_id: int) -> Terminal | None: ...

    @abstractmethod
    def get_terminals(self) -> list[Terminal]: ...

    @abstractmethod
    def create_terminal(self, data: TerminalCreate | Mapping[str, Any]) -> Terminal: ...

    @abstractmethod
    def get_personnel_file(self, personnel_id: int) -> PersonnelFile | None: ...

    @abstractmethod
    def get_personnel_files(self) -> list[PersonnelFile]: ...

    @abstractmethod
    def create_personnel_file(
        self, data: PersonnelFileCreate | Mapping[str, Any]
    ) -> PersonnelFile: ...

    def get_accessible_documents(
        self, security_level: int, medical_level: int, admin_level: int
    ) -> list[Document]:
        """Documents whose every required axis is within the given levels, in store order."""
        held = ClearanceLevels(
            security=security_level, medical=medical_level, admin=admin_level
        )
        return filter_accessible(self.get_documents(), held)

    def ping(self) -> bool:
        """True when the backend is reachable."""
        return True

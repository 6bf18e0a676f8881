"""SQLAlchemy storage backend.

One instance wraps one request-scoped Session. Every mutating call commits its own
transaction; the exclusive-select step is a single UPDATE so concurrent requests
for the same user cannot leave two selected bindings.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, exc, select, text, update
from sqlalchemy.orm import Session

from dossier import models
from dossier.core.errors import AlreadyAcquiredError, CredentialIntegrityError
from dossier.schemas.auth import User
from dossier.schemas.credentials import Binding, Credential, CredentialCreate, HeldCredential
from dossier.schemas.resources import (
    Document,
    DocumentCreate,
    PersonnelFile,
    PersonnelFileCreate,
    Terminal,
    TerminalCreate,
)
from dossier.storage.base import Storage, coerce_create

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Storage over a SQLAlchemy Session (PostgreSQL in production, SQLite in tests)."""

    name = "sql"

    def __init__(self, session: Session) -> None:
        self.session = session

    def _insert(self, row: Any) -> Any:
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    # Users

    def get_user(self, user_id: int) -> User | None:
        row = self.session.get(models.User, user_id)
        return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> User | None:
        row = self.session.scalars(
            select(models.User).where(models.User.username == username)
        ).first()
        return User.model_validate(row) if row else None

    def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> User:
        now = datetime.now(UTC)
        row = models.User(
            username=username,
            password_hash=password_hash,
            is_admin=is_admin,
            created_at=now,
            last_login=now,
        )
        return User.model_validate(self._insert(row))

    def update_user_last_login(self, user_id: int) -> User | None:
        row = self.session.get(models.User, user_id)
        if row is None:
            return None
        row.last_login = datetime.now(UTC)
        self.session.commit()
        self.session.refresh(row)
        return User.model_validate(row)

    def list_users(self) -> list[User]:
        rows = self.session.scalars(select(models.User).order_by(models.User.id)).all()
        return [User.model_validate(r) for r in rows]

    # Credential catalog

    def get_credential(self, credential_id: int) -> Credential | None:
        row = self.session.get(models.Credential, credential_id)
        return Credential.model_validate(row) if row else None

    def get_credential_by_username(self, username: str) -> Credential | None:
        row = self.session.scalars(
            select(models.Credential)
            .where(models.Credential.username == username)
            .order_by(models.Credential.id)
        ).first()
        return Credential.model_validate(row) if row else None

    def list_credentials(self) -> list[Credential]:
        rows = self.session.scalars(
            select(models.Credential).order_by(models.Credential.id)
        ).all()
        return [Credential.model_validate(r) for r in rows]

    def create_credential(self, data: CredentialCreate | Mapping[str, Any]) -> Credential:
        payload = coerce_create(CredentialCreate, data)
        row = models.Credential(
            **payload.model_dump(),
            is_active=True,
            discovered_at=datetime.now(UTC),
        )
        return Credential.model_validate(self._insert(row))

    # Bindings

    def _binding(self, user_id: int, credential_id: int) -> Any:
        return self.session.scalars(
            select(models.UserCredential).where(
                models.UserCredential.user_id == user_id,
                models.UserCredential.credential_id == credential_id,
            )
        ).first()

    def get_user_credentials(self, user_id: int) -> list[HeldCredential]:
        pairs = self.session.execute(
            select(models.UserCredential, models.Credential)
            .outerjoin(
                models.Credential,
                models.Credential.id == models.UserCredential.credential_id,
            )
            .where(models.UserCredential.user_id == user_id)
            .order_by(models.UserCredential.id)
        ).all()
        held: list[HeldCredential] = []
        for binding, cred in pairs:
            if cred is None:
                raise CredentialIntegrityError(user_id, binding.credential_id)
            held.append(
                HeldCredential.from_credential(
                    Credential.model_validate(cred), bool(binding.is_selected)
                )
            )
        return held

    def add_credential_to_user(
        self, user_id: int, credential_id: int, is_selected: bool = False
    ) -> Binding:
        try:
            if is_selected:
                self.session.execute(
                    update(models.UserCredential)
                    .where(models.UserCredential.user_id == user_id)
                    .values(is_selected=False)
                )
            row = models.UserCredential(
                user_id=user_id,
                credential_id=credential_id,
                is_selected=is_selected,
            )
            self.session.add(row)
            self.session.commit()
        except exc.IntegrityError as e:
            self.session.rollback()
            # Only the unique (user_id, credential_id) pair means "already held".
            if self._binding(user_id, credential_id) is None:
                raise
            raise AlreadyAcquiredError(self.get_credential(credential_id)) from e
        self.session.refresh(row)
        return Binding.model_validate(row)

    def set_selected_credential(self, user_id: int, credential_id: int) -> Binding | None:
        owned = (
            models.UserCredential.user_id == user_id,
            models.UserCredential.credential_id == credential_id,
        )
        row = self.session.scalars(
            select(models.UserCredential).where(*owned).with_for_update()
        ).first()
        if row is None:
            self.session.rollback()
            return None
        # Single statement: the target becomes true, every other binding false.
        self.session.execute(
            update(models.UserCredential)
            .where(models.UserCredential.user_id == user_id)
            .values(is_selected=models.UserCredential.credential_id == credential_id)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        self.session.refresh(row)
        return Binding.model_validate(row)

    def remove_credential_from_user(self, user_id: int, credential_id: int) -> bool:
        result = self.session.execute(
            delete(models.UserCredential)
            .where(
                models.UserCredential.user_id == user_id,
                models.UserCredential.credential_id == credential_id,
            )
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount > 0

    # Protected content

    def get_document(self, document_id: int) -> Document | None:
        row = self.session.get(models.Document, document_id)
        return Document.model_validate(row) if row else None

    def get_documents(self) -> list[Document]:
        rows = self.session.scalars(select(models.Document).order_by(models.Document.id)).all()
        return [Document.model_validate(r) for r in rows]

    def get_accessible_documents(
        self, security_level: int, medical_level: int, admin_level: int
    ) -> list[Document]:
        rows = self.session.scalars(
            select(models.Document)
            .where(
                models.Document.security_level <= security_level,
                models.Document.medical_level <= medical_level,
                models.Document.admin_level <= admin_level,
            )
            .order_by(models.Document.id)
        ).all()
        return [Document.model_validate(r) for r in rows]

    def create_document(self, data: DocumentCreate | Mapping[str, Any]) -> Document:
        payload = coerce_create(DocumentCreate, data)
        row = models.Document(**payload.model_dump(), created_at=datetime.now(UTC))
        return Document.model_validate(self._insert(row))

    def get_terminal(self, terminal_id: int) -> Terminal | None:
        row = self.session.get(models.Terminal, terminal_id)
        return Terminal.model_validate(row) if row else None

    def get_terminals(self) -> list[Terminal]:
        rows = self.session.scalars(select(models.Terminal).order_by(models.Terminal.id)).all()
        return [Terminal.model_validate(r) for r in rows]

    def create_terminal(self, data: TerminalCreate | Mapping[str, Any]) -> Terminal:
        payload = coerce_create(TerminalCreate, data)
        row = models.Terminal(**payload.model_dump(), created_at=datetime.now(UTC))
        return Terminal.model_validate(self._insert(row))

    def get_personnel_file(self, personnel_id: int) -> PersonnelFile | None:
        row = self.session.get(models.PersonnelFile, personnel_id)
        return PersonnelFile.model_validate(row) if row else None

    def get_personnel_files(self) -> list[PersonnelFile]:
        rows = self.session.scalars(
            select(models.PersonnelFile).order_by(models.PersonnelFile.id)
        ).all()
        return [PersonnelFile.model_validate(r) for r in rows]

    def create_personnel_file(
        self, data: PersonnelFileCreate | Mapping[str, Any]
    ) -> PersonnelFile:
        payload = coerce_create(PersonnelFileCreate, data)
        row = models.PersonnelFile(**payload.model_dump(), created_at=datetime.now(UTC))
        return PersonnelFile.model_validate(self._insert(row))

    def ping(self) -> bool:
        try:
            self.session.execute(text("SELECT 1"))
            return True
        except exc.SQLAlchemyError:
            logger.warning("Storage ping failed", exc_info=True)
            return False

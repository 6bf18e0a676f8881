"""In-process storage backend.

Ids come from per-instance sequences. Binding mutations for a user run under that
user's lock so the select-one step is a single critical section.
"""

import itertools
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

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


class MemoryStorage(Storage):
    """Dict-backed Storage. Records are copied in and out; callers never share state."""

    name = "memory"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._user_locks: dict[int, threading.Lock] = {}

        self._users: dict[int, User] = {}
        self._credentials: dict[int, Credential] = {}
        self._bindings: dict[int, Binding] = {}
        self._documents: dict[int, Document] = {}
        self._terminals: dict[int, Terminal] = {}
        self._personnel: dict[int, PersonnelFile] = {}

        self._user_ids = itertools.count(1)
        self._credential_ids = itertools.count(1)
        self._binding_ids = itertools.count(1)
        self._document_ids = itertools.count(1)
        self._terminal_ids = itertools.count(1)
        self._personnel_ids = itertools.count(1)

    @contextmanager
    def _user_scope(self, user_id: int) -> Iterator[None]:
        """Serialize binding changes for one user."""
        with self._lock:
            lock = self._user_locks.setdefault(user_id, threading.Lock())
        with lock:
            yield

    def _values(self, table: dict[int, Any]) -> list[Any]:
        with self._lock:
            return list(table.values())

    def _bindings_of(self, user_id: int) -> list[Binding]:
        return [b for b in self._values(self._bindings) if b.user_id == user_id]

    # Users

    def get_user(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> User | None:
        for user in self._values(self._users):
            if user.username == username:
                return user.model_copy()
        return None

    def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> User:
        now = datetime.now(UTC)
        with self._lock:
            user = User(
                id=next(self._user_ids),
                username=username,
                password_hash=password_hash,
                is_admin=is_admin,
                created_at=now,
                last_login=now,
            )
            self._users[user.id] = user
        return user.model_copy()

    def update_user_last_login(self, user_id: int) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user = user.model_copy(update={"last_login": datetime.now(UTC)})
            self._users[user_id] = user
        return user.model_copy()

    def list_users(self) -> list[User]:
        return [u.model_copy() for u in self._values(self._users)]

    # Credential catalog

    def get_credential(self, credential_id: int) -> Credential | None:
        cred = self._credentials.get(credential_id)
        return cred.model_copy() if cred else None

    def get_credential_by_username(self, username: str) -> Credential | None:
        for cred in self._values(self._credentials):
            if cred.username == username:
                return cred.model_copy()
        return None

    def list_credentials(self) -> list[Credential]:
        return [c.model_copy() for c in self._values(self._credentials)]

    def create_credential(self, data: CredentialCreate | Mapping[str, Any]) -> Credential:
        payload = coerce_create(CredentialCreate, data)
        with self._lock:
            cred = Credential(
                id=next(self._credential_ids),
                is_active=True,
                discovered_at=datetime.now(UTC),
                **dict(payload),
            )
            self._credentials[cred.id] = cred
        return cred.model_copy()

    # Bindings

    def get_user_credentials(self, user_id: int) -> list[HeldCredential]:
        with self._user_scope(user_id):
            bindings = self._bindings_of(user_id)
        held: list[HeldCredential] = []
        for binding in bindings:
            cred = self._credentials.get(binding.credential_id)
            if cred is None:
                raise CredentialIntegrityError(user_id, binding.credential_id)
            held.append(HeldCredential.from_credential(cred, binding.is_selected))
        return held

    def add_credential_to_user(
        self, user_id: int, credential_id: int, is_selected: bool = False
    ) -> Binding:
        with self._user_scope(user_id):
            existing = self._bindings_of(user_id)
            if any(b.credential_id == credential_id for b in existing):
                raise AlreadyAcquiredError(self.get_credential(credential_id))
            if is_selected:
                for b in existing:
                    if b.is_selected:
                        self._bindings[b.id] = b.model_copy(update={"is_selected": False})
            with self._lock:
                binding = Binding(
                    id=next(self._binding_ids),
                    user_id=user_id,
                    credential_id=credential_id,
                    is_selected=is_selected,
                )
                self._bindings[binding.id] = binding
        return binding.model_copy()

    def set_selected_credential(self, user_id: int, credential_id: int) -> Binding | None:
        with self._user_scope(user_id):
            bindings = self._bindings_of(user_id)
            target = next((b for b in bindings if b.credential_id == credential_id), None)
            if target is None:
                return None
            for b in bindings:
                selected = b.id == target.id
                if b.is_selected != selected:
                    self._bindings[b.id] = b.model_copy(update={"is_selected": selected})
            return self._bindings[target.id].model_copy()

    def remove_credential_from_user(self, user_id: int, credential_id: int) -> bool:
        with self._user_scope(user_id):
            for b in self._bindings_of(user_id):
                if b.credential_id == credential_id:
                    with self._lock:
                        del self._bindings[b.id]
                    return True
        return False

    # Protected content

    def get_document(self, document_id: int) -> Document | None:
        doc = self._documents.get(document_id)
        return doc.model_copy() if doc else None

    def get_documents(self) -> list[Document]:
        return [d.model_copy() for d in self._values(self._documents)]

    def create_document(self, data: DocumentCreate | Mapping[str, Any]) -> Document:
        payload = coerce_create(DocumentCreate, data)
        with self._lock:
            doc = Document(
                id=next(self._document_ids),
                created_at=datetime.now(UTC),
                **dict(payload),
            )
            self._documents[doc.id] = doc
        return doc.model_copy()

    def get_terminal(self, terminal_id: int) -> Terminal | None:
        terminal = self._terminals.get(terminal_id)
        return terminal.model_copy() if terminal else None

    def get_terminals(self) -> list[Terminal]:
        return [t.model_copy() for t in self._values(self._terminals)]

    def create_terminal(self, data: TerminalCreate | Mapping[str, Any]) -> Terminal:
        payload = coerce_create(TerminalCreate, data)
        with self._lock:
            terminal = Terminal(
                id=next(self._terminal_ids),
                created_at=datetime.now(UTC),
                **dict(payload),
            )
            self._terminals[terminal.id] = terminal
        return terminal.model_copy()

    def get_personnel_file(self, personnel_id: int) -> PersonnelFile | None:
        person = self._personnel.get(personnel_id)
        return person.model_copy() if person else None

    def get_personnel_files(self) -> list[PersonnelFile]:
        return [p.model_copy() for p in self._values(self._personnel)]

    def create_personnel_file(
        self, data: PersonnelFileCreate | Mapping[str, Any]
    ) -> PersonnelFile:
        payload = coerce_create(PersonnelFileCreate, data)
        with self._lock:
            person = PersonnelFile(
                id=next(self._personnel_ids),
                created_at=datetime.now(UTC),
                **dict(payload),
            )
            self._personnel[person.id] = person
        return person.model_copy()

"""Credential resolution: verify a found login, bind it to the user, keep selection exclusive.

A user holds any number of credentials but has at most one selected at a time.
Acquiring a credential selects it and reports the held credential it supersedes
(strictly dominates) so the client can suggest discarding it; nothing is removed here.
"""

import logging
from dataclasses import dataclass

from dossier.core.errors import (
    AlreadyAcquiredError,
    InvalidCredentialsError,
    NotOwnedError,
)
from dossier.schemas.credentials import Binding, Credential, HeldCredential
from dossier.services.clearance import levels_of, strictly_dominates
from dossier.storage.base import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcquisitionResult:
    credential: Credential
    obsolete_credential: Credential | None = None


def find_obsolete(new: Credential, held: list[HeldCredential]) -> Credential | None:
    """
    Held credential that `new` strictly dominates, or None.

    Several candidates resolve to the lowest id so the outcome does not depend on
    storage iteration order. Incomparable credentials are never obsolete.
    """
    new_levels = levels_of(new)
    candidates = [
        h for h in held if h.id != new.id and strictly_dominates(new_levels, levels_of(h))
    ]
    if not candidates:
        return None
    oldest = min(candidates, key=lambda h: h.id)
    return Credential.model_validate(dict(oldest))


def verify_and_acquire(
    storage: Storage, user_id: int, username: str, password: str
) -> AcquisitionResult:
    """
    Turn a submitted in-game username/password into the user's selected credential.

    Raises InvalidCredentialsError on unknown username or wrong password, and
    AlreadyAcquiredError if the user already holds the credential.
    """
    credential = storage.get_credential_by_username(username)
    # In-world secret: plain equality, unlike account passwords.
    if credential is None or credential.password != password:
        logger.warning("Credential verification failed for username=%s user_id=%s", username, user_id)
        raise InvalidCredentialsError()

    held = storage.get_user_credentials(user_id)
    if any(h.id == credential.id for h in held):
        raise AlreadyAcquiredError(credential)

    obsolete = find_obsolete(credential, held)

    storage.add_credential_to_user(user_id, credential.id, is_selected=True)
    storage.set_selected_credential(user_id, credential.id)

    logger.info(
        "Credential acquired: user_id=%s credential_id=%s obsolete_id=%s",
        user_id,
        credential.id,
        obsolete.id if obsolete else None,
    )
    return AcquisitionResult(credential=credential, obsolete_credential=obsolete)


def select_credential(storage: Storage, user_id: int, credential_id: int) -> Binding:
    """Make credential_id the user's only selected credential. Raises NotOwnedError."""
    binding = storage.set_selected_credential(user_id, credential_id)
    if binding is None:
        raise NotOwnedError()
    logger.info("Credential selected: user_id=%s credential_id=%s", user_id, credential_id)
    return binding


def remove_credential(storage: Storage, user_id: int, credential_id: int) -> bool:
    """
    Drop a binding. Returns False when the user does not hold the credential.

    No replacement is selected: removing the active credential leaves the user
    with none until they pick one.
    """
    removed = storage.remove_credential_from_user(user_id, credential_id)
    if removed:
        logger.info("Credential removed: user_id=%s credential_id=%s", user_id, credential_id)
    return removed


def list_for_user(storage: Storage, user_id: int) -> list[HeldCredential]:
    """Held credentials with selection flags; raises CredentialIntegrityError on dangling bindings."""
    return storage.get_user_credentials(user_id)


def get_selected_credential(storage: Storage, user_id: int) -> HeldCredential | None:
    return next((h for h in list_for_user(storage, user_id) if h.is_selected), None)


def reset_progress(storage: Storage, user_id: int) -> int:
    """Remove every credential the user holds. Returns how many bindings were removed."""
    removed = 0
    for held in list_for_user(storage, user_id):
        if storage.remove_credential_from_user(user_id, held.id):
            removed += 1
    logger.info("Game progress reset: user_id=%s bindings_removed=%s", user_id, removed)
    return removed

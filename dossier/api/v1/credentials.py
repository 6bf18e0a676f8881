"""Credentials endpoints: list held credentials, verify found logins, select and remove."""

from fastapi import APIRouter

from dossier.api.deps import StorageDep
from dossier.api.v1.auth import CurrentUserDep
from dossier.core.errors import NotOwnedError
from dossier.schemas.credentials import (
    Credential,
    CredentialCreate,
    HeldCredential,
    MessageResponse,
    SelectCredentialResponse,
    VerifyCredentialRequest,
    VerifyCredentialResponse,
)
from dossier.services import credentials as credential_service

router = APIRouter()


@router.get("", response_model=list[HeldCredential])
def list_credentials(user: CurrentUserDep, storage: StorageDep) -> list[HeldCredential]:
    """Credentials the caller holds, with clearance levels and which one is selected."""
    return credential_service.list_for_user(storage, user.id)


@router.post("/verify", response_model=VerifyCredentialResponse)
def verify_credential(
    body: VerifyCredentialRequest,
    user: CurrentUserDep,
    storage: StorageDep,
) -> VerifyCredentialResponse:
    """
    Log in with a username/password found in the world.

    On success the credential is added to the caller's profile and selected.
    obsoleteCredential is the held credential the new one strictly outranks, if any.
    401 on unknown username or wrong password; 409 if already held.
    """
    result = credential_service.verify_and_acquire(
        storage, user.id, body.username, body.password
    )
    return VerifyCredentialResponse(
        credential=result.credential,
        obsolete_credential=result.obsolete_credential,
    )


@router.post("/create", response_model=Credential, status_code=201)
def create_credential(
    body: CredentialCreate,
    _user: CurrentUserDep,
    storage: StorageDep,
) -> Credential:
    """Add a credential to the world catalog (content tooling). 400 on invalid data."""
    return storage.create_credential(body)


@router.post("/select/{credential_id}", response_model=SelectCredentialResponse)
def select_credential(
    credential_id: int,
    user: CurrentUserDep,
    storage: StorageDep,
) -> SelectCredentialResponse:
    """Make a held credential the active one. 404 if the caller does not hold it."""
    binding = credential_service.select_credential(storage, user.id, credential_id)
    return SelectCredentialResponse(binding=binding)


@router.delete("/{credential_id}", response_model=MessageResponse)
def remove_credential(
    credential_id: int,
    user: CurrentUserDep,
    storage: StorageDep,
) -> MessageResponse:
    """Remove a held credential. No other credential is selected in its place."""
    if not credential_service.remove_credential(storage, user.id, credential_id):
        raise NotOwnedError()
    return MessageResponse(message="Credential removed successfully")

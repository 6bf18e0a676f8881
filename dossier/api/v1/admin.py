"""Admin endpoints over the credential catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dossier.api.deps import StorageDep
from dossier.api.v1.auth import require_admin
from dossier.schemas.auth import CurrentUser
from dossier.schemas.credentials import Credential

router = APIRouter()


@router.get("/credentials", response_model=list[Credential])
def list_credential_catalog(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    storage: StorageDep,
) -> list[Credential]:
    """Every credential in the world, discovered or not (admin only)."""
    return storage.list_credentials()

"""Terminals endpoints: gated by the selected credential exactly like documents."""

from fastapi import APIRouter

from dossier.api.deps import StorageDep
from dossier.api.v1.auth import CurrentUserDep
from dossier.schemas.access import AccessDeniedResponse
from dossier.schemas.resources import Terminal
from dossier.services.gateway import fetch_protected, list_accessible_for_user

router = APIRouter()


@router.get("", response_model=list[Terminal])
def list_terminals(user: CurrentUserDep, storage: StorageDep) -> list[Terminal]:
    """Terminals the caller's selected credential clears."""
    return list_accessible_for_user(storage, user.id, "terminal")


@router.get(
    "/{terminal_id}",
    response_model=Terminal,
    responses={403: {"model": AccessDeniedResponse}},
)
def get_terminal(terminal_id: int, user: CurrentUserDep, storage: StorageDep) -> Terminal:
    return fetch_protected(storage, user.id, "terminal", terminal_id)

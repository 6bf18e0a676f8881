"""Documents endpoints: listing, clearance-filtered listing and gated single-document reads."""

from typing import Annotated

from fastapi import APIRouter, Query

from dossier.api.deps import StorageDep
from dossier.api.v1.auth import CurrentUserDep
from dossier.schemas.access import AccessDeniedResponse
from dossier.schemas.clearance import MAX_LEVEL
from dossier.schemas.resources import Document
from dossier.services.gateway import fetch_protected, list_accessible_documents

router = APIRouter()

Level = Annotated[int, Query(ge=0, le=MAX_LEVEL)]


@router.get("", response_model=list[Document])
def list_documents(_user: CurrentUserDep, storage: StorageDep) -> list[Document]:
    return storage.get_documents()


@router.get("/accessible", response_model=list[Document])
def get_accessible_documents(
    _user: CurrentUserDep,
    storage: StorageDep,
    securityLevel: Level = 0,
    medicalLevel: Level = 0,
    adminLevel: Level = 0,
) -> list[Document]:
    """
    Documents whose every required level is at or below the given levels.

    Clients pass the levels of their selected credential. Each axis is compared
    independently; store order is preserved.
    """
    return list_accessible_documents(storage, securityLevel, medicalLevel, adminLevel)


@router.get(
    "/{document_id}",
    response_model=Document,
    responses={403: {"model": AccessDeniedResponse}},
)
def get_document(document_id: int, user: CurrentUserDep, storage: StorageDep) -> Document:
    """
    Return a document if the caller's selected credential clears it.

    403 carries requiredLevels (and currentLevels when a credential is selected).
    """
    return fetch_protected(storage, user.id, "document", document_id)

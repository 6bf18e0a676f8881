"""Personnel file endpoints."""

from fastapi import APIRouter

from dossier.api.deps import StorageDep
from dossier.api.v1.auth import CurrentUserDep
from dossier.schemas.access import AccessDeniedResponse
from dossier.schemas.resources import PersonnelFile
from dossier.services.gateway import fetch_protected, list_accessible_for_user

router = APIRouter()


@router.get("", response_model=list[PersonnelFile])
def list_personnel(user: CurrentUserDep, storage: StorageDep) -> list[PersonnelFile]:
    return list_accessible_for_user(storage, user.id, "personnel")


@router.get(
    "/{personnel_id}",
    response_model=PersonnelFile,
    responses={403: {"model": AccessDeniedResponse}},
)
def get_personnel_file(
    personnel_id: int, user: CurrentUserDep, storage: StorageDep
) -> PersonnelFile:
    return fetch_protected(storage, user.id, "personnel", personnel_id)

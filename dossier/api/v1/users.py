"""Player profile endpoints."""

from fastapi import APIRouter

from dossier.api.deps import StorageDep
from dossier.api.v1.auth import CurrentUserDep
from dossier.schemas.credentials import ResetProgressResponse
from dossier.services.credentials import reset_progress

router = APIRouter()


@router.post("/reset-progress", response_model=ResetProgressResponse)
def post_reset_progress(user: CurrentUserDep, storage: StorageDep) -> ResetProgressResponse:
    """Forget every credential the caller has collected. The account itself is kept."""
    return ResetProgressResponse(removed=reset_progress(storage, user.id))

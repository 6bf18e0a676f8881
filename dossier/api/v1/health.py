"""Health check endpoint with storage connectivity check."""

from fastapi import APIRouter

from dossier.api.deps import StorageDep
from dossier.core.config import settings
from dossier.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(storage: StorageDep) -> HealthResponse:
    """
    Return service health status and storage connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if storage.ping() else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        storage=storage.name,
        database=db_status,
    )

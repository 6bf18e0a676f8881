"""Access decision result and the 403 denial payload."""

from typing import Literal

from pydantic import Field

from dossier.schemas.base import CamelModel
from dossier.schemas.clearance import ClearanceLevels

DenialReason = Literal["NoCredentialSelected", "InsufficientClearance"]

DENIAL_MESSAGES: dict[str, str] = {
    "NoCredentialSelected": "Access denied - No credential selected",
    "InsufficientClearance": "Access denied - Insufficient permissions",
}


class AccessDecision(CamelModel):
    """Outcome of comparing a selected credential against a resource requirement."""

    allowed: bool
    reason: DenialReason | None = None
    required_levels: ClearanceLevels
    current_levels: ClearanceLevels | None = None


class AccessDeniedResponse(CamelModel):
    """403 body: enough to render "what you need vs. what you have" without another request."""

    kind: Literal["AccessDenied"] = "AccessDenied"
    access_denied: bool = True
    reason: DenialReason
    message: str
    required_levels: ClearanceLevels
    current_levels: ClearanceLevels | None = Field(
        default=None,
        description="Selected credential's levels; absent when no credential is selected",
    )

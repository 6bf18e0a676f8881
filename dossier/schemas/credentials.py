"""Schemas for in-game credentials, user bindings and the /credentials endpoints."""

from datetime import datetime

from pydantic import Field

from dossier.schemas.base import CamelModel, RequestModel
from dossier.schemas.clearance import ClearanceFields

CREDENTIAL_FIELD_MAX_LENGTH = 255
NOTES_MAX_LENGTH = 4_000


class Credential(ClearanceFields):
    """
    A discoverable login persona with the clearance it grants.

    The password is a plain in-world secret; it is kept on the record for
    verification and never serialized, so records rebuilt from a response
    payload carry None.
    """

    id: int
    username: str
    password: str | None = Field(default=None, exclude=True, repr=False)
    display_name: str
    notes: str | None = None
    is_active: bool = True
    discovered_at: datetime


class HeldCredential(Credential):
    """A credential joined with the caller's binding state."""

    is_selected: bool = False

    @classmethod
    def from_credential(cls, credential: Credential, is_selected: bool) -> "HeldCredential":
        # dict() keeps the excluded password field, model_dump() would drop it
        return cls.model_validate({**dict(credential), "is_selected": is_selected})


class Binding(CamelModel):
    """User-credential join record."""

    id: int
    user_id: int
    credential_id: int
    is_selected: bool = False


class CredentialCreate(RequestModel, ClearanceFields):
    """Request body for POST /credentials/create."""

    username: str = Field(..., min_length=1, max_length=CREDENTIAL_FIELD_MAX_LENGTH)
    password: str = Field(..., min_length=1, max_length=CREDENTIAL_FIELD_MAX_LENGTH)
    display_name: str = Field(..., min_length=1, max_length=CREDENTIAL_FIELD_MAX_LENGTH)
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)


class VerifyCredentialRequest(RequestModel):
    """Request body for POST /credentials/verify: a username/password found in the world."""

    username: str = Field(..., min_length=1, max_length=CREDENTIAL_FIELD_MAX_LENGTH)
    password: str = Field(..., min_length=1, max_length=CREDENTIAL_FIELD_MAX_LENGTH)


class VerifyCredentialResponse(CamelModel):
    """Acquired credential plus the held credential it supersedes, if any."""

    message: str = "Credential verified and added to your profile"
    credential: Credential
    obsolete_credential: Credential | None = None


class SelectCredentialResponse(CamelModel):
    message: str = "Credential selected successfully"
    binding: Binding


class MessageResponse(CamelModel):
    message: str


class ResetProgressResponse(CamelModel):
    message: str = "Game progress has been reset successfully"
    removed: int = Field(..., ge=0, description="Number of credential bindings removed")

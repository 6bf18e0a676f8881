"""Pydantic request/response schemas."""

from dossier.schemas.access import AccessDecision, AccessDeniedResponse, DenialReason
from dossier.schemas.auth import CurrentUser, User
from dossier.schemas.clearance import ZERO_LEVELS, ClearanceFields, ClearanceLevels
from dossier.schemas.credentials import (
    Binding,
    Credential,
    CredentialCreate,
    HeldCredential,
    VerifyCredentialRequest,
    VerifyCredentialResponse,
)
from dossier.schemas.health import HealthResponse
from dossier.schemas.resources import (
    Document,
    DocumentCreate,
    PersonnelFile,
    PersonnelFileCreate,
    Terminal,
    TerminalCreate,
)

__all__ = [
    "AccessDecision",
    "AccessDeniedResponse",
    "Binding",
    "ClearanceFields",
    "ClearanceLevels",
    "Credential",
    "CredentialCreate",
    "CurrentUser",
    "DenialReason",
    "Document",
    "DocumentCreate",
    "HealthResponse",
    "HeldCredential",
    "PersonnelFile",
    "PersonnelFileCreate",
    "Terminal",
    "TerminalCreate",
    "User",
    "VerifyCredentialRequest",
    "VerifyCredentialResponse",
    "ZERO_LEVELS",
]

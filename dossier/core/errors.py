"""Domain error taxonomy. Each error carries a machine-checkable kind and an HTTP status."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dossier.schemas.access import AccessDecision
    from dossier.schemas.credentials import Credential


class DossierError(Exception):
    """Base class for expected, caller-recoverable failures."""

    kind: str = "Error"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def payload(self) -> dict[str, Any]:
        """JSON body for the error response."""
        return {"kind": self.kind, "message": self.message}


class ResourceNotFoundError(DossierError):
    kind = "NotFound"
    status_code = 404


class InvalidCredentialsError(DossierError):
    """Submitted in-game username/password does not match any credential."""

    kind = "InvalidCredentials"
    status_code = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class AlreadyAcquiredError(DossierError):
    """The user already holds this credential; re-acquisition is rejected."""

    kind = "AlreadyAcquired"
    status_code = 409

    def __init__(
        self,
        credential: Credential | None = None,
        message: str = "Credential already exists in your profile",
    ) -> None:
        self.credential = credential
        super().__init__(message)

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        if self.credential is not None:
            body["credential"] = self.credential.model_dump(mode="json", by_alias=True)
        return body


class NotOwnedError(DossierError):
    kind = "NotOwned"
    status_code = 404

    def __init__(self, message: str = "Credential not found or not owned by user") -> None:
        super().__init__(message)


class AccessDeniedError(DossierError):
    """Selected credential does not satisfy the resource's required clearance."""

    kind = "AccessDenied"
    status_code = 403

    def __init__(self, decision: AccessDecision, message: str) -> None:
        self.decision = decision
        super().__init__(message)

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        body["accessDenied"] = True
        body["reason"] = self.decision.reason
        body["requiredLevels"] = self.decision.required_levels.model_dump()
        if self.decision.current_levels is not None:
            body["currentLevels"] = self.decision.current_levels.model_dump()
        return body


class ValidationFailedError(DossierError):
    kind = "ValidationError"
    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        body["errors"] = self.errors
        return body


class CredentialIntegrityError(DossierError):
    """
    A binding references a credential that no longer exists.

    Storage corruption, not a clearance problem: rendered as a generic 500.
    """

    kind = "IntegrityError"
    status_code = 500

    def __init__(self, user_id: int, credential_id: int) -> None:
        self.user_id = user_id
        self.credential_id = credential_id
        super().__init__(
            f"Binding for user {user_id} references missing credential {credential_id}"
        )

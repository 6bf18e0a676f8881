"""Resource gateway: look up a protected resource and enforce the caller's selected clearance."""

import logging
from collections.abc import Callable
from typing import Any

from dossier.core.errors import AccessDeniedError, ResourceNotFoundError
from dossier.schemas.access import DENIAL_MESSAGES
from dossier.schemas.clearance import ZERO_LEVELS, ClearanceLevels
from dossier.schemas.resources import Document, ResourceKind
from dossier.services.access import decide_access, filter_accessible
from dossier.services.clearance import levels_of
from dossier.services.credentials import get_selected_credential
from dossier.storage.base import Storage

logger = logging.getLogger(__name__)

_LABELS: dict[str, str] = {
    "document": "Document",
    "terminal": "Terminal",
    "personnel": "Personnel file",
}


def _getter(storage: Storage, kind: ResourceKind) -> Callable[[int], Any]:
    if kind == "document":
        return storage.get_document
    if kind == "terminal":
        return storage.get_terminal
    return storage.get_personnel_file


def _lister(storage: Storage, kind: ResourceKind) -> Callable[[], list[Any]]:
    if kind == "document":
        return storage.get_documents
    if kind == "terminal":
        return storage.get_terminals
    return storage.get_personnel_files


def current_levels(storage: Storage, user_id: int) -> ClearanceLevels | None:
    """Levels of the user's selected credential, or None when nothing is selected."""
    selected = get_selected_credential(storage, user_id)
    return levels_of(selected) if selected is not None else None


def fetch_protected(
    storage: Storage, user_id: int, kind: ResourceKind, resource_id: int
) -> Any:
    """
    Return the resource if the user's selected credential clears it.

    Raises ResourceNotFoundError when the id is unknown and AccessDeniedError
    (carrying required and current levels) when clearance is missing.
    """
    resource = _getter(storage, kind)(resource_id)
    if resource is None:
        raise ResourceNotFoundError(f"{_LABELS[kind]} not found")

    decision = decide_access(levels_of(resource), current_levels(storage, user_id))
    if not decision.allowed:
        logger.warning(
            "Access denied: user_id=%s %s_id=%s reason=%s",
            user_id,
            kind,
            resource_id,
            decision.reason,
        )
        raise AccessDeniedError(decision, DENIAL_MESSAGES[decision.reason])
    return resource


def list_accessible_documents(
    storage: Storage, security_level: int, medical_level: int, admin_level: int
) -> list[Document]:
    """Documents dominated by the supplied levels, in store order."""
    return storage.get_accessible_documents(security_level, medical_level, admin_level)


def list_accessible_for_user(storage: Storage, user_id: int, kind: ResourceKind) -> list[Any]:
    """Resources of `kind` the user's selected credential clears (zero levels if none selected)."""
    levels = current_levels(storage, user_id) or ZERO_LEVELS
    return filter_accessible(_lister(storage, kind)(), levels)

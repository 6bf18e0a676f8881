"""Access decision: compare a resource's required clearance with the selected credential.

Pure functions; inputs are fetched by the gateway.
"""

from collections.abc import Iterable
from typing import TypeVar

from dossier.schemas.access import AccessDecision
from dossier.schemas.clearance import ClearanceLevels
from dossier.services.clearance import dominates, levels_of

ResourceT = TypeVar("ResourceT")


def decide_access(
    required: ClearanceLevels, current: ClearanceLevels | None
) -> AccessDecision:
    """
    Allow iff a credential is selected and its levels dominate `required`.

    - current is None: deny, NoCredentialSelected (only required levels reported).
    - current does not dominate: deny, InsufficientClearance (both vectors reported).
    """
    if current is None:
        return AccessDecision(
            allowed=False,
            reason="NoCredentialSelected",
            required_levels=required,
        )
    if not dominates(current, required):
        return AccessDecision(
            allowed=False,
            reason="InsufficientClearance",
            required_levels=required,
            current_levels=current,
        )
    return AccessDecision(allowed=True, required_levels=required, current_levels=current)


def filter_accessible(
    resources: Iterable[ResourceT], levels: ClearanceLevels
) -> list[ResourceT]:
    """Resources whose requirement `levels` dominates, in input order."""
    return [r for r in resources if dominates(levels, levels_of(r))]

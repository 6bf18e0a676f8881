"""Clearance vector comparison: per-axis dominance and strict dominance.

Dominance is a partial order. Two vectors can be incomparable (e.g. security=2/medical=0
against security=0/medical=2); neither dominates the other and neither is obsolete.
"""

from typing import Any

from dossier.schemas.clearance import ZERO_LEVELS, ClearanceLevels


def _axis(obj: Any, name: str) -> int:
    value = getattr(obj, name, None)
    return int(value) if value is not None else 0


def levels_of(obj: Any) -> ClearanceLevels:
    """
    Clearance vector of a record (credential, document, terminal, personnel file).

    Accepts a ClearanceLevels as-is, anything with security_level / medical_level /
    admin_level attributes (ORM rows or schemas), or None (zero vector).
    Missing or null axes count as 0.
    """
    if obj is None:
        return ZERO_LEVELS
    if isinstance(obj, ClearanceLevels):
        return obj
    return ClearanceLevels(
        security=_axis(obj, "security_level"),
        medical=_axis(obj, "medical_level"),
        admin=_axis(obj, "admin_level"),
    )


def dominates(held: ClearanceLevels, required: ClearanceLevels) -> bool:
    """True iff held >= required on every axis."""
    return (
        held.security >= required.security
        and held.medical >= required.medical
        and held.admin >= required.admin
    )


def strictly_dominates(newer: ClearanceLevels, older: ClearanceLevels) -> bool:
    """True iff newer dominates older and is strictly greater on at least one axis."""
    return dominates(newer, older) and newer.as_tuple() != older.as_tuple()

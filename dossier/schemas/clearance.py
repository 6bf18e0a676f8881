"""Clearance vector value type and the clearance columns shared by credentials and resources."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dossier.schemas.base import CamelModel

AXES: tuple[str, ...] = ("security", "medical", "admin")

# Upper bound for every clearance axis, on records and in queries alike.
MAX_LEVEL = 1_000


class ClearanceLevels(BaseModel):
    """
    Three-axis clearance vector {security, medical, admin}.

    Used both for what a credential grants and what a resource requires.
    A zero on an axis means "no restriction" when required and "nothing" when granted.
    """

    model_config = ConfigDict(frozen=True)

    security: int = Field(default=0, ge=0, le=MAX_LEVEL)
    medical: int = Field(default=0, ge=0, le=MAX_LEVEL)
    admin: int = Field(default=0, ge=0, le=MAX_LEVEL)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.security, self.medical, self.admin)


ZERO_LEVELS = ClearanceLevels()


class ClearanceFields(CamelModel):
    """Flat securityLevel/medicalLevel/adminLevel columns as stored on records."""

    security_level: int = Field(default=0, ge=0, le=MAX_LEVEL)
    medical_level: int = Field(default=0, ge=0, le=MAX_LEVEL)
    admin_level: int = Field(default=0, ge=0, le=MAX_LEVEL)

    @field_validator("security_level", "medical_level", "admin_level", mode="before")
    @classmethod
    def null_level_is_zero(cls, v: int | None) -> int:
        return 0 if v is None else v

    @property
    def levels(self) -> ClearanceLevels:
        return ClearanceLevels(
            security=self.security_level,
            medical=self.medical_level,
            admin=self.admin_level,
        )

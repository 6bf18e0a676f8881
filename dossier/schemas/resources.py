"""Schemas for clearance-protected resources: documents, terminals and personnel files."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from dossier.schemas.base import RequestModel
from dossier.schemas.clearance import MAX_LEVEL, ClearanceFields

PersonnelStatus = Literal["Active", "Deceased", "MIA", "Suspended", "Reassigned"]
ResourceKind = Literal["document", "terminal", "personnel"]


class Document(ClearanceFields):
    """Archive document; the clearance fields are what a reader must hold."""

    id: int
    document_code: str
    title: str
    content: str
    author: str | None = None
    revision_number: int = 1
    has_images: bool = False
    images: list[str] = Field(default_factory=list)
    related_documents: list[int] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None


class Terminal(ClearanceFields):
    id: int
    terminal_code: str
    name: str
    location: str
    description: str = ""
    content: str = ""
    created_at: datetime


class PersonnelFile(ClearanceFields):
    """Personnel record. clearance_level is the person's own rank, not a requirement."""

    id: int
    employee_code: str
    name: str
    title: str
    department: str
    clearance_level: int = 0
    status: PersonnelStatus = "Active"
    last_seen: str | None = None
    biography: str = ""
    notes: str = ""
    created_at: datetime


class DocumentCreate(RequestModel, ClearanceFields):
    document_code: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    author: str | None = Field(default=None, max_length=255)
    has_images: bool = False
    images: list[str] = Field(default_factory=list)
    related_documents: list[int] = Field(default_factory=list)


class TerminalCreate(RequestModel, ClearanceFields):
    terminal_code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    content: str = ""


class PersonnelFileCreate(RequestModel, ClearanceFields):
    employee_code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    clearance_level: int = Field(default=0, ge=0, le=MAX_LEVEL)
    status: PersonnelStatus = "Active"
    last_seen: str | None = None
    biography: str = ""
    notes: str = ""

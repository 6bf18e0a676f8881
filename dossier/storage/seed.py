"""Default world content: starter documents, terminals, personnel files and credentials."""

import logging

from dossier.schemas.credentials import CredentialCreate
from dossier.schemas.resources import DocumentCreate, PersonnelFileCreate, TerminalCreate
from dossier.storage.base import Storage

logger = logging.getLogger(__name__)

DOCUMENTS: tuple[DocumentCreate, ...] = (
    DocumentCreate(
        document_code="DOC-2301",
        title="SCP-███ Containment Protocol",
        content=(
            "SCP-███ is to be contained in a standard humanoid containment cell "
            "with reinforced walls..."
        ),
        security_level=1,
        author="Dr. [REDACTED]",
    ),
    DocumentCreate(
        document_code="DOC-4382",
        title="Medical Report: Incident #4382",
        content=(
            "On █████, a research assistant assigned to Lab-19 reported symptoms "
            "consistent with [DATA EXPUNGED]..."
        ),
        medical_level=2,
        author="Dr. [REDACTED]",
        has_images=True,
        images=["neural_scan.jpg"],
        related_documents=[1, 3],
    ),
    DocumentCreate(
        document_code="DOC-9173",
        title="Site Director's Memo",
        content=(
            "All personnel are reminded that access to SCP-███ is restricted to "
            "those with proper clearance..."
        ),
        admin_level=2,
        author="Site Director",
    ),
)

TERMINALS: tuple[TerminalCreate, ...] = (
    TerminalCreate(
        terminal_code="SCP-NET-01",
        name="SCP-NET-01",
        location="Central Command",
        description="Primary access terminal for general facility information.",
        security_level=1,
    ),
    TerminalCreate(
        terminal_code="RES-TERM-42",
        name="RES-TERM-42",
        location="Research Wing B",
        description="Terminal connected to the research database for Sector B.",
        security_level=2,
    ),
    TerminalCreate(
        terminal_code="SEC-TERM-15",
        name="SEC-TERM-15",
        location="Security Office",
        description="Security operations terminal with access to surveillance systems.",
        security_level=3,
    ),
    TerminalCreate(
        terminal_code="MED-TERM-08",
        name="MED-TERM-08",
        location="Medical Bay",
        description="Terminal for accessing patient records and medical research data.",
        security_level=2,
        medical_level=1,
    ),
)

PERSONNEL: tuple[PersonnelFileCreate, ...] = (
    PersonnelFileCreate(
        employee_code="EMP-0001",
        name="Dr. [REDACTED]",
        title="Senior Researcher",
        department="Research & Development",
        clearance_level=3,
        last_seen="2025-04-29",
        biography=(
            "Joined the facility in 2018 after completing their doctorate in "
            "[DATA EXPUNGED]."
        ),
        notes="Recommended for promotion to Level 4 clearance in the next review cycle.",
        security_level=1,
    ),
    PersonnelFileCreate(
        employee_code="EMP-0002",
        name="Agent ███████",
        title="Field Operative",
        department="Security",
        clearance_level=2,
        status="MIA",
        last_seen="2025-03-15",
        biography="Specialized in recovery operations and threat assessment.",
        notes="Last communication received during Operation ████████.",
        security_level=2,
    ),
    PersonnelFileCreate(
        employee_code="EMP-0003",
        name="Dr. █████ ██████",
        title="Medical Officer",
        department="Medical",
        clearance_level=3,
        last_seen="2025-04-28",
        biography="Oversees the medical treatment and monitoring of facility staff.",
        notes="Developed several protocols for treating [REDACTED] exposure.",
        security_level=2,
        medical_level=1,
    ),
)

CREDENTIALS: tuple[CredentialCreate, ...] = (
    CredentialCreate(
        username="visitor_temporary",
        password="guest123",
        display_name="visitor_temporary",
    ),
)


def load_world(storage: Storage) -> dict[str, int]:
    """
    Insert the default content into storage, skipping records whose code or
    username already exists. Returns the number of records created per kind.
    """
    created = {"documents": 0, "terminals": 0, "personnel": 0, "credentials": 0}

    document_codes = {d.document_code for d in storage.get_documents()}
    for doc in DOCUMENTS:
        if doc.document_code not in document_codes:
            storage.create_document(doc)
            created["documents"] += 1

    terminal_codes = {t.terminal_code for t in storage.get_terminals()}
    for terminal in TERMINALS:
        if terminal.terminal_code not in terminal_codes:
            storage.create_terminal(terminal)
            created["terminals"] += 1

    employee_codes = {p.employee_code for p in storage.get_personnel_files()}
    for person in PERSONNEL:
        if person.employee_code not in employee_codes:
            storage.create_personnel_file(person)
            created["personnel"] += 1

    for cred in CREDENTIALS:
        if storage.get_credential_by_username(cred.username) is None:
            storage.create_credential(cred)
            created["credentials"] += 1

    logger.info("World content loaded into %s storage: %s", storage.name, created)
    return created

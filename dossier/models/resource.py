"""ORM models for clearance-protected content: documents, terminals, personnel files."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, false, func

from dossier.models.base import Base, ClearanceColumnsMixin


class Document(ClearanceColumnsMixin, Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_code = Column(String(64), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(255), nullable=True)
    revision_number = Column(Integer, nullable=False, default=1, server_default="1")
    has_images = Column(Boolean, nullable=False, default=False, server_default=false())
    images = Column(JSON, nullable=False, default=list)
    related_documents = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)


class Terminal(ClearanceColumnsMixin, Base):
    __tablename__ = "terminals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    terminal_code = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class PersonnelFile(ClearanceColumnsMixin, Base):
    """Personnel record. clearance_level is the person's rank; the mixin columns gate viewing."""

    __tablename__ = "personnel_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_code = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    clearance_level = Column(Integer, nullable=False, default=0, server_default="0")
    status = Column(String(32), nullable=False, default="Active", server_default="Active")
    last_seen = Column(String(255), nullable=True)
    biography = Column(Text, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

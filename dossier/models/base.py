"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy import Column, Integer
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class ClearanceColumnsMixin:
    """Per-axis clearance columns; 0 means no restriction (resources) or no grant (credentials)."""

    security_level = Column(Integer, nullable=False, default=0, server_default="0")
    medical_level = Column(Integer, nullable=False, default=0, server_default="0")
    admin_level = Column(Integer, nullable=False, default=0, server_default="0")

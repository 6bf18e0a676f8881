"""ORM model for platform accounts (session auth, admin flag)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func

from dossier.models.base import Base


class User(Base):
    """User account for JWT authentication; owns credential bindings."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    last_login = Column(DateTime(timezone=True), nullable=True)

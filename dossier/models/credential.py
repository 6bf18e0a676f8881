"""ORM models for in-game credentials and the user-credential join table."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    false,
    func,
    true,
)

from dossier.models.base import Base, ClearanceColumnsMixin


class Credential(ClearanceColumnsMixin, Base):
    """
    Discoverable login persona.

    password is stored as-is: it is an in-world secret compared by equality,
    not an account password.
    """

    __tablename__ = "credentials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    discovered_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class UserCredential(Base):
    """Binding of a credential to a user. At most one row per user has is_selected = true."""

    __tablename__ = "user_credentials"
    __table_args__ = (
        UniqueConstraint("user_id", "credential_id", name="uq_user_credentials_user_credential"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    credential_id = Column(
        Integer,
        ForeignKey("credentials.id"),
        nullable=False,
        index=True,
    )
    is_selected = Column(Boolean, nullable=False, default=False, server_default=false())

"""
User entity models.

Profiles mirror accounts of the external identity provider. Each profile has
at most one role; invitations pre-assign a role to an e-mail address.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlalchemy import Enum as SAEnum
from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now

INVITATION_TTL = timedelta(days=7)


class AppRole(str, Enum):
    """Campaign role of a user."""

    DM = "dm"
    PLAYER = "player"


def _role_column() -> Column:
    return Column(
        SAEnum(AppRole, name="app_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
    )


def _invitation_expiry() -> datetime:
    return utc_now() + INVITATION_TTL


class Profile(Base, table=True):
    """User profile.

    Table: profiles
    """

    __tablename__ = "profiles"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: Optional[str] = Field(default=None, index=True)
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Profile(id={self.id}, email={self.email}, active={self.is_active})"


class UserRole(Base, table=True):
    """Role assignment of a profile.

    Table: user_roles
    """

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", name="uq_user_roles_user_id"), {"extend_existing": True})

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="profiles.id", ondelete="CASCADE", index=True)
    role: AppRole = Field(sa_column=_role_column())
    created_at: datetime = Field(default_factory=utc_now)


class UserInvitation(Base, table=True):
    """Pending or accepted invitation.

    Table: user_invitations
    """

    __tablename__ = "user_invitations"
    __table_args__ = (
        UniqueConstraint("email", "role", name="uq_user_invitations_email_role"),
        {"extend_existing": True},
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True)
    role: AppRole = Field(sa_column=_role_column())
    invited_by: Optional[UUID] = Field(default=None, foreign_key="profiles.id", ondelete="SET NULL")
    invitation_token: UUID = Field(default_factory=uuid4, unique=True)
    expires_at: datetime = Field(default_factory=_invitation_expiry)
    accepted_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"UserInvitation(id={self.id}, email={self.email}, role={self.role})"

"""
Profile, role and invitation I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from slumbering_ancients.core.database.entities.users import AppRole


class UserRead(BaseModel):
    """A profile with its role; users without an assigned role are players."""

    id: UUID
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool
    role: AppRole = AppRole.PLAYER
    created_at: datetime


class ProfileCreate(BaseModel):
    """Schema for mirroring an account of the identity provider."""

    id: Optional[UUID] = Field(default=None, description="Account id; generated when omitted")
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: AppRole = AppRole.PLAYER


class RoleUpdate(BaseModel):
    role: AppRole


class StatusChange(BaseModel):
    """Who performs an activation change."""

    acting_user_id: Optional[UUID] = Field(default=None, description="Profile performing the change")


class InvitationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: AppRole
    invited_by: Optional[UUID] = None
    invitation_token: UUID
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: datetime


class InvitationCreate(BaseModel):
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    role: AppRole = AppRole.PLAYER
    invited_by: Optional[UUID] = None

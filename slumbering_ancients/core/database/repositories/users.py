"""
Repositories for profiles, role assignments and invitations.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import AppRole, Profile, UserInvitation, UserRole
from .base import AsyncSQLModelRepository


class ProfileRepository(AsyncSQLModelRepository[Profile]):
    """Repository for user profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)
        self.order_by = (Profile.created_at,)

    async def list_with_roles(self) -> List[tuple[Profile, Optional[AppRole]]]:
        """Profiles in creation order, each with its assigned role (None when unassigned)."""
        stmt = (
            select(Profile, UserRole.role)
            .join(UserRole, UserRole.user_id == Profile.id, isouter=True)
            .order_by(*self.order_by)
        )
        result = await self.session.execute(stmt)
        return [(profile, role) for profile, role in result.all()]

    async def set_active(self, profile: Profile, is_active: bool) -> Profile:
        profile.is_active = is_active
        return await self.update(profile)


class UserRoleRepository(AsyncSQLModelRepository[UserRole]):
    """Repository for role assignments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserRole)

    async def get_for_user(self, user_id: UUID) -> Optional[UserRole]:
        stmt = select(UserRole).where(UserRole.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_role(self, user_id: UUID, role: AppRole) -> UserRole:
        """Assign ``role`` to a user, replacing any previous role."""
        current = await self.get_for_user(user_id)
        if current is None:
            return await self.create(UserRole(user_id=user_id, role=role))
        current.role = role
        self.session.add(current)
        await self.session.commit()
        await self.session.refresh(current)
        return current


class UserInvitationRepository(AsyncSQLModelRepository[UserInvitation]):
    """Repository for invitations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UserInvitation)
        self.order_by = (UserInvitation.created_at.desc(),)

    async def get_by_email_and_role(self, email: str, role: AppRole) -> Optional[UserInvitation]:
        stmt = select(UserInvitation).where(UserInvitation.email == email, UserInvitation.role == role)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_pending(self) -> List[UserInvitation]:
        """Invitations that were not accepted yet, newest first."""
        stmt = select(UserInvitation).where(UserInvitation.accepted_at.is_(None)).order_by(*self.order_by)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

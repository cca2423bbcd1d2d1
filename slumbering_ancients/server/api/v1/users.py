"""
API endpoints for user management.

Profiles mirror accounts of the identity provider; authentication itself is
handled upstream. Users without an assigned role are players.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.database.entities.users import AppRole, Profile, UserInvitation
from slumbering_ancients.core.database.repositories import (
    ProfileRepository,
    UserInvitationRepository,
    UserRoleRepository,
)
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.models.io.users import (
    InvitationCreate,
    InvitationRead,
    ProfileCreate,
    RoleUpdate,
    StatusChange,
    UserRead,
)
from slumbering_ancients.server.services.deps import SessionDep

router = APIRouter(tags=["users"])
invitations_router = APIRouter(tags=["invitations"])
logger = get_logger(__name__)


def to_user_read(profile: Profile, role: Optional[AppRole]) -> UserRead:
    return UserRead(
        id=profile.id,
        email=profile.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
        is_active=profile.is_active,
        role=role or AppRole.PLAYER,
        created_at=profile.created_at,
    )


async def _get_profile_or_404(repo: ProfileRepository, user_id: UUID) -> Profile:
    profile = await repo.get_by_id(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {user_id} not found")
    return profile


async def _role_of(session: SessionDep, user_id: UUID) -> Optional[AppRole]:
    assignment = await UserRoleRepository(session).get_for_user(user_id)
    return assignment.role if assignment else None


@router.get("", response_model=List[UserRead], summary="List Users")
async def list_users(session: SessionDep) -> List[UserRead]:
    rows = await ProfileRepository(session).list_with_roles()
    return [to_user_read(profile, role) for profile, role in rows]


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User Profile",
    responses={409: {"description": "Profile already exists"}},
)
async def create_user(payload: ProfileCreate, session: SessionDep) -> UserRead:
    repo = ProfileRepository(session)
    if payload.id is not None and await repo.get_by_id(payload.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"User {payload.id} already exists")
    profile = Profile(**payload.model_dump(exclude={"id", "role"}))
    if payload.id is not None:
        profile.id = payload.id
    profile = await repo.create(profile)
    await UserRoleRepository(session).set_role(profile.id, payload.role)
    return to_user_read(profile, payload.role)


@router.get("/{user_id}", response_model=UserRead, summary="Get User")
async def get_user(user_id: UUID, session: SessionDep) -> UserRead:
    profile = await _get_profile_or_404(ProfileRepository(session), user_id)
    return to_user_read(profile, await _role_of(session, user_id))


@router.post(
    "/{user_id}/deactivate",
    response_model=UserRead,
    summary="Deactivate User",
    responses={400: {"description": "Users cannot deactivate themselves"}, 404: {"description": "User not found"}},
)
async def deactivate_user(user_id: UUID, payload: StatusChange, session: SessionDep) -> UserRead:
    if payload.acting_user_id == user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot deactivate your own account")
    repo = ProfileRepository(session)
    profile = await repo.set_active(await _get_profile_or_404(repo, user_id), False)
    logger.info(f"User {user_id} deactivated by {payload.acting_user_id}")
    return to_user_read(profile, await _role_of(session, user_id))


@router.post("/{user_id}/reactivate", response_model=UserRead, summary="Reactivate User")
async def reactivate_user(user_id: UUID, session: SessionDep) -> UserRead:
    repo = ProfileRepository(session)
    profile = await repo.set_active(await _get_profile_or_404(repo, user_id), True)
    logger.info(f"User {user_id} reactivated")
    return to_user_read(profile, await _role_of(session, user_id))


@router.put("/{user_id}/role", response_model=UserRead, summary="Set User Role")
async def set_user_role(user_id: UUID, payload: RoleUpdate, session: SessionDep) -> UserRead:
    profile = await _get_profile_or_404(ProfileRepository(session), user_id)
    assignment = await UserRoleRepository(session).set_role(user_id, payload.role)
    return to_user_read(profile, assignment.role)


# ---------------------------------------------------------------------
# Invitations
# ---------------------------------------------------------------------


@invitations_router.post(
    "",
    response_model=InvitationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Invite User",
    description="Invite an e-mail address with a role. The invitation expires after seven days.",
    responses={409: {"description": "Invitation for this e-mail and role already exists"}},
)
async def create_invitation(payload: InvitationCreate, session: SessionDep) -> InvitationRead:
    repo = UserInvitationRepository(session)
    email = payload.email.lower()
    if await repo.get_by_email_and_role(email, payload.role) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"An invitation for {email} as {payload.role.value} already exists",
        )
    invitation = await repo.create(UserInvitation(email=email, role=payload.role, invited_by=payload.invited_by))
    logger.info(f"Invitation created for {email} as {payload.role.value}")
    return InvitationRead.model_validate(invitation)


@invitations_router.get(
    "",
    response_model=List[InvitationRead],
    summary="List Pending Invitations",
    description="Invitations that were not accepted yet, newest first.",
)
async def list_pending_invitations(session: SessionDep) -> List[InvitationRead]:
    return [InvitationRead.model_validate(i) for i in await UserInvitationRepository(session).list_pending()]


@invitations_router.delete("/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Revoke Invitation")
async def revoke_invitation(invitation_id: UUID, session: SessionDep) -> None:
    if not await UserInvitationRepository(session).delete(invitation_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Invitation {invitation_id} not found")

"""Unit tests for profile, role and invitation repositories."""

from __future__ import annotations

from datetime import datetime, timezone

from slumbering_ancients.core.database.entities import AppRole, Profile, UserInvitation
from slumbering_ancients.core.database.repositories import (
    ProfileRepository,
    UserInvitationRepository,
    UserRoleRepository,
)


class TestProfileRepository:
    async def test_list_with_roles_defaults_to_none(self, in_memory_session):
        profiles = ProfileRepository(in_memory_session)
        dm = await profiles.create(Profile(email="dm@example.com"))
        player = await profiles.create(Profile(email="player@example.com"))
        await UserRoleRepository(in_memory_session).set_role(dm.id, AppRole.DM)

        rows = {p.email: role for p, role in await profiles.list_with_roles()}

        assert rows == {"dm@example.com": AppRole.DM, "player@example.com": None}
        assert player.is_active is True

    async def test_set_active(self, in_memory_session):
        profiles = ProfileRepository(in_memory_session)
        profile = await profiles.create(Profile(email="rogue@example.com"))

        assert (await profiles.set_active(profile, False)).is_active is False
        assert (await profiles.get_by_id(profile.id)).is_active is False


class TestUserRoleRepository:
    async def test_set_role_replaces_previous(self, in_memory_session):
        profile = await ProfileRepository(in_memory_session).create(Profile(email="x@example.com"))
        roles = UserRoleRepository(in_memory_session)

        first = await roles.set_role(profile.id, AppRole.PLAYER)
        second = await roles.set_role(profile.id, AppRole.DM)

        assert first.id == second.id
        assert (await roles.get_for_user(profile.id)).role == AppRole.DM
        assert len(await roles.list()) == 1


class TestUserInvitationRepository:
    async def test_lookup_by_email_and_role(self, in_memory_session):
        repo = UserInvitationRepository(in_memory_session)
        await repo.create(UserInvitation(email="new@example.com", role=AppRole.PLAYER))

        assert await repo.get_by_email_and_role("new@example.com", AppRole.PLAYER) is not None
        assert await repo.get_by_email_and_role("new@example.com", AppRole.DM) is None

    async def test_list_pending_excludes_accepted(self, in_memory_session):
        repo = UserInvitationRepository(in_memory_session)
        await repo.create(UserInvitation(email="pending@example.com", role=AppRole.PLAYER))
        accepted = datetime(2026, 1, 1, tzinfo=timezone.utc)
        await repo.create(UserInvitation(email="done@example.com", role=AppRole.DM, accepted_at=accepted))

        assert [i.email for i in await repo.list_pending()] == ["pending@example.com"]

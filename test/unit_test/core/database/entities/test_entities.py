"""Unit tests for entity defaults and table mapping."""

from __future__ import annotations

from datetime import timedelta, timezone
from uuid import UUID, uuid4

import pytest

from slumbering_ancients.core.database.entities import (
    AppRole,
    Map,
    MapArea,
    MapIcon,
    MapLocation,
    MapSettings,
    Pin,
    PinType,
    Profile,
    RegionType,
    UserInvitation,
    UserRole,
    WikiContent,
)
from slumbering_ancients.core.database.entities.users import INVITATION_TTL


@pytest.mark.parametrize(
    "entity,table",
    [
        (Map, "maps"),
        (PinType, "pin_types"),
        (Pin, "pins"),
        (MapSettings, "map_settings"),
        (MapIcon, "map_icons"),
        (MapLocation, "map_locations"),
        (MapArea, "map_areas"),
        (RegionType, "region_types"),
        (WikiContent, "wiki_content"),
        (Profile, "profiles"),
        (UserRole, "user_roles"),
        (UserInvitation, "user_invitations"),
    ],
)
def test_table_names(entity, table):
    assert entity.__tablename__ == table


def test_metadata_attribute_maps_to_metadata_column():
    assert "metadata" in Map.__table__.columns
    assert Map(name="m", image_url="u", image_path="p", width=1, height=1).extra_metadata == {}


def test_ids_are_generated():
    first = PinType(name="City")
    second = PinType(name="Town")
    assert isinstance(first.id, UUID)
    assert first.id != second.id


def test_map_settings_defaults():
    settings = MapSettings()
    assert (settings.default_zoom, settings.min_zoom, settings.max_zoom) == (2, 1, 18)
    assert (settings.center_lat, settings.center_lng) == (0.0, 0.0)
    assert settings.map_image_url is None


def test_map_area_defaults():
    area = MapArea(map_id=uuid4(), area_name="Mirefen")
    assert area.area_type == "other"
    assert area.confidence_score == 0.5
    assert area.terrain_features == []
    assert area.bounding_box is None


def test_invitation_expires_after_seven_days():
    invitation = UserInvitation(email="bard@example.com", role=AppRole.PLAYER)
    assert INVITATION_TTL == timedelta(days=7)
    assert abs((invitation.expires_at - invitation.created_at) - INVITATION_TTL) < timedelta(seconds=5)
    assert isinstance(invitation.invitation_token, UUID)
    assert invitation.accepted_at is None


def test_timestamps_default_to_aware_utc():
    game_map = Map(name="Coast", image_url="https://cdn.example/coast.png", image_path="maps/coast.png", width=800, height=600)
    invitation = UserInvitation(email="bard@example.com", role=AppRole.PLAYER)

    assert game_map.created_at.tzinfo is timezone.utc
    assert game_map.updated_at.tzinfo is timezone.utc
    assert invitation.expires_at.tzinfo is timezone.utc


def test_app_role_values():
    assert [role.value for role in AppRole] == ["dm", "player"]


def test_repr_contains_identity():
    location = MapLocation(name="Harrow", x_coordinate=10, y_coordinate=20)
    assert "Harrow" in repr(location)

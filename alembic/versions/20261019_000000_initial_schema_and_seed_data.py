"""Initial schema and seed data for Slumbering Ancients

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

This is the initial migration that creates all tables and seeds default data:
- World map tables (map_settings, map_icons, map_locations)
- Uploaded map tables (maps, pin_types, pins, distance_measurements)
- Map area tables (map_areas, region_types)
- Wiki content with a pgvector embedding column and the match_documents function
- User tables (profiles, user_roles, user_invitations) with the app_role enum
- Default pin types and the single world map settings row

Revision format: YYYYMMDD_HHMMSS_description

"""

import uuid
from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa
from pgvector.sqlalchemy import Vector
from sqlalchemy.dialects.postgresql import ENUM, JSONB

from alembic import op
from slumbering_ancients.core.database.repositories.wiki_content import (
    CREATE_MATCH_DOCUMENTS_SQL,
    CREATE_VECTOR_EXTENSION_SQL,
)
from slumbering_ancients.server.core.constant import EMBEDDING_DIMENSIONS

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_PIN_TYPES = [
    ("City", "Major settlement or city", "#FF6B35", "settlement"),
    ("Town", "Small town or village", "#F7931E", "settlement"),
    ("Dungeon", "Dungeon or underground location", "#8B4513", "location"),
    ("Castle", "Castle or fortress", "#4A90E2", "structure"),
    ("Forest", "Forest or wooded area", "#228B22", "terrain"),
    ("Mountain", "Mountain or peak", "#8B7355", "terrain"),
    ("River", "River or waterway", "#4169E1", "terrain"),
    ("Point of Interest", "General point of interest", "#9B59B6", "misc"),
]


def _timestamps(with_updated: bool = True) -> list:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())]
    if with_updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()))
    return columns


def upgrade() -> None:
    """Create all tables and seed initial data."""
    op.execute(CREATE_VECTOR_EXTENSION_SQL)

    app_role = ENUM("dm", "player", name="app_role", create_type=False)
    app_role.create(op.get_bind(), checkfirst=True)

    # World map
    op.create_table(
        "map_settings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("map_image_url", sa.String(), nullable=True),
        sa.Column("map_image_path", sa.String(), nullable=True),
        sa.Column("default_zoom", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("max_zoom", sa.Integer(), nullable=False, server_default="18"),
        sa.Column("min_zoom", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("center_lat", sa.Float(), nullable=False, server_default="0"),
        sa.Column("center_lng", sa.Float(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "map_icons",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("tag_type", sa.String(), nullable=False),
        sa.Column("icon_url", sa.String(), nullable=False),
        sa.Column("icon_file_path", sa.String(), nullable=False),
        sa.Column("icon_size_width", sa.Integer(), nullable=False, server_default="25"),
        sa.Column("icon_size_height", sa.Integer(), nullable=False, server_default="25"),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_map_icons_tag_type", "tag_type"),
    )

    op.create_table(
        "map_locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("location_type", sa.String(), nullable=True),
        sa.Column("icon_id", sa.Uuid(), nullable=True),
        sa.Column("x_coordinate", sa.Float(), nullable=False),
        sa.Column("y_coordinate", sa.Float(), nullable=False),
        sa.Column("zoom_level", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["icon_id"], ["map_icons.id"], ondelete="SET NULL"),
        sa.CheckConstraint("x_coordinate >= 0 AND x_coordinate <= 100", name="ck_map_locations_x_percent"),
        sa.CheckConstraint("y_coordinate >= 0 AND y_coordinate <= 100", name="ck_map_locations_y_percent"),
    )

    # Uploaded maps
    op.create_table(
        "maps",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("image_path", sa.String(), nullable=False),
        sa.Column("thumbnail_url", sa.String(), nullable=True),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        sa.Column("scale_factor", sa.Float(), nullable=True),
        sa.Column("scale_unit", sa.String(), nullable=False, server_default="meters"),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("metadata", JSONB(), nullable=False, server_default="{}"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_maps_created_at", "created_at"),
    )

    op.create_table(
        "pin_types",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("icon_url", sa.String(), nullable=True),
        sa.Column("icon_path", sa.String(), nullable=True),
        sa.Column("color", sa.String(), nullable=False, server_default="#FF0000"),
        sa.Column("size_modifier", sa.Float(), nullable=False, server_default="1.0"),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("metadata", JSONB(), nullable=False, server_default="{}"),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_pin_types_category", "category"),
    )

    op.create_table(
        "pins",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("map_id", sa.Uuid(), nullable=False),
        sa.Column("pin_type_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("x_normalized", sa.Float(), nullable=False),
        sa.Column("y_normalized", sa.Float(), nullable=False),
        sa.Column("external_link", sa.String(), nullable=True),
        sa.Column("metadata", JSONB(), nullable=False, server_default="{}"),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["map_id"], ["maps.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["pin_type_id"], ["pin_types.id"], ondelete="SET NULL"),
        sa.CheckConstraint("x_normalized >= 0 AND x_normalized <= 1", name="ck_pins_x_normalized"),
        sa.CheckConstraint("y_normalized >= 0 AND y_normalized <= 1", name="ck_pins_y_normalized"),
        sa.Index("ix_pins_map_id", "map_id"),
        sa.Index("ix_pins_pin_type_id", "pin_type_id"),
    )

    op.create_table(
        "distance_measurements",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("map_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("points", JSONB(), nullable=False, server_default="[]"),
        sa.Column("total_distance", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(), nullable=False, server_default="meters"),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["map_id"], ["maps.id"], ondelete="CASCADE"),
        sa.Index("ix_distance_measurements_map_id", "map_id"),
    )

    # Map areas
    op.create_table(
        "map_areas",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("map_id", sa.Uuid(), nullable=False),
        sa.Column("area_name", sa.String(), nullable=False),
        sa.Column("area_type", sa.String(), nullable=False, server_default="other"),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("terrain_features", JSONB(), nullable=False, server_default="[]"),
        sa.Column("landmarks", JSONB(), nullable=False, server_default="[]"),
        sa.Column("general_location", sa.String(), nullable=True),
        sa.Column("bounding_box", JSONB(), nullable=True),
        sa.Column("polygon_coordinates", JSONB(), nullable=True),
        sa.Column("confidence_score", sa.Float(), nullable=False, server_default="0.5"),
        sa.Column("analysis_metadata", JSONB(), nullable=False, server_default="{}"),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["map_id"], ["maps.id"], ondelete="CASCADE"),
        sa.CheckConstraint("confidence_score >= 0 AND confidence_score <= 1", name="ck_map_areas_confidence"),
        sa.Index("ix_map_areas_map_id", "map_id"),
        sa.Index("ix_map_areas_area_type", "area_type"),
    )

    op.create_table(
        "region_types",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("color", sa.String(), nullable=False, server_default="#3B82F6"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_region_types_name"),
    )

    # Wiki
    op.create_table(
        "wiki_content",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("content_hash", sa.String(64), nullable=False),
        sa.Column("embedding", Vector(EMBEDDING_DIMENSIONS), nullable=True),
        sa.Column("scraped_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_wiki_content_url", "url", unique=True),
    )
    op.execute(CREATE_MATCH_DOCUMENTS_SQL)

    # Users
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_profiles_email", "email"),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role", app_role, nullable=False),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", name="uq_user_roles_user_id"),
        sa.Index("ix_user_roles_user_id", "user_id"),
    )

    op.create_table(
        "user_invitations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", app_role, nullable=False),
        sa.Column("invited_by", sa.Uuid(), nullable=True),
        sa.Column("invitation_token", sa.Uuid(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["invited_by"], ["profiles.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("email", "role", name="uq_user_invitations_email_role"),
        sa.UniqueConstraint("invitation_token", name="uq_user_invitations_token"),
        sa.Index("ix_user_invitations_email", "email"),
    )

    # Seed data
    now = datetime.now(timezone.utc)
    pin_types = sa.table(
        "pin_types",
        sa.column("id", sa.Uuid()),
        sa.column("name", sa.String()),
        sa.column("description", sa.String()),
        sa.column("color", sa.String()),
        sa.column("category", sa.String()),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    op.bulk_insert(
        pin_types,
        [
            {
                "id": uuid.uuid4(),
                "name": name,
                "description": description,
                "color": color,
                "category": category,
                "created_at": now,
                "updated_at": now,
            }
            for name, description, color, category in DEFAULT_PIN_TYPES
        ],
    )

    map_settings = sa.table(
        "map_settings",
        sa.column("id", sa.Uuid()),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    op.bulk_insert(map_settings, [{"id": uuid.uuid4(), "created_at": now, "updated_at": now}])


def downgrade() -> None:
    """Drop all tables and the database objects created by this migration."""
    op.execute("DROP FUNCTION IF EXISTS match_documents(vector, float, int)")
    for table in (
        "user_invitations",
        "user_roles",
        "profiles",
        "wiki_content",
        "region_types",
        "map_areas",
        "distance_measurements",
        "pins",
        "pin_types",
        "maps",
        "map_locations",
        "map_icons",
        "map_settings",
    ):
        op.drop_table(table)
    op.execute("DROP TYPE IF EXISTS app_role")

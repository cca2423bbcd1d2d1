"""
World map entity models.

The world map is a single image shown through a geographic viewer. Its
settings live in one row; locations are stored as percentages of the image
(see :mod:`slumbering_ancients.core.coordinates`) and may carry a custom icon.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field

from ..base import Base, utc_now


class MapSettings(Base, table=True):
    """Viewer settings of the world map.

    Table: map_settings
    """

    __tablename__ = "map_settings"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    map_image_url: Optional[str] = Field(default=None)
    map_image_path: Optional[str] = Field(default=None)
    default_zoom: int = Field(default=2)
    max_zoom: int = Field(default=18)
    min_zoom: int = Field(default=1)
    center_lat: float = Field(default=0.0)
    center_lng: float = Field(default=0.0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class MapIcon(Base, table=True):
    """Custom marker icon, grouped by tag type (City, Village, Ruins...).

    Table: map_icons
    """

    __tablename__ = "map_icons"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    tag_type: str = Field(index=True)
    icon_url: str
    icon_file_path: str
    icon_size_width: int = Field(default=25)
    icon_size_height: int = Field(default=25)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"MapIcon(id={self.id}, name={self.name}, tag_type={self.tag_type})"


class MapLocation(Base, table=True):
    """Named location on the world map.

    Table: map_locations
    """

    __tablename__ = "map_locations"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    description: Optional[str] = Field(default=None)
    location_type: Optional[str] = Field(default=None)
    icon_id: Optional[UUID] = Field(default=None, foreign_key="map_icons.id", ondelete="SET NULL")
    x_coordinate: float = Field(ge=0, le=100, description="Percent from the left edge")
    y_coordinate: float = Field(ge=0, le=100, description="Percent from the top edge")
    zoom_level: int = Field(default=2)
    created_by: Optional[UUID] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"MapLocation(id={self.id}, name={self.name}, x={self.x_coordinate}, y={self.y_coordinate})"

"""
Image map entity models.

Uploaded campaign maps and everything placed on them: pin types, pins and
saved distance measurements. Positions on a map are stored normalized to
``[0, 1]`` from the top-left corner of the image so they survive resizing.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, utc_now


class MapBase(Base):
    """Base fields for an uploaded map."""

    name: str = Field(description="Map name")
    description: Optional[str] = Field(default=None, description="Map description")
    image_url: str = Field(description="Public URL of the map image")
    image_path: str = Field(description="Storage path of the map image")
    thumbnail_url: Optional[str] = Field(default=None, description="Public URL of a thumbnail")
    width: int = Field(gt=0, description="Image width in pixels")
    height: int = Field(gt=0, description="Image height in pixels")
    scale_factor: Optional[float] = Field(default=None, description="Map units per pixel")
    scale_unit: str = Field(default="meters", description="Unit of distances on this map")
    created_by: Optional[UUID] = Field(default=None, description="Profile that uploaded the map")
    is_active: bool = Field(default=True, description="Whether the map is shown to players")


class Map(MapBase, table=True):
    """Uploaded map image.

    Table: maps
    """

    __tablename__ = "maps"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    extra_metadata: Dict[str, Any] = Field(default_factory=dict, sa_column=Column("metadata", JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Map(id={self.id}, name={self.name}, size={self.width}x{self.height})"


class PinType(Base, table=True):
    """Category of pin with its icon and colour.

    Table: pin_types
    """

    __tablename__ = "pin_types"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(description="Pin type name")
    description: Optional[str] = Field(default=None)
    icon_url: Optional[str] = Field(default=None)
    icon_path: Optional[str] = Field(default=None)
    color: str = Field(default="#FF0000", description="Hex colour of the pin")
    size_modifier: float = Field(default=1.0, description="Relative pin size")
    category: Optional[str] = Field(default=None, index=True)
    extra_metadata: Dict[str, Any] = Field(default_factory=dict, sa_column=Column("metadata", JSON, nullable=False))
    created_by: Optional[UUID] = Field(default=None)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"PinType(id={self.id}, name={self.name}, category={self.category})"


class Pin(Base, table=True):
    """Marker placed on a map at a normalized position.

    Table: pins
    """

    __tablename__ = "pins"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    map_id: UUID = Field(foreign_key="maps.id", ondelete="CASCADE", index=True)
    pin_type_id: Optional[UUID] = Field(default=None, foreign_key="pin_types.id", ondelete="SET NULL", index=True)
    name: str = Field(description="Pin title")
    description: Optional[str] = Field(default=None)
    x_normalized: float = Field(ge=0, le=1, description="Horizontal position, 0 is the left edge")
    y_normalized: float = Field(ge=0, le=1, description="Vertical position, 0 is the top edge")
    external_link: Optional[str] = Field(default=None, description="Link to a wiki page or notes")
    extra_metadata: Dict[str, Any] = Field(default_factory=dict, sa_column=Column("metadata", JSON, nullable=False))
    is_visible: bool = Field(default=True, description="Whether players can see the pin")
    created_by: Optional[UUID] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Pin(id={self.id}, name={self.name}, map_id={self.map_id})"


class DistanceMeasurement(Base, table=True):
    """Saved polyline measurement on a map.

    Table: distance_measurements
    """

    __tablename__ = "distance_measurements"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    map_id: UUID = Field(foreign_key="maps.id", ondelete="CASCADE", index=True)
    name: Optional[str] = Field(default=None)
    points: List[Dict[str, float]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    total_distance: float = Field(description="Path length in ``unit``")
    unit: str = Field(default="meters")
    created_by: Optional[UUID] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"DistanceMeasurement(id={self.id}, map_id={self.map_id}, total={self.total_distance} {self.unit})"

"""
Map area entity models.

Areas are regions of an uploaded map, either drawn by hand or detected by the
map analysis model. Region types are the palette of named colours used to
classify them.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, utc_now


class MapArea(Base, table=True):
    """Region of a map with its description and optional geometry.

    Table: map_areas
    """

    __tablename__ = "map_areas"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    map_id: UUID = Field(foreign_key="maps.id", ondelete="CASCADE", index=True)
    area_name: str
    area_type: str = Field(default="other", index=True)
    description: Optional[str] = Field(default=None)
    terrain_features: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    landmarks: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    general_location: Optional[str] = Field(default=None)
    bounding_box: Optional[Dict[str, float]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    polygon_coordinates: Optional[List[Dict[str, float]]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    confidence_score: float = Field(default=0.5, ge=0, le=1)
    analysis_metadata: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_by: Optional[UUID] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"MapArea(id={self.id}, name={self.area_name}, type={self.area_type})"


class RegionType(Base, table=True):
    """Named region classification.

    Table: region_types
    """

    __tablename__ = "region_types"
    __table_args__ = ({"extend_existing": True},)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True)
    color: str = Field(default="#3B82F6")
    is_active: bool = Field(default=True)
    created_by: Optional[UUID] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

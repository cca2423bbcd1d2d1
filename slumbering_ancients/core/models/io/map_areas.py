"""
Map area, region type and map analysis I/O models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from slumbering_ancients.core.coordinates import is_valid_bounding_box

from .base import PartialUpdate


class AreaType(str, Enum):
    """Kinds of areas the analysis model may report."""

    TERRAIN = "terrain"
    LANDMARK = "landmark"
    REGION = "region"
    SETTLEMENT = "settlement"
    WATER = "water"
    MOUNTAIN = "mountain"
    FOREST = "forest"
    DESERT = "desert"
    OTHER = "other"


class BoundingBox(BaseModel):
    """Normalized rectangle, ``(x1, y1)`` top-left and ``(x2, y2)`` bottom-right."""

    x1: float = Field(ge=0, le=1)
    y1: float = Field(ge=0, le=1)
    x2: float = Field(ge=0, le=1)
    y2: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _check_order(self) -> "BoundingBox":
        if not is_valid_bounding_box(self.model_dump()):
            raise ValueError("x2 must exceed x1 and y2 must exceed y1")
        return self


class MapAreaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    map_id: UUID
    area_name: str
    area_type: str
    description: Optional[str] = None
    terrain_features: List[str] = Field(default_factory=list)
    landmarks: List[str] = Field(default_factory=list)
    general_location: Optional[str] = None
    bounding_box: Optional[Dict[str, float]] = None
    polygon_coordinates: Optional[List[Dict[str, float]]] = None
    confidence_score: float
    analysis_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class MapAreaCreate(BaseModel):
    """Schema for drawing an area by hand."""

    map_id: UUID
    area_name: str = Field(min_length=1)
    area_type: str = AreaType.OTHER.value
    description: Optional[str] = None
    terrain_features: List[str] = Field(default_factory=list)
    landmarks: List[str] = Field(default_factory=list)
    general_location: Optional[str] = None
    bounding_box: Optional[BoundingBox] = None
    polygon_coordinates: Optional[List[Dict[str, float]]] = None
    confidence_score: float = Field(default=1.0, ge=0, le=1)
    created_by: Optional[UUID] = None


class MapAreaUpdate(PartialUpdate):
    non_nullable = frozenset({"area_name", "area_type", "terrain_features", "landmarks", "confidence_score"})

    area_name: Optional[str] = Field(default=None, min_length=1)
    area_type: Optional[str] = None
    description: Optional[str] = None
    terrain_features: Optional[List[str]] = None
    landmarks: Optional[List[str]] = None
    general_location: Optional[str] = None
    bounding_box: Optional[BoundingBox] = None
    polygon_coordinates: Optional[List[Dict[str, float]]] = None
    confidence_score: Optional[float] = Field(default=None, ge=0, le=1)


class RegionTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str
    is_active: bool
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class RegionTypeCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(default="#3B82F6", pattern=r"^#[0-9A-Fa-f]{6}$")
    is_active: bool = True
    created_by: Optional[UUID] = None


class RegionTypeUpdate(PartialUpdate):
    non_nullable = frozenset({"name", "color", "is_active"})

    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    is_active: Optional[bool] = None


class AnalyzeMapRequest(BaseModel):
    """Body of the ``analyze-map`` function."""

    model_config = ConfigDict(populate_by_name=True)

    map_id: Optional[UUID] = Field(default=None, alias="mapId")


class AnalyzeMapResponse(BaseModel):
    success: bool = True
    map_id: UUID
    map_name: str
    areas_analyzed: int
    areas_with_coordinates: int
    areas: List[MapAreaRead]
    message: str

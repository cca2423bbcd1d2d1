"""
Map, pin type, pin and distance measurement I/O models.

Positions on uploaded maps are normalized to ``[0, 1]`` from the top-left
corner of the image.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .base import PartialUpdate


class MapRead(BaseModel):
    """Schema for reading a map from API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    image_url: str
    image_path: str
    thumbnail_url: Optional[str] = None
    width: int
    height: int
    scale_factor: Optional[float] = None
    scale_unit: str
    extra_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class MapCreate(BaseModel):
    """Schema for registering an uploaded map image."""

    name: str = Field(min_length=1, description="Map name")
    description: Optional[str] = None
    image_url: str = Field(description="Public URL of the map image")
    image_path: str = Field(description="Storage path of the map image")
    thumbnail_url: Optional[str] = None
    width: int = Field(gt=0, description="Image width in pixels")
    height: int = Field(gt=0, description="Image height in pixels")
    scale_factor: Optional[float] = Field(default=None, gt=0, description="Map units per pixel")
    scale_unit: str = "meters"
    extra_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    is_active: bool = True


class MapUpdate(PartialUpdate):
    """Schema for updating a map via API."""

    non_nullable = frozenset(
        {"name", "image_url", "image_path", "width", "height", "scale_unit", "extra_metadata", "is_active"}
    )

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_path: Optional[str] = None
    thumbnail_url: Optional[str] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    scale_factor: Optional[float] = Field(default=None, gt=0)
    scale_unit: Optional[str] = None
    extra_metadata: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class PinTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    icon_path: Optional[str] = None
    color: str
    size_modifier: float
    category: Optional[str] = None
    extra_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class PinTypeCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    icon_url: Optional[str] = None
    icon_path: Optional[str] = None
    color: str = Field(default="#FF0000", pattern=r"^#[0-9A-Fa-f]{6}$")
    size_modifier: float = Field(default=1.0, gt=0)
    category: Optional[str] = None
    extra_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[UUID] = None
    is_active: bool = True


class PinTypeUpdate(PartialUpdate):
    non_nullable = frozenset({"name", "color", "size_modifier", "extra_metadata", "is_active"})

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    icon_url: Optional[str] = None
    icon_path: Optional[str] = None
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    size_modifier: Optional[float] = Field(default=None, gt=0)
    category: Optional[str] = None
    extra_metadata: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class PinRead(BaseModel):
    """Schema for reading a pin from API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    map_id: UUID
    pin_type_id: Optional[UUID] = None
    name: str
    description: Optional[str] = None
    x_normalized: float
    y_normalized: float
    external_link: Optional[str] = None
    extra_metadata: Dict[str, Any] = Field(default_factory=dict)
    is_visible: bool
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class PinCreate(BaseModel):
    """Schema for placing a pin on a map."""

    map_id: UUID
    pin_type_id: Optional[UUID] = None
    name: str = Field(min_length=1)
    description: Optional[str] = None
    x_normalized: float = Field(ge=0, le=1)
    y_normalized: float = Field(ge=0, le=1)
    external_link: Optional[str] = None
    extra_metadata: Dict[str, Any] = Field(default_factory=dict)
    is_visible: bool = True
    created_by: Optional[UUID] = None


class PinUpdate(PartialUpdate):
    non_nullable = frozenset({"name", "x_normalized", "y_normalized", "extra_metadata", "is_visible"})

    pin_type_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    x_normalized: Optional[float] = Field(default=None, ge=0, le=1)
    y_normalized: Optional[float] = Field(default=None, ge=0, le=1)
    external_link: Optional[str] = None
    extra_metadata: Optional[Dict[str, Any]] = None
    is_visible: Optional[bool] = None


class NormalizedPoint(BaseModel):
    x: float = Field(ge=0, le=1)
    y: float = Field(ge=0, le=1)


class DistanceMeasurementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    map_id: UUID
    name: Optional[str] = None
    points: List[NormalizedPoint]
    total_distance: float
    unit: str
    created_by: Optional[UUID] = None
    created_at: datetime


class DistanceMeasurementCreate(BaseModel):
    """Schema for saving a measurement.

    ``total_distance`` and ``unit`` default to values computed from the map's
    dimensions and scale.
    """

    map_id: UUID
    name: Optional[str] = None
    points: List[NormalizedPoint] = Field(min_length=2)
    total_distance: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    created_by: Optional[UUID] = None

"""
World map I/O models.

Locations are exchanged in both coordinate spaces: percentages of the map
image (as stored) and the latitude/longitude shown by the viewer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import PartialUpdate


class MapSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    map_image_url: Optional[str] = None
    map_image_path: Optional[str] = None
    default_zoom: int
    max_zoom: int
    min_zoom: int
    center_lat: float
    center_lng: float
    created_at: datetime
    updated_at: datetime


class MapSettingsUpdate(PartialUpdate):
    """Schema for saving the world map settings."""

    non_nullable = frozenset({"default_zoom", "max_zoom", "min_zoom", "center_lat", "center_lng"})

    map_image_url: Optional[str] = None
    map_image_path: Optional[str] = None
    default_zoom: Optional[int] = Field(default=None, ge=0)
    max_zoom: Optional[int] = Field(default=None, ge=0)
    min_zoom: Optional[int] = Field(default=None, ge=0)
    center_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    center_lng: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def _check_zoom_range(self) -> "MapSettingsUpdate":
        if self.min_zoom is not None and self.max_zoom is not None and self.min_zoom > self.max_zoom:
            raise ValueError("min_zoom must not exceed max_zoom")
        return self


class MapIconRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    tag_type: str
    icon_url: str
    icon_file_path: str
    icon_size_width: int
    icon_size_height: int
    created_at: datetime


class MapIconCreate(BaseModel):
    name: str = Field(min_length=1)
    tag_type: str = Field(min_length=1, description="Grouping tag such as City or Village")
    icon_url: str
    icon_file_path: str
    icon_size_width: int = Field(default=25, gt=0)
    icon_size_height: int = Field(default=25, gt=0)


class MapLocationRead(BaseModel):
    """A location in both coordinate spaces, with its icon when set."""

    id: UUID
    name: str
    description: Optional[str] = None
    location_type: Optional[str] = None
    icon_id: Optional[UUID] = None
    icon: Optional[MapIconRead] = None
    x_coordinate: float
    y_coordinate: float
    lat: float
    lng: float
    zoom_level: int
    created_by: Optional[UUID] = None
    created_at: datetime


class MapLocationCreate(BaseModel):
    """Schema for placing a location.

    Give either ``lat``/``lng`` (as clicked in the viewer) or
    ``x_coordinate``/``y_coordinate`` percentages.
    """

    name: str = Field(min_length=1)
    description: Optional[str] = None
    location_type: Optional[str] = None
    icon_id: Optional[UUID] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    x_coordinate: Optional[float] = Field(default=None, ge=0, le=100)
    y_coordinate: Optional[float] = Field(default=None, ge=0, le=100)
    zoom_level: int = 2
    created_by: Optional[UUID] = None

    @model_validator(mode="after")
    def _check_position(self) -> "MapLocationCreate":
        has_latlng = self.lat is not None and self.lng is not None
        has_percent = self.x_coordinate is not None and self.y_coordinate is not None
        if not (has_latlng or has_percent):
            raise ValueError("Provide lat/lng or x_coordinate/y_coordinate")
        return self


class MapLocationUpdate(PartialUpdate):
    non_nullable = frozenset({"name", "zoom_level"})

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    location_type: Optional[str] = None
    icon_id: Optional[UUID] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    x_coordinate: Optional[float] = Field(default=None, ge=0, le=100)
    y_coordinate: Optional[float] = Field(default=None, ge=0, le=100)
    zoom_level: Optional[int] = None

    @model_validator(mode="after")
    def _check_pairs(self) -> "MapLocationUpdate":
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be given together")
        if (self.x_coordinate is None) != (self.y_coordinate is None):
            raise ValueError("x_coordinate and y_coordinate must be given together")
        return self


class ClearMapResponse(BaseModel):
    locations_deleted: int

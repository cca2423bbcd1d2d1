"""
API endpoints for the world map.

The viewer works in latitude/longitude while locations are stored as
percentages of the map image; conversion happens here on the way in and out
(see :mod:`slumbering_ancients.core.coordinates`).
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.coordinates import latlng_to_percent, percent_to_latlng
from slumbering_ancients.core.database.entities.world_map import MapIcon, MapLocation
from slumbering_ancients.core.database.repositories import (
    MapIconRepository,
    MapLocationRepository,
    MapSettingsRepository,
)
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.models.io.world_map import (
    ClearMapResponse,
    MapIconCreate,
    MapIconRead,
    MapLocationCreate,
    MapLocationRead,
    MapLocationUpdate,
    MapSettingsRead,
    MapSettingsUpdate,
)
from slumbering_ancients.server.services.deps import SessionDep

router = APIRouter(tags=["world-map"])
logger = get_logger(__name__)


def to_location_read(location: MapLocation, icon: Optional[MapIcon] = None) -> MapLocationRead:
    lat, lng = percent_to_latlng(location.x_coordinate, location.y_coordinate)
    return MapLocationRead(
        id=location.id,
        name=location.name,
        description=location.description,
        location_type=location.location_type,
        icon_id=location.icon_id,
        icon=MapIconRead.model_validate(icon) if icon else None,
        x_coordinate=location.x_coordinate,
        y_coordinate=location.y_coordinate,
        lat=lat,
        lng=lng,
        zoom_level=location.zoom_level,
        created_by=location.created_by,
        created_at=location.created_at,
    )


async def _load_icon(session: SessionDep, icon_id: Optional[UUID]) -> Optional[MapIcon]:
    if icon_id is None:
        return None
    icon = await MapIconRepository(session).get_by_id(icon_id)
    if icon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map icon {icon_id} not found")
    return icon


async def _find_icon(session: SessionDep, icon_id: Optional[UUID]) -> Optional[MapIcon]:
    return await MapIconRepository(session).get_by_id(icon_id) if icon_id else None


def _position(lat, lng, x, y) -> Optional[tuple[float, float]]:
    if lat is not None and lng is not None:
        return latlng_to_percent(lat, lng)
    if x is not None and y is not None:
        return x, y
    return None


# ---------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------


@router.get(
    "/settings",
    response_model=Optional[MapSettingsRead],
    summary="Get World Map Settings",
    description="Viewer settings of the world map, or null before the map was configured.",
)
async def get_settings(session: SessionDep) -> Optional[MapSettingsRead]:
    current = await MapSettingsRepository(session).get_current()
    return MapSettingsRead.model_validate(current) if current else None


@router.put("/settings", response_model=MapSettingsRead, summary="Save World Map Settings")
async def save_settings(payload: MapSettingsUpdate, session: SessionDep) -> MapSettingsRead:
    saved = await MapSettingsRepository(session).upsert(payload.model_dump(exclude_unset=True))
    return MapSettingsRead.model_validate(saved)


@router.post(
    "/clear",
    response_model=ClearMapResponse,
    summary="Clear World Map",
    description="Delete every location and forget the world map image.",
)
async def clear_map(session: SessionDep) -> ClearMapResponse:
    deleted = await MapLocationRepository(session).delete_all()
    await MapSettingsRepository(session).reset_image()
    logger.info(f"World map cleared, {deleted} locations deleted")
    return ClearMapResponse(locations_deleted=deleted)


# ---------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------


@router.post("/icons", response_model=MapIconRead, status_code=status.HTTP_201_CREATED, summary="Create Map Icon")
async def create_icon(payload: MapIconCreate, session: SessionDep) -> MapIconRead:
    icon = await MapIconRepository(session).create(MapIcon(**payload.model_dump()))
    return MapIconRead.model_validate(icon)


@router.get(
    "/icons",
    response_model=List[MapIconRead],
    summary="List Map Icons",
    description="Icons ordered by tag type, then name.",
)
async def list_icons(session: SessionDep) -> List[MapIconRead]:
    return [MapIconRead.model_validate(i) for i in await MapIconRepository(session).list()]


@router.delete("/icons/{icon_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Map Icon")
async def delete_icon(icon_id: UUID, session: SessionDep) -> None:
    if not await MapIconRepository(session).delete(icon_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map icon {icon_id} not found")


# ---------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------


@router.post(
    "/locations",
    response_model=MapLocationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Location",
    description=(
        "Place a location from the latitude/longitude clicked in the viewer (clamped to the map edge) "
        "or from image percentages."
    ),
)
async def create_location(payload: MapLocationCreate, session: SessionDep) -> MapLocationRead:
    icon = await _load_icon(session, payload.icon_id)
    x, y = _position(payload.lat, payload.lng, payload.x_coordinate, payload.y_coordinate)
    location = MapLocation(
        name=payload.name,
        description=payload.description,
        location_type=payload.location_type,
        icon_id=payload.icon_id,
        x_coordinate=x,
        y_coordinate=y,
        zoom_level=payload.zoom_level,
        created_by=payload.created_by,
    )
    location = await MapLocationRepository(session).create(location)
    logger.debug(f"Location {location.name} placed at ({x:.2f}%, {y:.2f}%)")
    return to_location_read(location, icon)


@router.get("/locations", response_model=List[MapLocationRead], summary="List Locations")
async def list_locations(session: SessionDep) -> List[MapLocationRead]:
    rows = await MapLocationRepository(session).list_with_icons()
    return [to_location_read(location, icon) for location, icon in rows]


@router.get("/locations/{location_id}", response_model=MapLocationRead, summary="Get Location")
async def get_location(location_id: UUID, session: SessionDep) -> MapLocationRead:
    location = await MapLocationRepository(session).get_by_id(location_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Location {location_id} not found")
    return to_location_read(location, await _find_icon(session, location.icon_id))


@router.patch("/locations/{location_id}", response_model=MapLocationRead, summary="Update Location")
async def update_location(location_id: UUID, payload: MapLocationUpdate, session: SessionDep) -> MapLocationRead:
    repo = MapLocationRepository(session)
    location = await repo.get_by_id(location_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Location {location_id} not found")

    changes = payload.model_dump(exclude_unset=True, exclude={"lat", "lng", "x_coordinate", "y_coordinate"})
    position = _position(payload.lat, payload.lng, payload.x_coordinate, payload.y_coordinate)
    if position is not None:
        changes["x_coordinate"], changes["y_coordinate"] = position
    if "icon_id" in changes:
        await _load_icon(session, changes["icon_id"])

    location = await repo.apply_changes(location, changes)
    return to_location_read(location, await _find_icon(session, location.icon_id))


@router.delete("/locations/{location_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Location")
async def delete_location(location_id: UUID, session: SessionDep) -> None:
    if not await MapLocationRepository(session).delete(location_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Location {location_id} not found")

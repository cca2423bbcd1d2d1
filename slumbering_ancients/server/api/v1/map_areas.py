"""
API endpoints for map areas and region types.

Areas come either from the map analysis function or are drawn by hand here.
A hand-drawn area with a bounding box but no polygon gets the box corners as
its polygon.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.coordinates import bounding_box_to_polygon
from slumbering_ancients.core.database.entities.map_areas import MapArea, RegionType
from slumbering_ancients.core.database.repositories import MapAreaRepository, MapRepository, RegionTypeRepository
from slumbering_ancients.core.models.io.map_areas import (
    MapAreaCreate,
    MapAreaRead,
    MapAreaUpdate,
    RegionTypeCreate,
    RegionTypeRead,
    RegionTypeUpdate,
)
from slumbering_ancients.server.services.deps import SessionDep

from .maps import get_map_or_404

router = APIRouter(tags=["map-areas"])
region_types_router = APIRouter(tags=["region-types"])


def _area_not_found(area_id: UUID) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map area {area_id} not found")


@router.post("", response_model=MapAreaRead, status_code=status.HTTP_201_CREATED, summary="Create Map Area")
async def create_area(payload: MapAreaCreate, session: SessionDep) -> MapAreaRead:
    await get_map_or_404(MapRepository(session), payload.map_id)
    values = payload.model_dump()
    if values["bounding_box"] and not values["polygon_coordinates"]:
        values["polygon_coordinates"] = bounding_box_to_polygon(values["bounding_box"])
    values["analysis_metadata"] = {"source": "manual"}
    area = await MapAreaRepository(session).create(MapArea(**values))
    return MapAreaRead.model_validate(area)


@router.get(
    "",
    response_model=List[MapAreaRead],
    summary="List Map Areas",
    description="Areas of a map, optionally restricted to one area type.",
)
async def list_areas(map_id: UUID, session: SessionDep, area_type: Optional[str] = None) -> List[MapAreaRead]:
    areas = await MapAreaRepository(session).list_for_map(map_id, area_type=area_type)
    return [MapAreaRead.model_validate(a) for a in areas]


@router.get("/{area_id}", response_model=MapAreaRead, summary="Get Map Area")
async def get_area(area_id: UUID, session: SessionDep) -> MapAreaRead:
    area = await MapAreaRepository(session).get_by_id(area_id)
    if area is None:
        raise _area_not_found(area_id)
    return MapAreaRead.model_validate(area)


@router.patch("/{area_id}", response_model=MapAreaRead, summary="Update Map Area")
async def update_area(area_id: UUID, payload: MapAreaUpdate, session: SessionDep) -> MapAreaRead:
    repo = MapAreaRepository(session)
    area = await repo.get_by_id(area_id)
    if area is None:
        raise _area_not_found(area_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("bounding_box") and "polygon_coordinates" not in changes:
        changes["polygon_coordinates"] = bounding_box_to_polygon(changes["bounding_box"])
    area = await repo.apply_changes(area, changes)
    return MapAreaRead.model_validate(area)


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Map Area")
async def delete_area(area_id: UUID, session: SessionDep) -> None:
    if not await MapAreaRepository(session).delete(area_id):
        raise _area_not_found(area_id)


# ---------------------------------------------------------------------
# Region types
# ---------------------------------------------------------------------


def _region_type_not_found(region_type_id: UUID) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Region type {region_type_id} not found")


async def _ensure_unique_name(repo: RegionTypeRepository, name: str, current_id: Optional[UUID] = None) -> None:
    existing = await repo.get_by_name(name)
    if existing is not None and existing.id != current_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Region type '{name}' already exists")


@region_types_router.post(
    "",
    response_model=RegionTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Region Type",
    responses={409: {"description": "Name already in use"}},
)
async def create_region_type(payload: RegionTypeCreate, session: SessionDep) -> RegionTypeRead:
    repo = RegionTypeRepository(session)
    await _ensure_unique_name(repo, payload.name)
    region_type = await repo.create(RegionType(**payload.model_dump()))
    return RegionTypeRead.model_validate(region_type)


@region_types_router.get("", response_model=List[RegionTypeRead], summary="List Region Types")
async def list_region_types(session: SessionDep, active_only: bool = False) -> List[RegionTypeRead]:
    filters = {"is_active": True} if active_only else None
    return [RegionTypeRead.model_validate(r) for r in await RegionTypeRepository(session).list(filters=filters)]


@region_types_router.patch("/{region_type_id}", response_model=RegionTypeRead, summary="Update Region Type")
async def update_region_type(region_type_id: UUID, payload: RegionTypeUpdate, session: SessionDep) -> RegionTypeRead:
    repo = RegionTypeRepository(session)
    region_type = await repo.get_by_id(region_type_id)
    if region_type is None:
        raise _region_type_not_found(region_type_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name"):
        await _ensure_unique_name(repo, changes["name"], current_id=region_type.id)
    region_type = await repo.apply_changes(region_type, changes)
    return RegionTypeRead.model_validate(region_type)


@region_types_router.delete("/{region_type_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Region Type")
async def delete_region_type(region_type_id: UUID, session: SessionDep) -> None:
    if not await RegionTypeRepository(session).delete(region_type_id):
        raise _region_type_not_found(region_type_id)

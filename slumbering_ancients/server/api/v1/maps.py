"""
API endpoints for uploaded maps.

A map row points at an image already placed in object storage and records
its pixel dimensions and scale, which pins and distance measurements rely on.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.database.entities.maps import Map
from slumbering_ancients.core.database.repositories import MapRepository
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.models.io.maps import MapCreate, MapRead, MapUpdate
from slumbering_ancients.server.services.deps import SessionDep

router = APIRouter(tags=["maps"])
logger = get_logger(__name__)


async def get_map_or_404(repo: MapRepository, map_id: UUID) -> Map:
    map_ = await repo.get_by_id(map_id)
    if map_ is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map {map_id} not found")
    return map_


@router.post(
    "",
    response_model=MapRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Map",
    description="Register an uploaded map image with its dimensions and scale.",
    responses={201: {"description": "Map created"}, 422: {"description": "Invalid map data"}},
)
async def create_map(payload: MapCreate, session: SessionDep) -> MapRead:
    map_ = await MapRepository(session).create(Map(**payload.model_dump()))
    logger.info(f"Map created: {map_.id} ({map_.name})")
    return MapRead.model_validate(map_)


@router.get(
    "",
    response_model=List[MapRead],
    summary="List Maps",
    description="List maps, newest first. Deactivated maps are hidden unless `active_only` is false.",
)
async def list_maps(session: SessionDep, active_only: bool = True) -> List[MapRead]:
    maps = await MapRepository(session).list_maps(active_only=active_only)
    return [MapRead.model_validate(m) for m in maps]


@router.get(
    "/{map_id}",
    response_model=MapRead,
    summary="Get Map",
    responses={404: {"description": "Map not found"}},
)
async def get_map(map_id: UUID, session: SessionDep) -> MapRead:
    return MapRead.model_validate(await get_map_or_404(MapRepository(session), map_id))


@router.patch(
    "/{map_id}",
    response_model=MapRead,
    summary="Update Map",
    description="Update selected fields of a map.",
    responses={404: {"description": "Map not found"}},
)
async def update_map(map_id: UUID, payload: MapUpdate, session: SessionDep) -> MapRead:
    repo = MapRepository(session)
    map_ = await get_map_or_404(repo, map_id)
    map_ = await repo.apply_changes(map_, payload.model_dump(exclude_unset=True))
    return MapRead.model_validate(map_)


@router.delete(
    "/{map_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Map",
    description="Delete a map together with its pins, measurements and areas.",
    responses={404: {"description": "Map not found"}},
)
async def delete_map(map_id: UUID, session: SessionDep) -> None:
    if not await MapRepository(session).delete(map_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Map {map_id} not found")
    logger.info(f"Map deleted: {map_id}")

"""
API endpoints for distance measurements drawn on uploaded maps.

When the client does not send a total, it is computed from the normalized
points, the map's pixel size and its scale factor.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.coordinates import path_distance
from slumbering_ancients.core.database.entities.maps import DistanceMeasurement
from slumbering_ancients.core.database.repositories import DistanceMeasurementRepository, MapRepository
from slumbering_ancients.core.models.io.maps import DistanceMeasurementCreate, DistanceMeasurementRead
from slumbering_ancients.server.services.deps import SessionDep

from .maps import get_map_or_404

router = APIRouter(tags=["distances"])


@router.post(
    "",
    response_model=DistanceMeasurementRead,
    status_code=status.HTTP_201_CREATED,
    summary="Save Distance Measurement",
    responses={404: {"description": "Map not found"}},
)
async def create_measurement(payload: DistanceMeasurementCreate, session: SessionDep) -> DistanceMeasurementRead:
    map_ = await get_map_or_404(MapRepository(session), payload.map_id)
    points = [point.model_dump() for point in payload.points]
    total = payload.total_distance
    if total is None:
        total = path_distance(points, map_.width, map_.height, map_.scale_factor)
    measurement = DistanceMeasurement(
        map_id=map_.id,
        name=payload.name,
        points=points,
        total_distance=total,
        unit=payload.unit or map_.scale_unit,
        created_by=payload.created_by,
    )
    measurement = await DistanceMeasurementRepository(session).create(measurement)
    return DistanceMeasurementRead.model_validate(measurement)


@router.get("", response_model=List[DistanceMeasurementRead], summary="List Distance Measurements")
async def list_measurements(map_id: UUID, session: SessionDep) -> List[DistanceMeasurementRead]:
    measurements = await DistanceMeasurementRepository(session).list_for_map(map_id)
    return [DistanceMeasurementRead.model_validate(m) for m in measurements]


@router.delete("/{measurement_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Distance Measurement")
async def delete_measurement(measurement_id: UUID, session: SessionDep) -> None:
    if not await DistanceMeasurementRepository(session).delete(measurement_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Distance measurement {measurement_id} not found"
        )

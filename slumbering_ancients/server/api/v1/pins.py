"""
API endpoints for pins placed on uploaded maps.

Pin positions are normalized to the map image (``0..1`` from the top-left).
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.database.entities.maps import Pin
from slumbering_ancients.core.database.repositories import MapRepository, PinRepository, PinTypeRepository
from slumbering_ancients.core.models.io.maps import PinCreate, PinRead, PinUpdate
from slumbering_ancients.server.services.deps import SessionDep

from .maps import get_map_or_404

router = APIRouter(tags=["pins"])


def _not_found(pin_id: UUID) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pin {pin_id} not found")


async def _check_pin_type(session: SessionDep, pin_type_id: Optional[UUID]) -> None:
    if pin_type_id is not None and await PinTypeRepository(session).get_by_id(pin_type_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pin type {pin_type_id} not found")


@router.post(
    "",
    response_model=PinRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Pin",
    responses={404: {"description": "Map or pin type not found"}},
)
async def create_pin(payload: PinCreate, session: SessionDep) -> PinRead:
    await get_map_or_404(MapRepository(session), payload.map_id)
    await _check_pin_type(session, payload.pin_type_id)
    pin = await PinRepository(session).create(Pin(**payload.model_dump()))
    return PinRead.model_validate(pin)


@router.get(
    "",
    response_model=List[PinRead],
    summary="List Pins",
    description="Pins of a map in creation order. Set `visible_only` to hide pins kept from players.",
)
async def list_pins(map_id: UUID, session: SessionDep, visible_only: bool = False) -> List[PinRead]:
    pins = await PinRepository(session).list_for_map(map_id, visible_only=visible_only)
    return [PinRead.model_validate(p) for p in pins]


@router.get("/{pin_id}", response_model=PinRead, summary="Get Pin")
async def get_pin(pin_id: UUID, session: SessionDep) -> PinRead:
    pin = await PinRepository(session).get_by_id(pin_id)
    if pin is None:
        raise _not_found(pin_id)
    return PinRead.model_validate(pin)


@router.patch("/{pin_id}", response_model=PinRead, summary="Update Pin")
async def update_pin(pin_id: UUID, payload: PinUpdate, session: SessionDep) -> PinRead:
    repo = PinRepository(session)
    pin = await repo.get_by_id(pin_id)
    if pin is None:
        raise _not_found(pin_id)
    changes = payload.model_dump(exclude_unset=True)
    await _check_pin_type(session, changes.get("pin_type_id"))
    pin = await repo.apply_changes(pin, changes)
    return PinRead.model_validate(pin)


@router.delete("/{pin_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Pin")
async def delete_pin(pin_id: UUID, session: SessionDep) -> None:
    if not await PinRepository(session).delete(pin_id):
        raise _not_found(pin_id)

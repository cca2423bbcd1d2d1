"""
API endpoints for pin types, the categories pins are drawn with.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from slumbering_ancients.core.database.entities.maps import PinType
from slumbering_ancients.core.database.repositories import PinTypeRepository
from slumbering_ancients.core.models.io.maps import PinTypeCreate, PinTypeRead, PinTypeUpdate
from slumbering_ancients.server.services.deps import SessionDep

router = APIRouter(tags=["pin-types"])


def _not_found(pin_type_id: UUID) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pin type {pin_type_id} not found")


@router.post("", response_model=PinTypeRead, status_code=status.HTTP_201_CREATED, summary="Create Pin Type")
async def create_pin_type(payload: PinTypeCreate, session: SessionDep) -> PinTypeRead:
    pin_type = await PinTypeRepository(session).create(PinType(**payload.model_dump()))
    return PinTypeRead.model_validate(pin_type)


@router.get(
    "",
    response_model=List[PinTypeRead],
    summary="List Pin Types",
    description="List pin types ordered by category and name, optionally filtered by category.",
)
async def list_pin_types(
    session: SessionDep, category: Optional[str] = None, active_only: bool = True
) -> List[PinTypeRead]:
    pin_types = await PinTypeRepository(session).list_pin_types(category=category, active_only=active_only)
    return [PinTypeRead.model_validate(p) for p in pin_types]


@router.get("/{pin_type_id}", response_model=PinTypeRead, summary="Get Pin Type")
async def get_pin_type(pin_type_id: UUID, session: SessionDep) -> PinTypeRead:
    pin_type = await PinTypeRepository(session).get_by_id(pin_type_id)
    if pin_type is None:
        raise _not_found(pin_type_id)
    return PinTypeRead.model_validate(pin_type)


@router.patch("/{pin_type_id}", response_model=PinTypeRead, summary="Update Pin Type")
async def update_pin_type(pin_type_id: UUID, payload: PinTypeUpdate, session: SessionDep) -> PinTypeRead:
    repo = PinTypeRepository(session)
    pin_type = await repo.get_by_id(pin_type_id)
    if pin_type is None:
        raise _not_found(pin_type_id)
    pin_type = await repo.apply_changes(pin_type, payload.model_dump(exclude_unset=True))
    return PinTypeRead.model_validate(pin_type)


@router.delete("/{pin_type_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Pin Type")
async def delete_pin_type(pin_type_id: UUID, session: SessionDep) -> None:
    if not await PinTypeRepository(session).delete(pin_type_id):
        raise _not_found(pin_type_id)

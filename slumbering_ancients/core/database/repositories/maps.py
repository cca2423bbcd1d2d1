"""
Repositories for uploaded maps, pin types, pins and distance measurements.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.maps import DistanceMeasurement, Map, Pin, PinType
from .base import AsyncSQLModelRepository


class MapRepository(AsyncSQLModelRepository[Map]):
    """Repository for uploaded maps."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Map)
        self.order_by = (Map.created_at.desc(),)

    async def list_maps(self, active_only: bool = True) -> List[Map]:
        """List maps, newest first.

        Args:
            active_only: Hide deactivated maps
        """
        return await self.list(filters={"is_active": True} if active_only else None)


class PinTypeRepository(AsyncSQLModelRepository[PinType]):
    """Repository for pin types."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PinType)
        self.order_by = (PinType.category, PinType.name)

    async def list_pin_types(self, category: Optional[str] = None, active_only: bool = True) -> List[PinType]:
        filters = {"category": category}
        if active_only:
            filters["is_active"] = True
        return await self.list(filters=filters)


class PinRepository(AsyncSQLModelRepository[Pin]):
    """Repository for pins placed on maps."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Pin)
        self.order_by = (Pin.created_at,)

    async def list_for_map(self, map_id: UUID, visible_only: bool = False) -> List[Pin]:
        """Pins of one map in creation order.

        Args:
            map_id: Map the pins belong to
            visible_only: Skip pins hidden from players
        """
        stmt = select(Pin).where(Pin.map_id == map_id)
        if visible_only:
            stmt = stmt.where(Pin.is_visible == True)  # noqa: E712
        stmt = stmt.order_by(*self.order_by)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class DistanceMeasurementRepository(AsyncSQLModelRepository[DistanceMeasurement]):
    """Repository for saved distance measurements."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DistanceMeasurement)
        self.order_by = (DistanceMeasurement.created_at.desc(),)

    async def list_for_map(self, map_id: UUID) -> List[DistanceMeasurement]:
        return await self.list(filters={"map_id": map_id})

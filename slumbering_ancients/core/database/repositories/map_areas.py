"""
Repositories for map areas and region types.
"""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.map_areas import MapArea, RegionType
from .base import AsyncSQLModelRepository


class MapAreaRepository(AsyncSQLModelRepository[MapArea]):
    """Repository for map areas."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MapArea)
        self.order_by = (MapArea.created_at, MapArea.area_name)

    async def list_for_map(self, map_id: UUID, area_type: Optional[str] = None) -> List[MapArea]:
        return await self.list(filters={"map_id": map_id, "area_type": area_type})

    async def replace_for_map(self, map_id: UUID, areas: Iterable[MapArea]) -> List[MapArea]:
        """Delete the existing areas of a map and store ``areas`` in one transaction."""
        await self.session.execute(delete(MapArea).where(MapArea.map_id == map_id))
        stored = list(areas)
        self.session.add_all(stored)
        await self.session.commit()
        for area in stored:
            await self.session.refresh(area)
        return stored


class RegionTypeRepository(AsyncSQLModelRepository[RegionType]):
    """Repository for region types."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RegionType)
        self.order_by = (RegionType.name,)

    async def get_by_name(self, name: str) -> Optional[RegionType]:
        stmt = select(RegionType).where(RegionType.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

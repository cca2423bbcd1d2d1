"""
Repositories for the world map: settings, icons and locations.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.world_map import MapIcon, MapLocation, MapSettings
from .base import AsyncSQLModelRepository


class MapSettingsRepository(AsyncSQLModelRepository[MapSettings]):
    """Repository for the single world map settings row."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MapSettings)

    async def get_current(self) -> Optional[MapSettings]:
        """The settings row, or None before the map was configured."""
        stmt = select(MapSettings).order_by(MapSettings.created_at).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, values: Dict[str, Any]) -> MapSettings:
        """Update the settings row with ``values``, creating it if missing."""
        current = await self.get_current()
        if current is None:
            return await self.create(MapSettings(**values))
        return await self.apply_changes(current, values)

    async def reset_image(self) -> None:
        """Forget the world map image while keeping viewer settings."""
        stmt = update(MapSettings).values(map_image_url=None, map_image_path=None, updated_at=utc_now())
        await self.session.execute(stmt)
        await self.session.commit()


class MapIconRepository(AsyncSQLModelRepository[MapIcon]):
    """Repository for custom location icons."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MapIcon)
        self.order_by = (MapIcon.tag_type, MapIcon.name)


class MapLocationRepository(AsyncSQLModelRepository[MapLocation]):
    """Repository for world map locations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, MapLocation)
        self.order_by = (MapLocation.created_at,)

    async def list_with_icons(self) -> List[tuple[MapLocation, Optional[MapIcon]]]:
        """Locations in creation order, each paired with its icon (if any)."""
        stmt = (
            select(MapLocation, MapIcon)
            .join(MapIcon, MapLocation.icon_id == MapIcon.id, isouter=True)
            .order_by(*self.order_by)
        )
        result = await self.session.execute(stmt)
        return [(location, icon) for location, icon in result.all()]

    async def delete_all(self) -> int:
        """Delete every location. Returns the number of deleted rows."""
        result = await self.session.execute(delete(MapLocation))
        await self.session.commit()
        return result.rowcount or 0

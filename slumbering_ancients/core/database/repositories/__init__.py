"""
Database repository layer using SQLModel.

Each module provides async data access operations for its entities, built on
the shared CRUD implementation in :mod:`.base`.

Modules:
- base: Repository interface, SQLModel implementation and QueryBuilder
- maps: Maps, pin types, pins and distance measurements
- world_map: World map settings, icons and locations
- map_areas: Map areas and region types
- wiki_content: Wiki pages and retrieval queries
- users: Profiles, roles and invitations
"""

from .map_areas import MapAreaRepository, RegionTypeRepository
from .maps import DistanceMeasurementRepository, MapRepository, PinRepository, PinTypeRepository
from .users import ProfileRepository, UserInvitationRepository, UserRoleRepository
from .wiki_content import WikiContentRepository, WikiDocument
from .world_map import MapIconRepository, MapLocationRepository, MapSettingsRepository

__all__ = [
    "DistanceMeasurementRepository",
    "MapAreaRepository",
    "MapIconRepository",
    "MapLocationRepository",
    "MapRepository",
    "MapSettingsRepository",
    "PinRepository",
    "PinTypeRepository",
    "ProfileRepository",
    "RegionTypeRepository",
    "UserInvitationRepository",
    "UserRoleRepository",
    "WikiContentRepository",
    "WikiDocument",
]

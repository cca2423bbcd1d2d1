"""
Database entity models.

Modules:
- maps: Uploaded maps, pin types, pins and distance measurements
- world_map: World map settings, icons and locations
- map_areas: Map areas and region types
- wiki_content: Scraped wiki pages with embeddings
- users: Profiles, roles and invitations
"""

from .map_areas import MapArea, RegionType
from .maps import DistanceMeasurement, Map, Pin, PinType
from .users import AppRole, Profile, UserInvitation, UserRole
from .wiki_content import WikiContent
from .world_map import MapIcon, MapLocation, MapSettings

__all__ = [
    "AppRole",
    "DistanceMeasurement",
    "Map",
    "MapArea",
    "MapIcon",
    "MapLocation",
    "MapSettings",
    "Pin",
    "PinType",
    "Profile",
    "RegionType",
    "UserInvitation",
    "UserRole",
    "WikiContent",
]

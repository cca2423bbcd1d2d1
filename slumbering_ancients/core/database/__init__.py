"""
Database layer for Slumbering Ancients.

Structure:
- entities/: SQLModel table models grouped by feature
- repositories/: Async data access classes, one per table
- session.py: Global engine and session factory management
- utils.py: Engine, session and metadata helpers
"""

from .base import Base, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    is_postgresql,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "is_postgresql",
    "utc_now",
]

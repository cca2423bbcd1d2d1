"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slumbering_ancients.core.database import init_db
from slumbering_ancients.core.logging_config import get_logger, setup_logging
from slumbering_ancients.core.monitoring import initialize_logfire

from .api.v1 import (
    distances,
    functions,
    health,
    map_areas,
    maps,
    pin_types,
    pins,
    users,
    wiki,
    world_map,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    A failing database check is logged but does not prevent the server from
    starting.
    """
    try:
        logger.info("Starting up Slumbering Ancients Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Slumbering Ancients Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Slumbering Ancients Server API

    Backend of the campaign companion: world map and uploaded maps with pins,
    measurements and AI-detected areas, the campaign wiki synchronised from
    Google Drive, the lore assistant answering from that wiki, and user roles.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(maps.router, prefix=f"{constant.API_V1_STR}/maps")
app.include_router(pin_types.router, prefix=f"{constant.API_V1_STR}/pin-types")
app.include_router(pins.router, prefix=f"{constant.API_V1_STR}/pins")
app.include_router(distances.router, prefix=f"{constant.API_V1_STR}/distances")
app.include_router(world_map.router, prefix=f"{constant.API_V1_STR}/world-map")
app.include_router(map_areas.router, prefix=f"{constant.API_V1_STR}/map-areas")
app.include_router(map_areas.region_types_router, prefix=f"{constant.API_V1_STR}/region-types")
app.include_router(wiki.router, prefix=f"{constant.API_V1_STR}/wiki")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(users.invitations_router, prefix=f"{constant.API_V1_STR}/invitations")
app.include_router(functions.router, prefix=f"{constant.API_V1_STR}/functions")

"""
Function-style endpoints.

These handlers accept and return the JSON shapes the campaign front end
already uses for its server-side functions:

- ``analyze-map``: ``{mapId}`` -> detected areas of the map image
- ``slumbering-ancients-search``: ``{message}`` -> ``{response}``
- ``scrape-wiki``: ``{incremental}`` -> sync counters
- ``create-match-function``: installs the vector search function

Errors are reported as ``{"success": false, "error": ...}`` by the domain
exception handler.
"""

from fastapi import APIRouter

from slumbering_ancients.core.database.repositories import WikiContentRepository
from slumbering_ancients.core.database.utils import is_postgresql
from slumbering_ancients.core.errors import ConfigurationError
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.models.io.map_areas import AnalyzeMapRequest, AnalyzeMapResponse, MapAreaRead
from slumbering_ancients.core.models.io.wiki import (
    AssistantRequest,
    AssistantResponse,
    MatchFunctionResponse,
    ProcessedFile,
    ScrapeWikiRequest,
    ScrapeWikiResponse,
)
from slumbering_ancients.server.services.deps import (
    AssistantServiceDep,
    DriveFolderDep,
    MapAnalysisServiceDep,
    SessionDep,
    WikiScraperDep,
)

router = APIRouter(tags=["functions"])
logger = get_logger(__name__)

ERROR_RESPONSES = {
    400: {"description": "Invalid request"},
    404: {"description": "Referenced record not found"},
    500: {"description": "Configuration or processing error"},
    502: {"description": "Upstream API failure"},
}


@router.post(
    "/analyze-map",
    response_model=AnalyzeMapResponse,
    summary="Analyze Map",
    description="Detect the areas of a map image with the vision model and replace the map's stored areas.",
    responses=ERROR_RESPONSES,
)
async def analyze_map(payload: AnalyzeMapRequest, service: MapAnalysisServiceDep) -> AnalyzeMapResponse:
    map_, areas = await service.analyze(payload.map_id)
    with_coordinates = sum(1 for area in areas if area.bounding_box)
    return AnalyzeMapResponse(
        map_id=map_.id,
        map_name=map_.name,
        areas_analyzed=len(areas),
        areas_with_coordinates=with_coordinates,
        areas=[MapAreaRead.model_validate(area) for area in areas],
        message=f"Successfully analyzed {len(areas)} areas ({with_coordinates} with coordinates)",
    )


@router.post(
    "/slumbering-ancients-search",
    response_model=AssistantResponse,
    summary="Ask the Lore Assistant",
    description="Answer a question with the chat model, grounded in the most relevant wiki pages.",
    responses=ERROR_RESPONSES,
)
async def ask_assistant(payload: AssistantRequest, service: AssistantServiceDep) -> AssistantResponse:
    return AssistantResponse(response=await service.answer(payload.message))


@router.post(
    "/scrape-wiki",
    response_model=ScrapeWikiResponse,
    summary="Scrape Wiki",
    description="Synchronise markdown pages from the configured Google Drive folder into the wiki store.",
    responses=ERROR_RESPONSES,
)
async def scrape_wiki(
    payload: ScrapeWikiRequest,
    folder_id: DriveFolderDep,
    scraper: WikiScraperDep,
) -> ScrapeWikiResponse:
    result = await scraper.scrape(folder_id, incremental=payload.incremental)
    return ScrapeWikiResponse(
        pages_scraped=result.pages_scraped,
        pages_skipped=result.pages_skipped,
        total_discovered=result.total_discovered,
        rate_limit_errors=result.rate_limit_errors,
        incremental=result.incremental,
        processed_files=[ProcessedFile(name=p.name, title=p.title, url=p.url) for p in result.processed_files],
        message=result.message,
    )


@router.post(
    "/create-match-function",
    response_model=MatchFunctionResponse,
    summary="Install Vector Search",
    description="Create the pgvector extension and the match_documents function used by the assistant.",
    responses=ERROR_RESPONSES,
)
async def create_match_function(session: SessionDep) -> MatchFunctionResponse:
    if not is_postgresql(session):
        raise ConfigurationError("Vector search requires a PostgreSQL database with the pgvector extension")
    await WikiContentRepository(session).install_match_function()
    logger.info("match_documents function installed")
    return MatchFunctionResponse(message="Vector search function created successfully")

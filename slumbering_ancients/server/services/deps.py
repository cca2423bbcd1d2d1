"""
Request dependencies.

Provides database sessions, configured API clients, LLM models and the
services built from them. Tests replace the client and model providers
through ``app.dependency_overrides``.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from pydantic_ai.models import Model
from sqlalchemy.ext.asyncio import AsyncSession

from slumbering_ancients.core.database.repositories import (
    MapAreaRepository,
    MapRepository,
    WikiContentRepository,
)
from slumbering_ancients.core.database.session import get_session
from slumbering_ancients.core.errors import ConfigurationError
from slumbering_ancients.ingestion.drive_client import GoogleDriveClient
from slumbering_ancients.ingestion.wiki_scraper import WikiScraper
from slumbering_ancients.llm.agents import build_openai_model
from slumbering_ancients.llm.embeddings import EmbeddingsClient
from slumbering_ancients.server.core.config import Settings, settings

from .assistant import AssistantService
from .map_analysis import MapAnalysisService
from .retrieval import WikiRetriever

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_settings() -> Settings:
    return settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


async def get_embeddings_client(cfg: SettingsDep) -> AsyncGenerator[EmbeddingsClient, None]:
    """OpenAI embeddings client, closed when the request ends."""
    openai = cfg.openai
    if not openai.api_key:
        raise ConfigurationError("OpenAI API key not configured")
    client = EmbeddingsClient(
        openai.api_key,
        base_url=openai.base_url,
        model=openai.embedding_model,
        timeout=openai.timeout,
    )
    try:
        yield client
    finally:
        await client.aclose()


def get_chat_model(cfg: SettingsDep) -> Model:
    openai = cfg.openai
    return build_openai_model(openai.chat_model, api_key=openai.api_key, base_url=openai.base_url)


def get_vision_model(cfg: SettingsDep) -> Model:
    openai = cfg.openai
    return build_openai_model(openai.vision_model, api_key=openai.api_key, base_url=openai.base_url)


async def get_drive_client(cfg: SettingsDep) -> AsyncGenerator[GoogleDriveClient, None]:
    """Google Drive client, closed when the request ends."""
    drive = cfg.google_drive
    if not drive.api_key:
        raise ConfigurationError("Google Drive API key not configured")
    client = GoogleDriveClient(
        drive.api_key,
        base_url=drive.base_url,
        timeout=drive.timeout,
        max_retries=drive.max_retries,
        initial_delay=drive.initial_delay,
        max_delay=drive.max_delay,
    )
    try:
        yield client
    finally:
        await client.aclose()


def get_drive_folder_id(cfg: SettingsDep) -> str:
    folder_id = cfg.google_drive.folder_id
    if not folder_id:
        raise ConfigurationError("Google Drive folder ID not configured")
    return folder_id


EmbeddingsDep = Annotated[EmbeddingsClient, Depends(get_embeddings_client)]
DriveDep = Annotated[GoogleDriveClient, Depends(get_drive_client)]


def get_assistant_service(
    session: SessionDep,
    embeddings: EmbeddingsDep,
    model: Annotated[Model, Depends(get_chat_model)],
    cfg: SettingsDep,
) -> AssistantService:
    retrieval = cfg.retrieval
    retriever = WikiRetriever(
        WikiContentRepository(session),
        embeddings,
        match_threshold=retrieval.match_threshold,
        match_count=retrieval.match_count,
    )
    return AssistantService(
        retriever,
        model,
        temperature=cfg.openai.chat_temperature,
        max_tokens=cfg.openai.chat_max_tokens,
    )


def get_map_analysis_service(
    session: SessionDep,
    model: Annotated[Model, Depends(get_vision_model)],
    cfg: SettingsDep,
) -> MapAnalysisService:
    return MapAnalysisService(
        MapRepository(session),
        MapAreaRepository(session),
        model,
        max_tokens=cfg.openai.vision_max_tokens,
    )


def get_wiki_scraper(
    session: SessionDep,
    drive: DriveDep,
    embeddings: EmbeddingsDep,
    cfg: SettingsDep,
) -> WikiScraper:
    retrieval = cfg.retrieval
    return WikiScraper(
        drive,
        embeddings,
        WikiContentRepository(session),
        content_max_chars=retrieval.content_max_chars,
        min_content_chars=retrieval.min_content_chars,
        incremental_days=retrieval.incremental_days,
    )


AssistantServiceDep = Annotated[AssistantService, Depends(get_assistant_service)]
MapAnalysisServiceDep = Annotated[MapAnalysisService, Depends(get_map_analysis_service)]
WikiScraperDep = Annotated[WikiScraper, Depends(get_wiki_scraper)]
DriveFolderDep = Annotated[str, Depends(get_drive_folder_id)]

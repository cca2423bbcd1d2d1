"""Fixtures for API tests.

The application runs against an in-memory SQLite database; LLM models,
embeddings and Google Drive are replaced through ``app.dependency_overrides``.
"""

from typing import AsyncGenerator, List
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic_ai.models.test import TestModel
from sqlalchemy.ext.asyncio import AsyncSession

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
EMBEDDING = [0.01] * 1536


class FakeEmbeddings:
    """Stands in for the OpenAI embeddings client."""

    def __init__(self) -> None:
        self.inputs: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.inputs.append(text)
        return EMBEDDING


@pytest.fixture(name="session")
def session_fixture(in_memory_session: AsyncSession) -> AsyncSession:
    """The session shared by the test and the request handlers."""
    return in_memory_session


@pytest.fixture
def test_settings():
    from slumbering_ancients.server.core.config import Settings

    return Settings(
        database_url=TEST_DATABASE_URL,
        openai_api_key="sk-test",
        openai_base_url="http://mock-openai/v1",
        google_drive_api_key="drive-test",
        google_drive_folder_id="wiki-folder",
        google_drive_base_url="http://mock-drive/drive/v3",
        google_drive_initial_delay=0.0,
    )


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def app(session: AsyncSession, test_settings, fake_embeddings):
    """The FastAPI app with database, settings and LLM dependencies overridden."""
    from slumbering_ancients.core.database.session import get_session
    from slumbering_ancients.server.main import app as fastapi_app
    from slumbering_ancients.server.services.deps import (
        get_chat_model,
        get_embeddings_client,
        get_settings,
        get_vision_model,
    )

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    async def get_embeddings_override():
        yield fake_embeddings

    fastapi_app.dependency_overrides[get_session] = get_session_override
    fastapi_app.dependency_overrides[get_settings] = lambda: test_settings
    fastapi_app.dependency_overrides[get_embeddings_client] = get_embeddings_override
    fastapi_app.dependency_overrides[get_chat_model] = lambda: TestModel(custom_output_text="The ancients sleep.")
    fastapi_app.dependency_overrides[get_vision_model] = lambda: TestModel(custom_output_text="[]")
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture(name="client")
async def client_fixture(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""

    async def mock_lifespan(app):
        yield

    with patch("slumbering_ancients.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client


@pytest_asyncio.fixture
async def created_map(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/v1/maps",
        json={
            "name": "Ashen Peaks",
            "image_url": "http://mock-storage/maps/ashen-peaks.png",
            "image_path": "maps/ashen-peaks.png",
            "width": 2000,
            "height": 1000,
            "scale_factor": 0.5,
            "scale_unit": "miles",
        },
    )
    assert response.status_code == 201
    return response.json()

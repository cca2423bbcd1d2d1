import pytest
from pydantic_ai.models.openai import OpenAIChatModel

from slumbering_ancients.core.errors import ConfigurationError
from slumbering_ancients.ingestion.drive_client import GoogleDriveClient
from slumbering_ancients.llm.embeddings import EmbeddingsClient
from slumbering_ancients.server.services.deps import (
    get_chat_model,
    get_drive_client,
    get_drive_folder_id,
    get_embeddings_client,
    get_vision_model,
)


def test_models_use_configured_names(test_settings):
    chat = get_chat_model(test_settings)
    vision = get_vision_model(test_settings)
    assert isinstance(chat, OpenAIChatModel)
    assert chat.model_name == "gpt-4o-mini"
    assert vision.model_name == "gpt-4o"


def test_models_need_api_key(test_settings):
    cfg = test_settings.model_copy(update={"openai_api_key": None})
    with pytest.raises(ConfigurationError):
        get_chat_model(cfg)


def test_drive_folder(test_settings):
    assert get_drive_folder_id(test_settings) == "wiki-folder"
    with pytest.raises(ConfigurationError):
        get_drive_folder_id(test_settings.model_copy(update={"google_drive_folder_id": None}))


@pytest.mark.asyncio
async def test_clients_are_built_and_closed(test_settings):
    embeddings_gen = get_embeddings_client(test_settings)
    embeddings = await embeddings_gen.__anext__()
    assert isinstance(embeddings, EmbeddingsClient)
    await embeddings_gen.aclose()

    drive_gen = get_drive_client(test_settings)
    drive = await drive_gen.__anext__()
    assert isinstance(drive, GoogleDriveClient)
    assert drive.base_url == "http://mock-drive/drive/v3"
    await drive_gen.aclose()


@pytest.mark.asyncio
async def test_clients_need_api_keys(test_settings):
    with pytest.raises(ConfigurationError):
        await get_embeddings_client(test_settings.model_copy(update={"openai_api_key": None})).__anext__()
    with pytest.raises(ConfigurationError):
        await get_drive_client(test_settings.model_copy(update={"google_drive_api_key": None})).__anext__()

"""Unit tests for prompt rendering."""

from uuid import uuid4

from slumbering_ancients.core.database.repositories import WikiDocument
from slumbering_ancients.llm.prompts import (
    CONTEXT_SEPARATOR,
    NO_MATERIALS_NOTE,
    build_assistant_prompt,
    build_context,
)


def _doc(title: str, content: str) -> WikiDocument:
    return WikiDocument(id=uuid4(), title=title, content=content, url=f"gdrive://{title}")


def test_build_context_joins_pages():
    context = build_context([_doc("Lich", "Sleeps."), _doc("Dragon", "Guards.")])
    assert context == f"Title: Lich\nContent: Sleeps.{CONTEXT_SEPARATOR}Title: Dragon\nContent: Guards."


def test_build_context_empty():
    assert build_context([]) == ""


def test_prompt_with_materials():
    prompt = build_assistant_prompt("Title: Lich\nContent: Sleeps.")
    assert "CAMPAIGN MATERIALS CONTEXT:\nTitle: Lich\nContent: Sleeps." in prompt
    assert NO_MATERIALS_NOTE not in prompt
    assert prompt.startswith("You are the Slumbering Ancients AI assistant")


def test_prompt_without_materials():
    prompt = build_assistant_prompt("")
    assert NO_MATERIALS_NOTE in prompt
    assert "CAMPAIGN MATERIALS CONTEXT" not in prompt

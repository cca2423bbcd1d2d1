"""Slumbering Ancients campaign companion.

Backend service for a tabletop role-playing campaign. It keeps the campaign's
world map, its pins and locations, and a retrieval-augmented assistant that
answers lore questions from scraped wiki pages.

Core subpackages
----------------

- ``slumbering_ancients.core``:

  - Logging and Logfire monitoring setup.
  - Coordinate conversion between geographic and map space.
  - SQLModel entities, async repositories and request/response schemas.

- ``slumbering_ancients.llm``:

  - Embedding client and pydantic-ai agents for chat and map analysis.

- ``slumbering_ancients.ingestion``:

  - Google Drive client and the wiki scraper that fills ``wiki_content``.

- ``slumbering_ancients.server``:

  - The FastAPI application, its routers and request-scoped services.
"""

"""
API endpoints for browsing and pruning scraped wiki pages.

Embeddings are never returned; pages are (re-)scraped through the
``scrape-wiki`` function.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from slumbering_ancients.core.database.repositories import WikiContentRepository
from slumbering_ancients.core.models.io.wiki import WikiDocumentRead
from slumbering_ancients.server.services.deps import SessionDep

router = APIRouter(tags=["wiki"])


@router.get("", response_model=List[WikiDocumentRead], summary="List Wiki Pages")
async def list_pages(
    session: SessionDep,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[WikiDocumentRead]:
    documents = await WikiContentRepository(session).list_documents(limit=limit, offset=offset)
    return [WikiDocumentRead.model_validate(d) for d in documents]


@router.get("/{page_id}", response_model=WikiDocumentRead, summary="Get Wiki Page")
async def get_page(page_id: UUID, session: SessionDep) -> WikiDocumentRead:
    document = await WikiContentRepository(session).get_document(page_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Wiki page {page_id} not found")
    return WikiDocumentRead.model_validate(document)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Wiki Page")
async def delete_page(page_id: UUID, session: SessionDep) -> None:
    if not await WikiContentRepository(session).delete_document(page_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Wiki page {page_id} not found")

"""Admin endpoints for search index maintenance."""

import asyncio

import structlog
from fastapi import APIRouter, Request
from pydantic import BaseModel

logger = structlog.get_logger()

router = APIRouter(prefix="/admin", tags=["admin"])


class ReindexResponse(BaseModel):
    """Response after rebuilding the search index."""

    success: bool
    document_count: int


@router.post("/reindex", response_model=ReindexResponse)
async def reindex(request: Request) -> ReindexResponse:
    """Rebuild the search index from the primary store.

    Used to reconcile the index after search index sync failures.

    Returns:
        Number of conferences written to the index.
    """
    logger.info("reindex_requested")
    count = await asyncio.to_thread(request.app.state.conference_service.reindex)
    return ReindexResponse(success=True, document_count=count)

"""Full-text search API endpoint."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from conferences.records.schemas import Conference

if TYPE_CHECKING:
    from conferences.services.sync import ConferenceSyncService

router = APIRouter(tags=["search"])


@router.get(
    "/_search/conferences",
    response_model=list[Conference],
    summary="Full-text search across conferences",
    description="Runs the query in FTS5 syntax (for example `name:devoxx` "
    "or `id:42`) against the search index.",
)
async def search_conferences(
    request: Request,
    query: str = Query(..., description="Search query string"),
) -> list[Conference]:
    """Search conferences in the full-text index.

    Args:
        request: FastAPI request (provides access to app state).
        query: Query string, passed to the index unmodified.

    Returns:
        Conferences reconstructed from index hits.
    """
    service: ConferenceSyncService = request.app.state.conference_service

    def run() -> list[Conference]:
        return list(service.search(query))

    return await asyncio.to_thread(run)

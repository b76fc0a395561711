"""Conference REST API endpoints."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

import structlog
from fastapi import APIRouter, Path, Request, Response, status
from fastapi.responses import JSONResponse

from conferences.alerts import ErrorResponse, entity_alert
from conferences.records.schemas import MAX_ID, MIN_ID, Conference, ConferencePatch

if TYPE_CHECKING:
    from conferences.services.sync import ConferenceSyncService

logger = structlog.get_logger()

router = APIRouter(prefix="/conferences", tags=["conferences"])

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid or unknown id"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Conference not found"}}

PathId = Annotated[int, Path(ge=MIN_ID, le=MAX_ID)]


def _service(request: Request) -> ConferenceSyncService:
    return request.app.state.conference_service


def _app_name(request: Request) -> str:
    return request.app.state.settings.app_name


@router.post(
    "",
    response_model=Conference,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
    summary="Create a conference",
)
async def create_conference(request: Request, conference: Conference) -> JSONResponse:
    """Create a new conference.

    Args:
        request: FastAPI request (provides access to app state).
        conference: Conference to create; must not carry an id.

    Returns:
        The created conference with 201 Created and a Location header.
    """
    logger.debug("rest_create_conference", conference=conference.model_dump(mode="json"))
    result = await asyncio.to_thread(_service(request).create, conference)

    headers = entity_alert(_app_name(request), "created", str(result.id))
    headers["Location"] = f"{request.url.path.rstrip('/')}/{result.id}"
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=result.model_dump(mode="json"),
        headers=headers,
    )


@router.put(
    "/{conference_id}",
    response_model=Conference,
    responses=_BAD_REQUEST,
    summary="Replace a conference",
)
async def update_conference(
    request: Request,
    response: Response,
    conference_id: PathId,
    conference: Conference,
) -> Conference:
    """Replace every field of an existing conference.

    Args:
        request: FastAPI request.
        response: Outgoing response, for alert headers.
        conference_id: Id from the path.
        conference: Full conference; its id must equal the path id.

    Returns:
        The stored conference.
    """
    logger.debug("rest_update_conference", conference_id=conference_id)
    result = await asyncio.to_thread(_service(request).update, conference_id, conference)
    response.headers.update(entity_alert(_app_name(request), "updated", str(conference_id)))
    return result


@router.patch(
    "/{conference_id}",
    response_model=Conference,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Partially update a conference",
    description="Fields omitted or sent as null keep their stored value. "
    "Accepts application/json and application/merge-patch+json.",
)
async def partial_update_conference(
    request: Request,
    response: Response,
    conference_id: PathId,
    patch: ConferencePatch,
) -> Conference:
    """Merge the given fields into an existing conference.

    Args:
        request: FastAPI request.
        response: Outgoing response, for alert headers.
        conference_id: Id from the path.
        patch: Sparse update; its id must equal the path id.

    Returns:
        The merged conference.
    """
    logger.debug("rest_partial_update_conference", conference_id=conference_id)
    result = await asyncio.to_thread(
        _service(request).partial_update, conference_id, patch
    )
    response.headers.update(entity_alert(_app_name(request), "updated", str(conference_id)))
    return result


@router.get("", response_model=list[Conference], summary="List all conferences")
async def list_conferences(request: Request) -> list[Conference]:
    """List every conference in the primary store."""
    return await asyncio.to_thread(_service(request).list_all)


@router.get(
    "/{conference_id}",
    response_model=Conference,
    responses=_NOT_FOUND,
    summary="Get a conference",
)
async def get_conference(request: Request, conference_id: PathId) -> Conference:
    """Retrieve a single conference by id.

    Args:
        request: FastAPI request.
        conference_id: Conference identifier.

    Returns:
        The conference; 404 if absent.
    """
    return await asyncio.to_thread(_service(request).get, conference_id)


@router.delete(
    "/{conference_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a conference",
)
async def delete_conference(request: Request, conference_id: PathId) -> Response:
    """Delete a conference from both stores; unknown ids succeed too.

    Args:
        request: FastAPI request.
        conference_id: Conference identifier.

    Returns:
        Empty 204 response.
    """
    logger.debug("rest_delete_conference", conference_id=conference_id)
    await asyncio.to_thread(_service(request).delete, conference_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_alert(_app_name(request), "deleted", str(conference_id)),
    )

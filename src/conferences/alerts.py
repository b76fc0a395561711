"""Entity alert headers and error responses for the conference API."""

from urllib.parse import quote

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from conferences.config import Settings
from conferences.records.errors import (
    ENTITY_NAME,
    ConferenceError,
    RecordNotFoundError,
    RecordValidationError,
)


class ErrorResponse(BaseModel):
    """Structured error body.

    Attributes:
        title: Human-readable description.
        entity_name: Entity the failed request addressed.
        error_key: Reason code (idexists, idnull, idinvalid, idnotfound).
        message: Translation key for clients, ``error.<error_key>``.
    """

    title: str
    entity_name: str
    error_key: str
    message: str


def entity_alert(app_name: str, action: str, param: str) -> dict[str, str]:
    """Headers announcing a successful change to a conference.

    Args:
        app_name: Application name from settings.
        action: "created", "updated" or "deleted".
        param: Identifier of the affected conference.

    Returns:
        Alert and params headers.
    """
    return {
        f"X-{app_name}-alert": f"{app_name}.{ENTITY_NAME}.{action}",
        f"X-{app_name}-params": quote(param),
    }


def failure_alert(app_name: str, error_key: str) -> dict[str, str]:
    """Headers describing a rejected conference request."""
    return {
        f"X-{app_name}-error": f"error.{error_key}",
        f"X-{app_name}-params": ENTITY_NAME,
    }


_UPDATE_METHODS = frozenset({"PUT", "PATCH"})


def _status_for(error: ConferenceError, method: str, settings: Settings) -> int:
    """Pick the HTTP status for a domain error.

    Updates addressing an unknown id answer 400 unless configured to
    answer 404; plain lookups always answer 404.
    """
    if isinstance(error, RecordNotFoundError):
        if method in _UPDATE_METHODS and settings.unknown_id_status == "bad_request":
            return status.HTTP_400_BAD_REQUEST
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, RecordValidationError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: ConferenceError, status_code: int, app_name: str) -> JSONResponse:
    """Render a domain error as JSON with failure alert headers."""
    body = ErrorResponse(
        title=error.message,
        entity_name=ENTITY_NAME,
        error_key=error.code,
        message=f"error.{error.code}",
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=failure_alert(app_name, error.code),
    )


def install_error_handlers(app: FastAPI) -> None:
    """Translate domain exceptions raised by route handlers into responses.

    Args:
        app: FastAPI application whose state holds the settings.
    """

    async def handle_conference_error(request: Request, exc: Exception) -> JSONResponse:
        assert isinstance(exc, ConferenceError)
        settings: Settings = request.app.state.settings
        return error_response(exc, _status_for(exc, request.method, settings), settings.app_name)

    app.add_exception_handler(ConferenceError, handle_conference_error)

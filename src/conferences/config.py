"""Service configuration loaded from environment variables."""
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug logging and API documentation.
        app_name: Application name used in alert response headers.
        database_path: SQLite file holding the conference table.
        search_index_path: SQLite file for the FTS5 index, or ":memory:".
        reindex_on_startup: Rebuild the search index from the database
            when the application starts.
        unknown_id_status: HTTP mapping for update/patch on an unknown
            id, "bad_request" (400) or "not_found" (404).
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFERENCES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    app_name: str = "conferenceApp"

    database_path: str = "conferences.db"
    search_index_path: str = ":memory:"
    reindex_on_startup: bool = True

    unknown_id_status: Literal["bad_request", "not_found"] = "bad_request"

"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration at all; in a deployment you
override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Contact Management API")
    project_description: str = os.getenv(
        "PROJECT_DESCRIPTION",
        "A REST API for managing contacts with CRUD operations, search "
        "functionality and batch processing capabilities.",
    )
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional log file; empty means console output only.
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))
    # Extra server advertised in the OpenAPI document, e.g. the public
    # deployment URL.  Left out of the document when empty.
    public_server_url: str = os.getenv("PUBLIC_SERVER_URL", "")

    contact_name: str = os.getenv("CONTACT_NAME", "Contact Directory Team")
    contact_email: str = os.getenv("CONTACT_EMAIL", "support@example.com")
    contact_url: str = os.getenv("CONTACT_URL", "https://example.com")

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "contacts.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before this module is imported.
settings = Settings()

"""
Main entrypoint for the Contact Directory API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn contact_directory_api.app.main:app --reload

or via ``run.py`` at the project root.
"""

import logging

from fastapi import FastAPI, Request

from .core.config import settings
from .core.db import init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router


logger = logging.getLogger(__name__)


def openapi_servers() -> list[dict[str, str]]:
    """Servers advertised in the OpenAPI document."""
    servers = [
        {"url": f"http://localhost:{settings.port}", "description": "Local Development Server"},
    ]
    if settings.public_server_url:
        servers.append({"url": settings.public_server_url, "description": "Production Server"})
    return servers


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging first so that everything below can log, then
    builds the app with its OpenAPI metadata, error handlers and the
    ``/api/v1`` routes.  The database schema is migrated on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        description=settings.project_description,
        version=settings.api_version,
        debug=settings.debug,
        contact={
            "name": settings.contact_name,
            "email": settings.contact_email,
            "url": settings.contact_url,
        },
        license_info={"name": "MIT License", "url": "https://opensource.org/licenses/MIT"},
        servers=openapi_servers(),
    )

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

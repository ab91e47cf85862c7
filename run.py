"""Entry point for the Contact Directory API.

Starts the FastAPI application with uvicorn.  Host, port and log level
come from the same environment variables as the application settings
(``HOST``, ``PORT``, ``LOG_LEVEL``; defaults ``0.0.0.0``, ``8080`` and
``INFO``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from contact_directory_api.app.core.config import settings
from contact_directory_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Logging is configured by create_app(); uvicorn's loggers feed the root handlers.
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

"""
Logging configuration for the Contact Directory API.

``setup_logging`` installs one formatter on the root logger (console
and optional file output) and routes uvicorn's own loggers through it,
so server start-up, access lines and application messages from the
contact service share one format in the console and in ``LOG_FILE``.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers uvicorn configures with handlers of its own.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def route_server_logs() -> None:
    """Make uvicorn's loggers propagate to the root logger.

    Their private handlers are removed so each record is written once,
    by the root handlers, in ``LOG_FORMAT``.
    """
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        for handler in list(server_logger.handlers):
            server_logger.removeHandler(handler)
        server_logger.propagate = True


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure logging for the service.

    uvicorn's loggers are always routed to the root logger.  Handlers
    are attached to the root logger only if it has none yet, so a
    repeated ``create_app()`` (or a test runner that already captures
    logs) does not duplicate output.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
    """
    route_server_logs()

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

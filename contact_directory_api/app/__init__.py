"""
Application package initializer.

The service is organised in layers: ``core`` holds configuration,
storage and error handling, ``schemas`` the pydantic models exchanged
over HTTP, ``repositories`` the SQL for the contacts table,
``services`` the business rules and ``api/v1`` the versioned routers.
"""

from .main import app  # noqa: F401

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from contact_directory_api.app.core.config import settings
from contact_directory_api.app.core.db import init_db
from contact_directory_api.app.main import app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file with the schema applied."""
    db_path = tmp_path / "contacts.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client

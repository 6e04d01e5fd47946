from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from focus_orbit_api.app.core.config import settings
from focus_orbit_api.app.core.db import init_db
from focus_orbit_api.app.core.security import create_access_token
from focus_orbit_api.app.main import app


ADMIN = "admin-principal"


@pytest.fixture(autouse=True)
def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    db_path = tmp_path / "focus_orbit.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "admin_identities", ADMIN)
    init_db()
    return db_path


@pytest.fixture()
def client() -> TestClient:
    # Entering the context runs the lifespan, which bootstraps ADMIN.
    with TestClient(app) as test_client:
        yield test_client


def auth(identity: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': identity})}"}

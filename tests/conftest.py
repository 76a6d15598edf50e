"""
Pytest configuration and fixtures for Arcade Tours testing.

This module provides:
- Temporary SQLite tour store
- Deterministic recording scheduler
- Catalogs seeded with sample tours
- FastAPI test client wired to the temporary store
"""

import pytest

from src.database.tour_store import SQLiteTourStore
from src.tours.catalog import StaticIdentity, TourCatalog
from src.tours.models import Step, Tour
from src.tours.recording import ManualScheduler


# ============================================================
# DATABASE FIXTURES
# ============================================================

@pytest.fixture(scope="function")
def store(tmp_path):
    """Fresh tour store in a temporary directory for each test."""
    store = SQLiteTourStore(tmp_path / "test_arcade_tours.db")
    store.init_schema()
    return store


# ============================================================
# CORE FIXTURES
# ============================================================

@pytest.fixture
def scheduler():
    """Scheduler that only fires when the test advances it."""
    return ManualScheduler()


@pytest.fixture
def catalog():
    """In-memory catalog holding the two sample tours (15 and 8 views)."""
    return TourCatalog.with_fixtures()


@pytest.fixture
def stored_catalog(store):
    """Catalog backed by the temporary store for user 'user-1'."""
    return TourCatalog(store=store, identity=StaticIdentity('user-1'))


@pytest.fixture
def demo_tour():
    """Unsaved tour with two steps."""
    return Tour(
        title='Demo',
        steps=[
            Step(id='a', text='First', image='img-1'),
            Step(id='b', text='Second', image='img-2'),
        ],
        is_public=False,
    )


# ============================================================
# API FIXTURES
# ============================================================

@pytest.fixture
def api_client(store):
    """TestClient using the temporary store instead of the configured database."""
    from fastapi.testclient import TestClient
    from apps.tour_portal.api.main import app
    from apps.tour_portal.api.models.database import get_store

    app.dependency_overrides[get_store] = lambda: store
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def signup(client, email="owner@example.com", password="secret-pass"):
    """Create an account and return auth headers for it."""
    response = client.post("/api/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(api_client):
    return signup(api_client)

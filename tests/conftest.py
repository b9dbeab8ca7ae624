"""Shared pytest fixtures.

Every test runs from its own temporary directory with a fresh SQLite
database, so nothing touches ./db or ./config of the working tree.
"""

import pytest
from fastapi.testclient import TestClient

from learnme.config import clear_config_cache
from learnme.db.database import init_db
from learnme.db.seed import seed_catalog
from learnme.db.users_repository import create_user
from learnme.prompts.registry import clear_cache
from learnme.web.api import create_app


@pytest.fixture(autouse=True)
def isolated_db(tmp_path, monkeypatch):
    """Fresh database and default config for each test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LEARNME_CONFIG", raising=False)
    monkeypatch.delenv("LEARNME_BASE_URL", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    clear_config_cache()
    clear_cache()

    db_path = tmp_path / "test.db"
    init_db(db_path)
    yield db_path

    clear_config_cache()


@pytest.fixture
def seeded():
    """Database with the default catalog."""
    return seed_catalog()


@pytest.fixture
def user():
    """A registered learner."""
    return create_user(name="Ana Lopez", email="ana@example.com")


@pytest.fixture
def client():
    """Test client over a fresh app."""
    return TestClient(create_app())


@pytest.fixture
def auth(user):
    """Headers identifying the `user` fixture."""
    return {"X-User-Id": user.user_id}

"""
Shared pytest fixtures for the program import API.

Provides an app built with test settings, a TestClient with auth
overridden, and a fake import repository wired in through
app.dependency_overrides.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.deps import get_current_user, get_import_repo, get_settings  # noqa: E402
from backend.main import create_app  # noqa: E402
from backend.settings import Settings  # noqa: E402
from tests.fakes import FakeProgramImportRepository  # noqa: E402


TEST_USER_ID = "test-user-import"


async def mock_get_current_user() -> str:
    return TEST_USER_ID


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def fake_import_repo() -> FakeProgramImportRepository:
    return FakeProgramImportRepository()


@pytest.fixture
def app(test_settings, fake_import_repo):
    """App with settings and the import repository overridden."""
    app = create_app(settings=test_settings)
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_import_repo] = lambda: fake_import_repo
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    app.dependency_overrides[get_current_user] = mock_get_current_user
    return TestClient(app)


@pytest.fixture
def anon_client(app) -> TestClient:
    """Client that goes through the real auth dependency."""
    return TestClient(app)


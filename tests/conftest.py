import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from moviesapp.core.config import Settings, get_settings
from moviesapp.main import app


def make_settings(**overrides) -> Settings:
    values = {
        "api_key": "test-key",
        "api_url_popular": "https://tmdb.test/3/movie/popular",
        "api_url_search": "https://tmdb.test/3/search/movie",
        "api_url_movie": "https://tmdb.test/3/movie",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_response(status_code: int = 200, body: bytes | str | dict = b"{}"):
    """Build a stand-in for a niquests response."""
    if isinstance(body, dict):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.content = body
    response.json.side_effect = lambda: json.loads(body)
    return response


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def session():
    """Outbound session whose ``get`` is an AsyncMock returning an empty 200."""
    fake = MagicMock()
    fake.get = AsyncMock(return_value=make_response())
    return fake


@pytest.fixture
def client(settings, session):
    """TestClient wired to the fake settings and session."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.http_session = session
    yield TestClient(app)
    app.dependency_overrides.clear()
    del app.state.http_session

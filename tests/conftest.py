# ABOUTME: Global pytest configuration for all tests
# ABOUTME: Shared fixtures for fake transports, started sessions and isolated config

import pytest

from session.game_session import GameSession
from tests.fixtures import FakeProtocolClient


@pytest.fixture(autouse=True)
def isolate_adventure_env(monkeypatch):
    """
    Clear ADVENTURE_* environment variables for every test.

    Configuration tests opt in by setting variables with monkeypatch.
    """
    for name in (
        "ADVENTURE_API_BASE_URL",
        "ADVENTURE_INITIAL_SCREEN_ID",
        "ADVENTURE_REQUEST_TIMEOUT_SECONDS",
        "ADVENTURE_LOG_FILE",
        "ADVENTURE_JSON_LOG_FILE",
        "ADVENTURE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_client():
    return FakeProtocolClient()


@pytest.fixture
def session(fake_client):
    """A GameSession already started on the opening screen."""
    game_session = GameSession(fake_client)
    game_session.start_session()
    return game_session

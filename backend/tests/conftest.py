"""Shared test configuration, fixtures and pytest markers."""

import pytest

from api.dependencies import reset_session
from api.router import limiter
from config import settings
from models.resume import initial_resume


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


@pytest.fixture(autouse=True)
def _offline(monkeypatch):
    """Never reach Gemini or the rate limiter unless a test opts in."""
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(limiter, "enabled", False)


@pytest.fixture(autouse=True)
def _fresh_session():
    reset_session()
    yield
    reset_session()


@pytest.fixture
def resume():
    return initial_resume()

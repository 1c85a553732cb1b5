"""
Pytest configuration and fixtures for the TransLingo API.

This module provides:
- Test settings with a detection key and fixed provider URLs
- A fake upstream (httpx.MockTransport) answering per provider host
- Resolver, history and test client fixtures wired to the fake upstream
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from tests.fakes import FakeUpstream
from translingo.core.config import Settings
from translingo.services.history_service import HistoryService
from translingo.services.translation import TranslationResolver


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the public provider hosts with a fake detection key."""
    return Settings(
        DEBUG=True,
        ENVIRONMENT="testing",
        LANGUAGE_DETECTION_API_KEY="test-detect-key",
        MYMEMORY_CONTACT_EMAIL="",
        HISTORY_MAX_ENTRIES=5,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def resolver(http_client: httpx.AsyncClient, test_settings: Settings) -> TranslationResolver:
    return TranslationResolver.from_settings(http_client, test_settings)


@pytest.fixture
def history_service(test_settings: Settings) -> HistoryService:
    return HistoryService(max_entries=test_settings.HISTORY_MAX_ENTRIES)


@pytest.fixture
def test_client(resolver: TranslationResolver, history_service: HistoryService):
    """FastAPI test client whose services talk to the fake upstream.

    The lifespan is not run; services are injected via dependency overrides.
    """
    from translingo.main import app
    from translingo.routes.translate import (
        get_language_detector,
        get_translation_resolver,
    )
    from translingo.routes.translations import get_history_service

    app.dependency_overrides[get_translation_resolver] = lambda: resolver
    app.dependency_overrides[get_language_detector] = lambda: resolver.detector
    app.dependency_overrides[get_history_service] = lambda: history_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

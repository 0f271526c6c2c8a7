"""
AgriScan Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings: Settings for an offline app (memory store, no key)
    ├── fake_text_service: Deterministic TextCompletionService
    ├── memory_store: Empty InMemoryDocumentStore
    ├── failing_store: DocumentStore whose every call raises
    ├── app_factory: Builds an app around the fixtures above
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os

# Must run before any agriscan import: config.settings is read at import time
# and main.app is built from it.
os.environ["GEMINI_API_KEY"] = ""
os.environ["DOCUMENT_STORE"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List, Optional, Tuple  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from agriscan.config import Settings  # noqa: E402
from agriscan.main import create_app  # noqa: E402
from agriscan.services.document_store import DocumentStore, InMemoryDocumentStore  # noqa: E402
from agriscan.services.llm_base import DEFAULT_LANGUAGE, TextCompletionService  # noqa: E402


class FakeTextService(TextCompletionService):
    """Returns a canned answer and records every call."""

    def __init__(self, answer: str = "Plant rice after the first monsoon rain."):
        self.answer = answer
        self.calls: List[Tuple[str, Optional[str]]] = []

    async def generate(self, prompt: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
        self.calls.append((prompt, language))
        return self.answer


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    return Settings(
        gemini_api_key="",
        document_store="memory",
        log_level="WARNING",
        cors_origins="*",
    )


@pytest.fixture
def fake_text_service():
    return FakeTextService()


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def failing_store():
    """
    A DocumentStore double whose reads and writes raise RuntimeError,
    standing in for an unreachable database.
    """
    store = MagicMock(spec=DocumentStore)
    store.name = "failing"
    store.append_to_subcollection = AsyncMock(side_effect=RuntimeError("database unavailable"))
    store.list_top_level = AsyncMock(side_effect=RuntimeError("database unavailable"))
    store.close = AsyncMock()
    return store


@pytest.fixture
def app_factory(test_settings, fake_text_service, memory_store):
    """
    Build an app wired to test doubles.

    Usage:
        app = app_factory(document_store=failing_store)
    """
    def _build(text_service=None, document_store=None):
        return create_app(
            config=test_settings,
            text_service=text_service or fake_text_service,
            document_store=document_store or memory_store,
        )
    return _build


@pytest_asyncio.fixture
async def test_client(app_factory):
    """
    Async HTTP client talking to an app built from the default fixtures.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app_factory())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

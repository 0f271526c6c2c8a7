"""
AgriScan Backend - Application Factory Tests
=============================================

What:  Tests for backend selection, app.state wiring and the lifespan hooks.
"""

from unittest.mock import patch

import pytest

from agriscan.config import Settings
from agriscan.main import build_document_store, build_text_service, create_app, lifespan
from agriscan.services.document_store import InMemoryDocumentStore
from agriscan.services.firestore_store import FirestoreDocumentStore
from agriscan.services.gemini_service import GeminiService
from agriscan.services.sql_store import SqlDocumentStore


class TestBuildDocumentStore:

    def test_memory_backend(self):
        """DOCUMENT_STORE=memory should build the in-memory store."""
        store = build_document_store(Settings(document_store="memory"))
        assert isinstance(store, InMemoryDocumentStore)

    @pytest.mark.asyncio
    async def test_sql_backend(self, tmp_path):
        """DOCUMENT_STORE=sql should build the SQL store on DATABASE_URL."""
        config = Settings(
            document_store="sql",
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'factory.db'}",
        )

        store = build_document_store(config)

        assert isinstance(store, SqlDocumentStore)
        await store.close()

    def test_firestore_backend_is_lazy(self):
        """The Firestore store should be built without initializing Firebase."""
        config = Settings(
            document_store="firestore",
            firebase_project_id="agri-demo",
            firebase_credentials_path="/secrets/sa.json",
        )

        with patch("agriscan.services.firestore_store.firebase_admin") as mock_admin:
            store = build_document_store(config)

        assert isinstance(store, FirestoreDocumentStore)
        assert store.project_id == "agri-demo"
        assert store.credentials_path == "/secrets/sa.json"
        mock_admin.initialize_app.assert_not_called()


class TestCreateApp:

    def test_text_service_built_from_settings(self):
        """The text service should be a GeminiService built from settings."""
        service = build_text_service(Settings(gemini_api_key="", gemini_model="gemini-test"))

        assert isinstance(service, GeminiService)
        assert service.is_configured is False

    def test_state_wiring(self, test_settings, fake_text_service, memory_store):
        """Injected services should be stored on app.state."""
        app = create_app(
            config=test_settings,
            text_service=fake_text_service,
            document_store=memory_store,
        )

        assert app.state.settings is test_settings
        assert app.state.text_service is fake_text_service
        assert app.state.document_store is memory_store
        assert app.state.scan_service.store is memory_store

    @pytest.mark.asyncio
    async def test_lifespan_closes_document_store(self, app_factory, failing_store):
        """Shutdown should close the document store."""
        app = app_factory(document_store=failing_store)

        with patch("agriscan.main.setup_logging"):
            async with lifespan(app):
                failing_store.close.assert_not_awaited()

        failing_store.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lifespan_survives_missing_key(self, app_factory):
        """A missing key should be logged at startup, not raised."""
        app = app_factory()

        with patch("agriscan.main.setup_logging"), patch("agriscan.main.logger") as mock_logger:
            async with lifespan(app):
                pass

        assert any(
            "Configuration error" in call.args[0] for call in mock_logger.error.call_args_list
        )

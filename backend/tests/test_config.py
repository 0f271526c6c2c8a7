"""
AgriScan Backend - Settings Tests
==================================

What:  Tests for the Pydantic Settings validators and helpers.
"""

import pytest
from pydantic import ValidationError

from agriscan.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        """Unset settings should fall back to development defaults."""
        monkeypatch.delenv("DOCUMENT_STORE", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        config = Settings(_env_file=None)

        assert config.document_store == "firestore"
        assert config.gemini_model == "gemini-2.5-flash-preview-05-20"
        assert config.cors_origins_list == ["*"]
        assert config.log_level == "INFO"

    def test_log_level_is_uppercased(self):
        """Log level should be normalized to upper case."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        """Unknown log levels should fail validation."""
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_document_store_is_normalized(self):
        """Store backend names should be trimmed and lower-cased."""
        assert Settings(document_store=" SQL ").document_store == "sql"

    def test_unknown_document_store_rejected(self):
        """Unknown store backends should fail validation."""
        with pytest.raises(ValidationError):
            Settings(document_store="mongo")

    def test_cors_origins_are_split_and_trimmed(self):
        """Comma-separated origins should become a trimmed list."""
        config = Settings(cors_origins="https://a.example, https://b.example")

        assert config.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_reads_environment(self, monkeypatch):
        """Settings should be read from environment variables."""
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("DOCUMENT_STORE", "sql")

        config = Settings()

        assert config.gemini_api_key == "env-key"
        assert config.document_store == "sql"

    def test_missing_key_fails_production_check(self):
        """The production check should name the missing Gemini key."""
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            Settings(gemini_api_key="").validate_required_for_production()

    def test_present_key_passes_production_check(self):
        """The production check should pass when a key is set."""
        Settings(gemini_api_key="secret").validate_required_for_production()

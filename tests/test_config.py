# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    """Derived settings values."""

    def test_allowed_tokens_list_strips_and_drops_empty(self):
        settings = Settings(MONGO_URI="mongodb://localhost", ALLOWED_TOKENS=" a, b ,,")

        assert settings.allowed_tokens_list == ["a", "b"]

    def test_default_database_from_uri(self):
        settings = Settings(MONGO_URI="mongodb://user:pw@h1:27017,h2:27017/app?replicaSet=rs0")

        assert settings.default_database == "app"

    def test_default_database_override(self):
        settings = Settings(MONGO_URI="mongodb://localhost/app", MONGO_DB_NAME="other")

        assert settings.default_database == "other"

    def test_no_default_database(self):
        settings = Settings(MONGO_URI="mongodb://localhost:27017")

        assert settings.default_database is None

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            Settings(MONGO_URI="mongodb://localhost", PORT=70000)

"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings


@pytest.mark.unit
class TestSettings:
    """Settings validation."""

    def test_storage_backend_normalised(self) -> None:
        assert Settings(SECRET_KEY="k", STORAGE_BACKEND=" SQL ").STORAGE_BACKEND == "sql"

    def test_unknown_storage_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(SECRET_KEY="k", STORAGE_BACKEND="redis")

    def test_secret_key_required(self) -> None:
        with pytest.raises(ValidationError):
            Settings(SECRET_KEY="")

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(SECRET_KEY="k", VOTE_CONFLICT_RETRIES=-1)

    def test_cors_origins_list(self) -> None:
        settings = Settings(SECRET_KEY="k", CORS_ORIGINS="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_only_used_keys_declared(self) -> None:
        assert "APP_ENV" not in Settings.model_fields

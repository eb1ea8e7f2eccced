"""Unit tests for configuration."""

import pytest

from src.core.config import Settings, constants


@pytest.mark.unit
class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.token_max_age_seconds == 604800
        assert config.auth_cookie_name == "auth_token"
        assert config.default_page_limit == 10
        assert config.is_production is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SQLITE_DB_PATH", "/tmp/tasks.db")
        monkeypatch.setenv("ENVIRONMENT", "Production")

        config = Settings(_env_file=None)

        assert config.sqlite_db_path == "/tmp/tasks.db"
        assert config.is_production is True

    def test_require_credential_missing(self):
        config = Settings(_env_file=None, secret_key=None)

        with pytest.raises(ValueError, match="Token signing credential not configured"):
            config.require_credential("secret_key", "Token signing")

    def test_require_credential_empty(self):
        config = Settings(_env_file=None, secret_key="")

        with pytest.raises(ValueError, match="SECRET_KEY"):
            config.require_credential("secret_key", "Token signing")

    def test_require_credential_present(self):
        config = Settings(_env_file=None, secret_key="s3cret")

        assert config.require_credential("secret_key", "Token signing") == "s3cret"


@pytest.mark.unit
def test_page_limit_bounds():
    assert constants.MIN_PAGE_LIMIT == 1
    assert constants.MAX_PAGE_LIMIT == 100

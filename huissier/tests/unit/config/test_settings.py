"""
Unit tests for Settings and load_config.

Usage:
    pytest huissier/tests/unit/config
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from huissier.config.settings import Settings, load_config

REQUIRED = {
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "SOLANA_RPC_URL": "http://rpc.test",
    "TOKEN_MINT": "So11111111111111111111111111111111111111112",
}


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self):
        """Test defaults for optional settings."""
        settings = Settings(**REQUIRED)

        assert settings.SOLANA_COMMITMENT == "confirmed"
        assert settings.ROLE_ANY == "participant"
        assert settings.TIER_1_THRESHOLD == Decimal("1000")
        assert settings.TIER_3_THRESHOLD == Decimal("100000")
        assert settings.LINK_MAX_ATTEMPTS == 3
        assert settings.BOT_WEBHOOK_URL is None

    def test_log_level_normalized(self):
        """Test lowercase log level is accepted."""
        settings = Settings(**REQUIRED, LOG_LEVEL="debug")

        assert settings.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log level is rejected."""
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, LOG_LEVEL="LOUD")

    def test_invalid_commitment(self):
        """Test unknown commitment level is rejected."""
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, SOLANA_COMMITMENT="recent")

    def test_tier_thresholds_must_increase(self):
        """Test overlapping tier thresholds are rejected."""
        with pytest.raises(ValidationError, match="strictly increasing"):
            Settings(
                **REQUIRED,
                TIER_1_THRESHOLD=Decimal("5000"),
                TIER_2_THRESHOLD=Decimal("5000"),
            )

    def test_link_attempts_must_be_positive(self):
        """Test zero link attempts is rejected."""
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, LINK_MAX_ATTEMPTS=0)


class TestLoadConfig:
    """Tests for layered configuration loading."""

    def test_environment_overrides_yaml(self, monkeypatch):
        """Test environment variables win over default.yaml."""
        for key, value in REQUIRED.items():
            monkeypatch.setenv(key, value)
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("RPC_MAX_RETRIES", "7")

        settings = load_config(env="test")

        assert settings.LOG_LEVEL == "WARNING"
        assert settings.RPC_MAX_RETRIES == 7

    def test_yaml_defaults_applied(self, monkeypatch):
        """Test default.yaml values are used when env is silent."""
        for key, value in REQUIRED.items():
            monkeypatch.setenv(key, value)
        monkeypatch.delenv("APP_NAME", raising=False)
        monkeypatch.delenv("NOTIFIER_TIMEOUT", raising=False)

        settings = load_config(env="test")

        assert settings.APP_NAME == "Huissier"
        assert settings.NOTIFIER_TIMEOUT == 5.0

    def test_missing_required_settings(self, monkeypatch):
        """Test missing DATABASE_URL fails loudly."""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("SOLANA_RPC_URL", REQUIRED["SOLANA_RPC_URL"])
        monkeypatch.setenv("TOKEN_MINT", REQUIRED["TOKEN_MINT"])
        monkeypatch.chdir("/")

        with pytest.raises(ValidationError):
            load_config(env="test")

"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Secrets (database credentials, webhook URL) should come from
    environment variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Huissier"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (verification frontend)",
    )

    # Database (from environment - REQUIRED in production)
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)

    # Solana / Blockchain (from environment - REQUIRED in production)
    SOLANA_RPC_URL: str = Field(..., description="Solana RPC URL")
    SOLANA_COMMITMENT: str = Field(default="confirmed")
    TOKEN_MINT: str = Field(..., description="SPL token mint to measure")
    RPC_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="Balance lookup timeout in seconds",
    )
    RPC_MAX_RETRIES: int = Field(
        default=3,
        ge=1,
        description="Maximum attempts for transient RPC failures",
    )

    # Resilience - Circuit Breaker
    CB_FAILURE_THRESHOLD: int = Field(
        default=5,
        ge=1,
        description="Circuit breaker failure threshold",
    )
    CB_RECOVERY_TIMEOUT: float = Field(
        default=60.0,
        description="Circuit breaker open state timeout",
    )

    # Role assignment bot
    BOT_WEBHOOK_URL: Optional[str] = Field(
        default=None,
        description="Role-assignment bot webhook URL",
    )
    NOTIFIER_TIMEOUT: float = Field(
        default=5.0,
        gt=0,
        description="Webhook request timeout in seconds",
    )

    # Discord role IDs
    ROLE_ANY: str = Field(default="participant", description="Base holder role")
    ROLE_1K: str = Field(default="tier-1")
    ROLE_10K: str = Field(default="tier-2")
    ROLE_100K: str = Field(default="tier-3")

    # Tier thresholds (inclusive)
    TIER_1_THRESHOLD: Decimal = Field(default=Decimal("1000"), gt=0)
    TIER_2_THRESHOLD: Decimal = Field(default=Decimal("10000"), gt=0)
    TIER_3_THRESHOLD: Decimal = Field(default=Decimal("100000"), gt=0)

    # Linking
    LINK_MAX_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        description="Read-modify-write attempts on concurrent linkage updates",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("SOLANA_COMMITMENT")
    @classmethod
    def validate_commitment(cls, v: str) -> str:
        """Validate Solana commitment level."""
        allowed = ["processed", "confirmed", "finalized"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(
                f"Invalid SOLANA_COMMITMENT. Must be one of: {allowed}"
            )
        return v_lower

    @model_validator(mode="after")
    def validate_tier_thresholds(self) -> "Settings":
        """Tier thresholds must be strictly increasing."""
        if not (
            self.TIER_1_THRESHOLD < self.TIER_2_THRESHOLD < self.TIER_3_THRESHOLD
        ):
            raise ValueError("Tier thresholds must be strictly increasing")
        return self


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Environment variables win over YAML values
    merged_config = {
        key: value for key, value in merged_config.items() if key not in os.environ
    }

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None

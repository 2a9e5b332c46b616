"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
"""

from huissier.application.use_cases.verify_discord_wallet import (
    VerifyDiscordWallet,
)
from huissier.di.container import get_container
from huissier.infrastructure.persistence.database import Database


def get_database() -> Database:
    """Get Database dependency."""
    return get_container().database


def get_verify_discord_wallet() -> VerifyDiscordWallet:
    """Get VerifyDiscordWallet use case dependency."""
    return get_container().get_verify_discord_wallet()

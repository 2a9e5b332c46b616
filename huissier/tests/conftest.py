"""
Test fixtures and configuration.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from helpers.fakes import InMemoryLinkageRepository, RecordingRoleNotifier
from huissier.config.settings import Settings, override_settings, reset_settings
from huissier.di.container import reset_container
from huissier.infrastructure.persistence.database import Database

TEST_RPC_URL = "http://rpc.test"
TEST_TOKEN_MINT = "So11111111111111111111111111111111111111112"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite ledger."""
    settings = Settings(
        ENV="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'huissier.db'}",
        SOLANA_RPC_URL=TEST_RPC_URL,
        TOKEN_MINT=TEST_TOKEN_MINT,
        BOT_WEBHOOK_URL=None,
        LOG_LEVEL="DEBUG",
    )
    override_settings(settings)
    reset_container()

    yield settings

    reset_container()
    reset_settings()


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """
    Create SQLite test database with schema.

    Each test gets a clean database file.
    """
    db = Database(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        echo=False,
    )
    await db.connect()
    await db.create_schema()

    yield db

    await db.disconnect()


@pytest.fixture
def linkage_repository() -> InMemoryLinkageRepository:
    """Provide in-memory account ledger."""
    return InMemoryLinkageRepository()


@pytest.fixture
def role_notifier() -> RecordingRoleNotifier:
    """Provide recording role notifier."""
    return RecordingRoleNotifier()

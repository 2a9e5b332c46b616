"""
Database initialization script.

Creates the identity_links table in the configured database.
"""

import asyncio
import sys

from huissier.config.settings import get_settings
from huissier.infrastructure.persistence.database import (
    Database,
    mask_database_url,
)


async def main():
    """Run database initialization."""
    settings = get_settings()

    print("Huissier Database Initialization")
    print("=" * 50)
    print(f"Database URL: {mask_database_url(settings.DATABASE_URL)}")
    print("=" * 50)

    database = Database(database_url=settings.DATABASE_URL, echo=False)

    try:
        await database.connect()
        await database.create_schema()

        if not await database.health_check():
            print("Database is not reachable after schema creation")
            sys.exit(1)

        print("Database initialization completed successfully!")

    except Exception as e:
        print(f"Database initialization failed: {e}")
        sys.exit(1)

    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())

"""
Dependency Injection module for Huissier.

Provides container and dependency functions for FastAPI routes.
"""

from huissier.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    reset_container,
    shutdown_container,
)
from huissier.di.dependencies import get_database, get_verify_discord_wallet

__all__ = [
    # Container
    "DIContainer",
    "get_container",
    "initialize_container",
    "reset_container",
    "shutdown_container",
    # Dependencies
    "get_database",
    "get_verify_discord_wallet",
]

"""Repository implementations."""

from huissier.infrastructure.persistence.repositories.linkage_repository import (
    LinkageRepository,
)

__all__ = ["LinkageRepository"]

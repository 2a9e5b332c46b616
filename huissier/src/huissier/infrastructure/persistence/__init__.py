"""
Infrastructure persistence package.
"""

from huissier.infrastructure.persistence.database import Database
from huissier.infrastructure.persistence.models import Base, IdentityLinkModel

__all__ = [
    "Database",
    "Base",
    "IdentityLinkModel",
]

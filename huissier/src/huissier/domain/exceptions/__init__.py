"""
Domain exceptions package.
"""

# Base exceptions
from huissier.domain.exceptions.base import (
    HuissierException,
    ValidationError,
)

# Blockchain exceptions
from huissier.domain.exceptions.blockchain import (
    BalanceLookupError,
    BlockchainError,
)

# Ledger exceptions
from huissier.domain.exceptions.ledger import (
    LedgerError,
    LinkageConflictError,
)

__all__ = [
    # Base
    "HuissierException",
    "ValidationError",
    # Blockchain
    "BlockchainError",
    "BalanceLookupError",
    # Ledger
    "LedgerError",
    "LinkageConflictError",
]

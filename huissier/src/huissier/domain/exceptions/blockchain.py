"""
Blockchain-related exceptions.
"""

from huissier.domain.exceptions.base import HuissierException


class BlockchainError(HuissierException):
    """Base exception for blockchain operations."""


class BalanceLookupError(BlockchainError):
    """Raised when a token balance cannot be determined for a wallet."""

    def __init__(self, wallet_address: str, reason: str):
        """
        Initialize balance lookup error.

        Args:
            wallet_address: Wallet whose balance lookup failed
            reason: Underlying failure description
        """
        super().__init__(
            f"Balance lookup failed for {wallet_address}: {reason}",
            code="BALANCE_LOOKUP_FAILED",
        )
        self.wallet_address = wallet_address
        self.reason = reason

"""
Balance oracle service interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal


class IBalanceOracle(ABC):
    """
    Abstract service interface for token balance lookups.

    Read-only and safe for concurrent use.
    """

    @abstractmethod
    async def balance_of(self, wallet_address: str) -> Decimal:
        """
        Get token balance held by wallet.

        Sums the UI-scaled amount over every token account of the
        configured mint owned by the wallet.

        Args:
            wallet_address: Solana wallet address (base58)

        Returns:
            Non-negative balance, Decimal("0") if the wallet holds
            no token account for the mint

        Raises:
            BalanceLookupError: If the balance cannot be determined
        """

    async def close(self) -> None:
        """Release network resources."""

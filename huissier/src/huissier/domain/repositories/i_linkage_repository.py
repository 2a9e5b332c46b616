"""
Identity linkage repository interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from huissier.domain.entities.identity_link import IdentityLink


class ILinkageRepository(ABC):
    """
    Interface for the account ledger.

    Writes are compare-and-swap on the linkage version.
    """

    @abstractmethod
    async def get_linkage(self, discord_id: str) -> Optional[IdentityLink]:
        """
        Get linkage by Discord ID.

        Args:
            discord_id: Discord user ID

        Returns:
            IdentityLink if the account was verified before, None otherwise
        """

    @abstractmethod
    async def upsert_linkage(
        self,
        discord_id: str,
        new_wallet: str,
        resolved_wallets: List[str],
        total_balance: Decimal,
        roles: List[str],
        expected_version: Optional[int] = None,
    ) -> IdentityLink:
        """
        Atomically create or replace linkage.

        Args:
            discord_id: Discord user ID (stable key)
            new_wallet: Wallet submitted in this verification
            resolved_wallets: Full wallet list to store (contains new_wallet)
            total_balance: Aggregated balance across resolved_wallets
            roles: Roles derived from total_balance
            expected_version: Version read before computing the write,
                None if no linkage existed

        Returns:
            Stored IdentityLink with its new version

        Raises:
            LinkageConflictError: If the stored version differs from
                expected_version (or a record appeared meanwhile)
            LedgerError: If the store is unavailable
        """

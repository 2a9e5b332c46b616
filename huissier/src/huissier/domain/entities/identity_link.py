"""
Identity Link entity - Discord account linked to Solana wallets.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class IdentityLink:
    """
    Identity Link entity - one per Discord account.

    Wallets are kept in insertion order and never duplicated.
    Roles and total balance are re-derived on every verification,
    never edited by hand.
    """

    discord_id: str
    wallets: List[str] = field(default_factory=list)
    total_balance: Decimal = field(default=Decimal("0"))
    roles: List[str] = field(default_factory=list)
    verified_at: datetime = field(default_factory=_utcnow)
    version: int = 1
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        """Validate identity link data after initialization."""
        if not self.discord_id:
            raise ValueError("Discord ID is required")

        if self.total_balance < 0:
            raise ValueError(
                f"Total balance cannot be negative: {self.total_balance}"
            )

        if len(set(self.wallets)) != len(self.wallets):
            raise ValueError("Linked wallets must not contain duplicates")

    def has_wallet(self, wallet_address: str) -> bool:
        """Check whether wallet is already linked."""
        return wallet_address in self.wallets

    def with_wallet(self, wallet_address: str) -> List[str]:
        """
        Build candidate wallet list including a newly submitted wallet.

        Previously linked wallets keep their order, the new wallet is
        appended last unless it is already linked.

        Args:
            wallet_address: Submitted wallet address

        Returns:
            New list of wallet addresses (entity is not modified)
        """
        return merge_wallets(self.wallets, wallet_address)


def merge_wallets(existing: List[str], wallet_address: str) -> List[str]:
    """Order-preserving set union of existing wallets and one new wallet."""
    merged = list(dict.fromkeys(existing))
    if wallet_address not in merged:
        merged.append(wallet_address)
    return merged

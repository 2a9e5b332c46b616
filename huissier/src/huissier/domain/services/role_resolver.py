"""
Entitlement resolver - maps a total balance to Discord roles.

Tiers are cumulative: holding a higher tier implies every lower tier.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Tuple


@dataclass(frozen=True)
class RoleTier:
    """Single tier: inclusive balance threshold and the role it grants."""

    threshold: Decimal
    role_id: str


@dataclass(frozen=True)
class RoleTiers:
    """
    Tier table.

    Attributes:
        base_role: Role granted to every holder with a positive balance
        tiers: Tiers in strictly ascending threshold order
    """

    base_role: str = "participant"
    tiers: Tuple[RoleTier, ...] = field(
        default=(
            RoleTier(Decimal("1000"), "tier-1"),
            RoleTier(Decimal("10000"), "tier-2"),
            RoleTier(Decimal("100000"), "tier-3"),
        )
    )

    def __post_init__(self):
        """Validate tier ordering."""
        thresholds = [tier.threshold for tier in self.tiers]
        if any(threshold <= 0 for threshold in thresholds):
            raise ValueError("Tier thresholds must be positive")
        if thresholds != sorted(set(thresholds)):
            raise ValueError("Tier thresholds must be strictly increasing")


DEFAULT_TIERS = RoleTiers()


def resolve_roles(
    total_balance: Decimal,
    tiers: RoleTiers = DEFAULT_TIERS,
) -> List[str]:
    """
    Resolve roles for a total balance.

    Args:
        total_balance: Aggregated token balance
        tiers: Tier table

    Returns:
        Base role followed by every reached tier in ascending order,
        empty list for a zero balance
    """
    if total_balance <= 0:
        return []

    roles = [tiers.base_role]
    for tier in tiers.tiers:
        if total_balance >= tier.threshold:
            roles.append(tier.role_id)
    return roles

"""Domain entities."""

from huissier.domain.entities.identity_link import IdentityLink, merge_wallets

__all__ = ["IdentityLink", "merge_wallets"]

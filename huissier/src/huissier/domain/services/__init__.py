"""Domain services."""

from huissier.domain.services.i_balance_oracle import IBalanceOracle
from huissier.domain.services.i_role_notifier import IRoleNotifier
from huissier.domain.services.i_wallet_authenticator import IWalletAuthenticator
from huissier.domain.services.role_resolver import (
    DEFAULT_TIERS,
    RoleTier,
    RoleTiers,
    resolve_roles,
)

__all__ = [
    "IBalanceOracle",
    "IRoleNotifier",
    "IWalletAuthenticator",
    "DEFAULT_TIERS",
    "RoleTier",
    "RoleTiers",
    "resolve_roles",
]

"""Authentication infrastructure."""

from huissier.infrastructure.auth.solana_wallet_adapter import SolanaWalletAdapter

__all__ = ["SolanaWalletAdapter"]

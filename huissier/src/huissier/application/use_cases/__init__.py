"""Application use cases."""

from huissier.application.use_cases.verify_discord_wallet import (
    VerificationResult,
    VerifyDiscordWallet,
)

__all__ = ["VerificationResult", "VerifyDiscordWallet"]

"""
Verification API schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VerifyRequest(BaseModel):
    """
    Request to link a wallet to a Discord account.

    All fields are optional here; the use case rejects missing ones
    with "Missing fields".
    """

    model_config = ConfigDict(populate_by_name=True)

    discord_id: Optional[str] = Field(
        None,
        alias="discordId",
        max_length=32,
        description="Discord user ID",
    )
    wallet: Optional[str] = Field(
        None,
        max_length=64,
        description="Solana wallet address (base58)",
    )
    nonce: Optional[str] = Field(
        None,
        max_length=1024,
        description="Message signed by the wallet",
    )
    signature: Optional[str] = Field(
        None,
        max_length=128,
        description="Ed25519 signature over nonce (base58)",
    )


class VerifyResponse(BaseModel):
    """Structured verification outcome."""

    success: bool = Field(..., description="Roles were granted")
    message: str = Field(..., description="Human-readable outcome")

"""
Verification API routes.

Provides endpoint for wallet verification:
- POST /verify - Prove wallet ownership and grant Discord roles
"""

from fastapi import APIRouter, Depends, status

from huissier.application.use_cases.verify_discord_wallet import (
    VerifyDiscordWallet,
)
from huissier.di.dependencies import get_verify_discord_wallet
from huissier.presentation.schemas.verify_schemas import (
    VerifyRequest,
    VerifyResponse,
)

router = APIRouter(tags=["Verification"])


@router.post(
    "/verify",
    response_model=VerifyResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify wallet and assign roles",
    description=(
        "Verify an Ed25519 signature over a nonce, link the wallet to the "
        "Discord account and grant roles from the total token balance"
    ),
)
async def verify_wallet(
    request: VerifyRequest,
    use_case: VerifyDiscordWallet = Depends(get_verify_discord_wallet),
) -> VerifyResponse:
    """
    Verify wallet ownership and assign roles.

    Public endpoint: the signature itself is the authentication.

    Args:
        request: Verification request
        use_case: VerifyDiscordWallet use case (injected)

    Returns:
        success=True with roles and balance, or success=False for an
        invalid signature or zero balance

    Raises:
        ValidationError: 400 if fields are missing
        BalanceLookupError: 502 if the balance cannot be determined
        LedgerError: 503 if the ledger is unavailable
        LinkageConflictError: 409 if concurrent updates kept conflicting
    """
    result = await use_case.execute(
        discord_id=request.discord_id,
        wallet=request.wallet,
        nonce=request.nonce,
        signature=request.signature,
    )

    return VerifyResponse(success=result.success, message=result.message)

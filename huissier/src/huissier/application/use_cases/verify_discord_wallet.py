"""
Verify Discord Wallet use case.

Links a Discord account to a Solana wallet after proving wallet ownership,
recomputes the total token balance across every linked wallet and grants
cumulative tier roles.
"""

import asyncio
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from huissier.domain.entities.identity_link import IdentityLink
from huissier.domain.exceptions import LinkageConflictError, ValidationError
from huissier.domain.repositories.i_linkage_repository import ILinkageRepository
from huissier.domain.services.i_balance_oracle import IBalanceOracle
from huissier.domain.services.i_role_notifier import IRoleNotifier
from huissier.domain.services.i_wallet_authenticator import (
    IWalletAuthenticator,
)
from huissier.domain.services.role_resolver import (
    DEFAULT_TIERS,
    RoleTiers,
    resolve_roles,
)
from huissier.infrastructure.monitoring import metrics
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

INVALID_SIGNATURE_MESSAGE = "Invalid signature"
NO_TOKENS_MESSAGE = "No tokens detected"


@dataclass
class VerificationResult:
    """
    Result of a verification attempt.

    Attributes:
        success: Whether roles were (re)granted
        message: Human-readable outcome for the caller
        roles: Roles now assigned (empty on failure)
        total_balance: Aggregated balance across linked wallets
        wallets: Linked wallets after this verification
        already_linked: Submitted wallet was linked before this call
    """

    success: bool
    message: str
    roles: List[str] = field(default_factory=list)
    total_balance: Decimal = field(default=Decimal("0"))
    wallets: List[str] = field(default_factory=list)
    already_linked: bool = False


class VerifyDiscordWallet:
    """
    Verify wallet ownership and grant Discord roles.

    Business rules:
    - All of discord_id, wallet, nonce and signature are required
    - Signature must be valid before the ledger is touched
    - Linked wallets accumulate: existing wallets + submitted wallet
    - Balance is summed across every linked wallet; any lookup failure
      fails the whole verification
    - Zero total balance is rejected without persisting anything
    - Roles are fully recomputed from the total balance
    - Ledger write is compare-and-swap; a lost race restarts the cycle
    - Bot notification is fire-and-forget and never fails the request
    """

    def __init__(
        self,
        linkage_repository: ILinkageRepository,
        wallet_authenticator: IWalletAuthenticator,
        balance_oracle: IBalanceOracle,
        role_notifier: IRoleNotifier,
        role_tiers: RoleTiers = DEFAULT_TIERS,
        max_attempts: int = 3,
    ):
        """
        Initialize use case with dependencies.

        Args:
            linkage_repository: Account ledger
            wallet_authenticator: Service for signature verification
            balance_oracle: Service for token balance lookups
            role_notifier: Role-assignment bot notifier
            role_tiers: Tier table for role resolution
            max_attempts: Read-modify-write attempts on linkage conflicts
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.linkage_repository = linkage_repository
        self.wallet_authenticator = wallet_authenticator
        self.balance_oracle = balance_oracle
        self.role_notifier = role_notifier
        self.role_tiers = role_tiers
        self.max_attempts = max_attempts

    async def execute(
        self,
        discord_id: Optional[str],
        wallet: Optional[str],
        nonce: Optional[str],
        signature: Optional[str],
    ) -> VerificationResult:
        """
        Execute wallet verification.

        Args:
            discord_id: Discord user ID
            wallet: Wallet address claiming ownership (base58)
            nonce: Message the wallet signed
            signature: Signature over nonce (base58)

        Returns:
            VerificationResult (success or business-rule rejection)

        Raises:
            ValidationError: If any field is missing or empty
            BalanceLookupError: If any balance lookup fails
            LedgerError: If the ledger is unavailable
            LinkageConflictError: If concurrent updates exhausted attempts
        """
        start_time = time.time()
        try:
            result = await self._execute(discord_id, wallet, nonce, signature)
        except Exception as e:
            metrics.verifications_total.labels(
                outcome=type(e).__name__
            ).inc()
            raise
        finally:
            metrics.verification_duration_seconds.observe(time.time() - start_time)

        outcome = self._outcome(result)
        metrics.verifications_total.labels(outcome=outcome).inc()
        logger.info(
            f"Verification for Discord ID {discord_id} finished: {outcome}",
            extra={
                "discord_id": discord_id,
                "outcome": outcome,
                "wallet_count": len(result.wallets),
                "total_balance": result.total_balance,
            },
        )
        return result

    @staticmethod
    def _outcome(result: VerificationResult) -> str:
        if result.success:
            return "success"
        if result.message == INVALID_SIGNATURE_MESSAGE:
            return "invalid_signature"
        return "no_tokens"

    async def _execute(
        self,
        discord_id: Optional[str],
        wallet: Optional[str],
        nonce: Optional[str],
        signature: Optional[str],
    ) -> VerificationResult:
        # 1. Validate request fields
        self._validate_fields(
            discord_id=discord_id,
            wallet=wallet,
            nonce=nonce,
            signature=signature,
        )
        logger.info(
            f"Verification attempt for Discord ID {discord_id}",
            extra={"discord_id": discord_id, "wallet": wallet},
        )

        # 2. Verify signature (no ledger access before this succeeds)
        is_valid = await self.wallet_authenticator.verify_signature(
            wallet_address=wallet,
            message=nonce,
            signature=signature,
        )

        if not is_valid:
            logger.info(f"Invalid signature for Discord ID {discord_id}")
            return VerificationResult(
                success=False,
                message=INVALID_SIGNATURE_MESSAGE,
            )

        # 3-6. Load linkage, aggregate balance, resolve roles, persist
        attempt = 1
        while True:
            try:
                return await self._link(discord_id, wallet)
            except LinkageConflictError:
                metrics.linkage_conflicts_total.inc()
                logger.warning(
                    f"Linkage conflict for Discord ID {discord_id} "
                    f"(attempt {attempt}/{self.max_attempts})",
                    extra={"discord_id": discord_id, "attempt": attempt},
                )
                if attempt >= self.max_attempts:
                    raise
                attempt += 1

    async def _link(self, discord_id: str, wallet: str) -> VerificationResult:
        """Run one read-modify-write cycle of the ledger."""
        existing = await self.linkage_repository.get_linkage(discord_id)

        if existing:
            previous_wallets = list(existing.wallets)
            expected_version = existing.version
            already_linked = existing.has_wallet(wallet)
            candidate_wallets = existing.with_wallet(wallet)
        else:
            previous_wallets = []
            expected_version = None
            already_linked = False
            candidate_wallets = [wallet]

        total_balance = await self._aggregate_balance(candidate_wallets)
        logger.info(
            f"Discord ID {discord_id}: {len(candidate_wallets)} wallet(s), "
            f"total balance {total_balance}",
            extra={
                "discord_id": discord_id,
                "wallet_count": len(candidate_wallets),
                "total_balance": total_balance,
            },
        )

        if total_balance <= 0:
            return VerificationResult(
                success=False,
                message=NO_TOKENS_MESSAGE,
                total_balance=Decimal("0"),
                wallets=list(previous_wallets),
                already_linked=already_linked,
            )

        roles = resolve_roles(total_balance, self.role_tiers)

        link = await self.linkage_repository.upsert_linkage(
            discord_id=discord_id,
            new_wallet=wallet,
            resolved_wallets=candidate_wallets,
            total_balance=total_balance,
            roles=roles,
            expected_version=expected_version,
        )
        logger.info(
            f"Linkage stored for Discord ID {discord_id} "
            f"(version {link.version}, roles {roles})",
            extra={
                "discord_id": discord_id,
                "version": link.version,
                "roles": roles,
            },
        )

        # 7. Notify bot (not awaited, outcome does not gate the response)
        self.role_notifier.dispatch(discord_id, roles)

        return self._success(link, already_linked)

    async def _aggregate_balance(self, wallets: List[str]) -> Decimal:
        """Query every wallet concurrently and sum the balances."""
        balances = await asyncio.gather(
            *(self.balance_oracle.balance_of(address) for address in wallets)
        )
        for address, balance in zip(wallets, balances):
            logger.debug(
                f"Wallet {address} balance: {balance}",
                extra={"wallet": address, "balance": balance},
            )
        return sum(balances, Decimal("0"))

    @staticmethod
    def _success(link: IdentityLink, already_linked: bool) -> VerificationResult:
        prefix = (
            "Wallet already linked, roles refreshed!"
            if already_linked
            else "Verified! Role(s) assigned!"
        )
        message = (
            f"{prefix} Total balance: {link.total_balance}. "
            f"Roles: {', '.join(link.roles)}"
        )
        return VerificationResult(
            success=True,
            message=message,
            roles=list(link.roles),
            total_balance=link.total_balance,
            wallets=list(link.wallets),
            already_linked=already_linked,
        )

    @staticmethod
    def _validate_fields(**fields: Optional[str]) -> None:
        missing = [
            name
            for name, value in fields.items()
            if value is None or not str(value).strip()
        ]
        if missing:
            raise ValidationError(
                field=", ".join(missing),
                reason="Missing fields",
            )

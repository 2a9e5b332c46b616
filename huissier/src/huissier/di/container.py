"""
Dependency Injection Container for Huissier.

Manages all service instances and their dependencies.
"""

from typing import Optional

from huissier.application.use_cases.verify_discord_wallet import (
    VerifyDiscordWallet,
)
from huissier.config.settings import get_settings
from huissier.domain.repositories.i_linkage_repository import ILinkageRepository
from huissier.domain.services.i_balance_oracle import IBalanceOracle
from huissier.domain.services.i_role_notifier import IRoleNotifier
from huissier.domain.services.i_wallet_authenticator import (
    IWalletAuthenticator,
)
from huissier.domain.services.role_resolver import RoleTier, RoleTiers
from huissier.infrastructure.auth.solana_wallet_adapter import (
    SolanaWalletAdapter,
)
from huissier.infrastructure.blockchain.circuit_breaker import CircuitBreaker
from huissier.infrastructure.blockchain.solana_token_balance_oracle import (
    RPCTransportError,
    SolanaTokenBalanceOracle,
)
from huissier.infrastructure.notifications.webhook_role_notifier import (
    WebhookRoleNotifier,
)
from huissier.infrastructure.persistence.database import Database
from huissier.infrastructure.persistence.repositories.linkage_repository import (
    LinkageRepository,
)


class DIContainer:
    """
    Dependency Injection Container.

    Holds process-wide singletons (database pool, RPC session, webhook
    client), all safe for concurrent use and lazily created on first
    access.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Infrastructure
        self._database: Optional[Database] = None

        # Domain Services
        self._wallet_authenticator: Optional[IWalletAuthenticator] = None
        self._balance_oracle: Optional[IBalanceOracle] = None
        self._role_notifier: Optional[IRoleNotifier] = None
        self._role_tiers: Optional[RoleTiers] = None

        # Repositories
        self._linkage_repository: Optional[ILinkageRepository] = None

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        await self.database.connect()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._role_notifier:
            await self._role_notifier.aclose()

        if self._balance_oracle:
            await self._balance_oracle.close()

        if self._database:
            await self._database.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=get_settings().DATABASE_URL,
                echo=get_settings().DATABASE_ECHO,
            )
        return self._database

    # Domain Service Getters

    @property
    def wallet_authenticator(self) -> IWalletAuthenticator:
        """Get wallet authenticator instance."""
        if self._wallet_authenticator is None:
            self._wallet_authenticator = SolanaWalletAdapter()
        return self._wallet_authenticator

    @property
    def balance_oracle(self) -> IBalanceOracle:
        """Get token balance oracle instance."""
        if self._balance_oracle is None:
            settings = get_settings()
            self._balance_oracle = SolanaTokenBalanceOracle(
                rpc_url=settings.SOLANA_RPC_URL,
                token_mint=settings.TOKEN_MINT,
                commitment=settings.SOLANA_COMMITMENT,
                timeout=settings.RPC_TIMEOUT,
                max_retries=settings.RPC_MAX_RETRIES,
                circuit_breaker=CircuitBreaker(
                    name="solana_rpc",
                    failure_threshold=settings.CB_FAILURE_THRESHOLD,
                    recovery_timeout=settings.CB_RECOVERY_TIMEOUT,
                    expected_exceptions=(RPCTransportError,),
                ),
            )
        return self._balance_oracle

    @property
    def role_notifier(self) -> IRoleNotifier:
        """Get role-assignment bot notifier instance."""
        if self._role_notifier is None:
            self._role_notifier = WebhookRoleNotifier(
                webhook_url=get_settings().BOT_WEBHOOK_URL,
                timeout=get_settings().NOTIFIER_TIMEOUT,
            )
        return self._role_notifier

    @property
    def role_tiers(self) -> RoleTiers:
        """Get tier table built from configured Discord role IDs."""
        if self._role_tiers is None:
            settings = get_settings()
            self._role_tiers = RoleTiers(
                base_role=settings.ROLE_ANY,
                tiers=(
                    RoleTier(settings.TIER_1_THRESHOLD, settings.ROLE_1K),
                    RoleTier(settings.TIER_2_THRESHOLD, settings.ROLE_10K),
                    RoleTier(settings.TIER_3_THRESHOLD, settings.ROLE_100K),
                ),
            )
        return self._role_tiers

    # Repository Getters

    @property
    def linkage_repository(self) -> ILinkageRepository:
        """Get account ledger instance."""
        if self._linkage_repository is None:
            self._linkage_repository = LinkageRepository(self.database)
        return self._linkage_repository

    # Use Case Getters

    def get_verify_discord_wallet(self) -> VerifyDiscordWallet:
        """
        Get verify Discord wallet use case.

        Returns:
            VerifyDiscordWallet use case instance
        """
        return VerifyDiscordWallet(
            linkage_repository=self.linkage_repository,
            wallet_authenticator=self.wallet_authenticator,
            balance_oracle=self.balance_oracle,
            role_notifier=self.role_notifier,
            role_tiers=self.role_tiers,
            max_attempts=get_settings().LINK_MAX_ATTEMPTS,
        )


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop global container (for testing)."""
    global _container
    _container = None


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()

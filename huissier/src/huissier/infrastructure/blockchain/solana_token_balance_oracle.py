"""
Solana SPL token balance oracle.

Queries Solana JSON-RPC for every token account of one mint owned by a
wallet and sums their UI amounts. Hardened with a circuit breaker and
bounded retry for transport failures.
"""

import asyncio
import time
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import aiohttp

from huissier.domain.exceptions.blockchain import BalanceLookupError
from huissier.domain.services.i_balance_oracle import IBalanceOracle
from huissier.infrastructure.blockchain.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
)
from huissier.infrastructure.monitoring import metrics
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class RPCTransportError(Exception):
    """RPC endpoint unreachable or misbehaving after all retries."""


class SolanaTokenBalanceOracle(IBalanceOracle):
    """
    Token balance oracle backed by Solana JSON-RPC.

    Uses getTokenAccountsByOwner filtered by mint with jsonParsed
    encoding. Token accounts are not unique per owner and mint, so all
    returned accounts are summed. An empty result is a zero balance.
    """

    def __init__(
        self,
        rpc_url: str,
        token_mint: str,
        commitment: str = "confirmed",
        timeout: float = 15.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Initialize balance oracle.

        Args:
            rpc_url: Solana RPC endpoint
            token_mint: SPL token mint address (base58)
            commitment: Commitment level for queries
            timeout: Total request timeout in seconds
            max_retries: Max attempts for transport failures
            retry_delay: Initial backoff delay in seconds
            circuit_breaker: Optional circuit breaker instance
        """
        self.rpc_url = rpc_url
        self.token_mint = token_mint
        self.commitment = commitment
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            name="solana_rpc",
            expected_exceptions=(RPCTransportError,),
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create shared HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(limit=50, ttl_dns_cache=300),
            )
        return self._session

    async def balance_of(self, wallet_address: str) -> Decimal:
        """
        Get token balance held by wallet.

        Args:
            wallet_address: Solana wallet address (base58)

        Returns:
            Sum of UI amounts over all token accounts of the mint

        Raises:
            BalanceLookupError: If RPC fails or returns malformed data
        """
        start_time = time.time()
        try:
            result = await self.circuit_breaker.call(
                self._fetch_with_retry, wallet_address
            )
            balance = self._sum_token_accounts(wallet_address, result)
        except CircuitBreakerOpenError as e:
            metrics.balance_lookups_total.labels(status="circuit_open").inc()
            raise BalanceLookupError(wallet_address, str(e))
        except RPCTransportError as e:
            metrics.balance_lookups_total.labels(status="unavailable").inc()
            raise BalanceLookupError(wallet_address, str(e))
        except BalanceLookupError:
            metrics.balance_lookups_total.labels(status="error").inc()
            raise
        finally:
            metrics.balance_lookup_duration_seconds.observe(
                time.time() - start_time
            )

        metrics.balance_lookups_total.labels(status="success").inc()
        logger.debug(
            f"Token balance for {wallet_address}: {balance}",
            extra={
                "wallet": wallet_address,
                "balance": balance,
                "token_accounts": len(result["value"]),
            },
        )
        return balance

    async def _fetch_with_retry(self, wallet_address: str) -> Dict[str, Any]:
        """Call RPC, retrying transport failures with exponential backoff."""
        last_error: Optional[BaseException] = None

        for attempt in range(self.max_retries):
            try:
                return await self._fetch_token_accounts(wallet_address)

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning(
                    f"Token balance lookup failed for {wallet_address} "
                    f"(attempt {attempt + 1}/{self.max_retries}): "
                    f"{type(e).__name__}: {e}",
                    extra={"wallet": wallet_address, "attempt": attempt + 1},
                )

            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.retry_delay * (2**attempt))

        raise RPCTransportError(
            f"Solana RPC unavailable after {self.max_retries} attempts: "
            f"{type(last_error).__name__}: {last_error}"
        )

    async def _fetch_token_accounts(self, wallet_address: str) -> Dict[str, Any]:
        """Single getTokenAccountsByOwner call."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "getTokenAccountsByOwner",
            "params": [
                wallet_address,
                {"mint": self.token_mint},
                {"encoding": "jsonParsed", "commitment": self.commitment},
            ],
        }

        session = await self._get_session()
        async with session.post(self.rpc_url, json=payload) as response:
            response.raise_for_status()
            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                raise BalanceLookupError(
                    wallet_address, f"Malformed RPC response: {e}"
                ) from e

        if not isinstance(data, dict):
            raise BalanceLookupError(wallet_address, "Malformed RPC response")

        # RPC-level errors (invalid params, unknown owner) are not retried
        if "error" in data:
            error = data["error"]
            reason = error.get("message") if isinstance(error, dict) else error
            raise BalanceLookupError(wallet_address, f"RPC error: {reason}")

        result = data.get("result")
        if not isinstance(result, dict) or not isinstance(result.get("value"), list):
            raise BalanceLookupError(
                wallet_address, "Malformed RPC response: no token account list"
            )

        return result

    def _sum_token_accounts(
        self, wallet_address: str, result: Dict[str, Any]
    ) -> Decimal:
        """Sum UI-scaled amounts of all returned token accounts."""
        accounts: List[Dict[str, Any]] = result["value"]

        total = Decimal("0")
        for account in accounts:
            total += self._ui_amount(wallet_address, account)
        return total

    @staticmethod
    def _ui_amount(wallet_address: str, account: Dict[str, Any]) -> Decimal:
        """Extract UI amount from a jsonParsed token account."""
        try:
            token_amount = account["account"]["data"]["parsed"]["info"][
                "tokenAmount"
            ]

            if token_amount.get("uiAmountString") is not None:
                return Decimal(token_amount["uiAmountString"])

            if token_amount.get("uiAmount") is not None:
                return Decimal(str(token_amount["uiAmount"]))

            return Decimal(token_amount["amount"]).scaleb(
                -int(token_amount["decimals"])
            )

        except (
            KeyError,
            TypeError,
            ValueError,
            AttributeError,
            InvalidOperation,
        ) as e:
            raise BalanceLookupError(
                wallet_address, f"Malformed token account data: {e}"
            )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

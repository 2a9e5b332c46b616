"""
Blockchain infrastructure components.
"""

from huissier.infrastructure.blockchain.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)
from huissier.infrastructure.blockchain.solana_token_balance_oracle import (
    RPCTransportError,
    SolanaTokenBalanceOracle,
)

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerOpenError",
    "CircuitState",
    "RPCTransportError",
    "SolanaTokenBalanceOracle",
]

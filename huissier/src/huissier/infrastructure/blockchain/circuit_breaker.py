"""
Circuit breaker for the Solana RPC dependency.
"""

import asyncio
import time
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests
    HALF_OPEN = "half_open"  # Testing if service recovered


class CircuitBreakerOpenError(Exception):
    """Raised when a call is rejected because the circuit is open."""


class CircuitBreaker:
    """
    Circuit breaker for external service calls.

    Counts consecutive failures and stops calling the service once the
    threshold is reached. After recovery_timeout a single trial call is
    let through (half-open); its outcome closes or re-opens the circuit.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        expected_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        """
        Initialize circuit breaker.

        Args:
            name: Protected service name (for error messages)
            failure_threshold: Consecutive failures before opening circuit
            recovery_timeout: Seconds to wait before a trial call
            expected_exceptions: Exception types that count as failure
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exceptions = expected_exceptions

        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._state = CircuitState.CLOSED
        self._lock = asyncio.Lock()
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        """Get current circuit state."""
        return self._state

    @property
    def failure_count(self) -> int:
        """Get current consecutive failure count."""
        return self._failure_count

    async def call(
        self, func: Callable[..., Awaitable[T]], *args, **kwargs
    ) -> T:
        """
        Execute coroutine function with circuit breaker protection.

        Raises:
            CircuitBreakerOpenError: If circuit is open, or half-open with
                a trial call already running
            Exception: Original exception from function
        """
        trial = False
        async with self._lock:
            if self._state == CircuitState.OPEN:
                if self._should_attempt_reset():
                    self._state = CircuitState.HALF_OPEN
                else:
                    raise CircuitBreakerOpenError(
                        f"Circuit breaker '{self.name}' is OPEN "
                        f"({self._failure_count} consecutive failures)"
                    )
            if self._state == CircuitState.HALF_OPEN:
                if self._trial_in_flight:
                    raise CircuitBreakerOpenError(
                        f"Circuit breaker '{self.name}' is HALF_OPEN "
                        "(trial call in progress)"
                    )
                self._trial_in_flight = True
                trial = True

        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions:
            await self._on_failure()
            raise
        else:
            await self._on_success()
        finally:
            if trial:
                self._trial_in_flight = False

        return result

    async def _on_success(self) -> None:
        async with self._lock:
            self._failure_count = 0
            self._opened_at = None
            self._state = CircuitState.CLOSED

    async def _on_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            if (
                self._state == CircuitState.HALF_OPEN
                or self._failure_count >= self.failure_threshold
            ):
                self._state = CircuitState.OPEN
                self._opened_at = time.monotonic()

    def _should_attempt_reset(self) -> bool:
        if self._opened_at is None:
            return False
        return (time.monotonic() - self._opened_at) >= self.recovery_timeout

    async def reset(self) -> None:
        """Manually reset circuit breaker to CLOSED state."""
        async with self._lock:
            self._failure_count = 0
            self._opened_at = None
            self._state = CircuitState.CLOSED
            self._trial_in_flight = False

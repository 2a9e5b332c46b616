"""
Account ledger exceptions.
"""

from huissier.domain.exceptions.base import HuissierException


class LedgerError(HuissierException):
    """Raised when the linkage store cannot be read or written."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Ledger {operation} failed: {reason}",
            code="LEDGER_UNAVAILABLE",
        )
        self.operation = operation


class LinkageConflictError(HuissierException):
    """
    Raised when a linkage changed between read and write.

    Signals a lost compare-and-swap: another verification for the same
    Discord ID committed first.
    """

    def __init__(self, discord_id: str, expected_version: int | None):
        super().__init__(
            f"Linkage for {discord_id} was modified concurrently "
            f"(expected version {expected_version})",
            code="LINKAGE_CONFLICT",
        )
        self.discord_id = discord_id
        self.expected_version = expected_version

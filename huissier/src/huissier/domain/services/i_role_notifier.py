"""
Role notifier service interface.
"""

from abc import ABC, abstractmethod
from typing import List


class IRoleNotifier(ABC):
    """
    Abstract service interface for notifying the role-assignment bot.

    Delivery is best-effort and at most once: the downstream
    bot must treat each event as "assign exactly this role set".
    """

    @abstractmethod
    async def notify(self, discord_id: str, roles: List[str]) -> None:
        """
        Send role assignment event.

        Failures are logged and swallowed, never raised.

        Args:
            discord_id: Discord user ID
            roles: Complete role set that should now apply
        """

    @abstractmethod
    def dispatch(self, discord_id: str, roles: List[str]) -> None:
        """
        Schedule notify() without awaiting it.

        Args:
            discord_id: Discord user ID
            roles: Complete role set that should now apply
        """

    async def aclose(self) -> None:
        """Drain pending notifications and release resources."""

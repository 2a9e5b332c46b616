"""
Webhook role notifier.

Posts role assignment events to the Discord bot webhook. Best-effort:
a lost notification is logged, never surfaced to the caller.
"""

import asyncio
from typing import List, Optional, Set

import httpx

from huissier.domain.services.i_role_notifier import IRoleNotifier
from huissier.infrastructure.monitoring import metrics
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

ASSIGN_ROLES_EVENT = "assignRoles"


class WebhookRoleNotifier(IRoleNotifier):
    """
    HTTP webhook notifier for the role-assignment bot.

    Attributes:
        webhook_url: Bot webhook URL (None disables notifications)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        webhook_url: Optional[str],
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize notifier.

        Args:
            webhook_url: Bot webhook URL
            timeout: Request timeout in seconds
            client: Optional preconfigured HTTP client
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._client = client
        self._pending: Set[asyncio.Task] = set()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._client

    @property
    def pending(self) -> int:
        """Number of notifications still in flight."""
        return len(self._pending)

    async def notify(self, discord_id: str, roles: List[str]) -> None:
        """
        Post role assignment event to the bot webhook.

        Args:
            discord_id: Discord user ID
            roles: Complete role set that should now apply
        """
        if not self.webhook_url:
            metrics.notifications_total.labels(status="skipped").inc()
            logger.warning(
                f"BOT_WEBHOOK_URL not configured, skipping role "
                f"notification for Discord ID {discord_id}",
                extra={"discord_id": discord_id, "status": "skipped"},
            )
            return

        event = {
            "type": ASSIGN_ROLES_EVENT,
            "discordId": discord_id,
            "roles": list(roles),
        }

        log_fields = {"discord_id": discord_id, "roles": list(roles)}

        try:
            logger.info(
                f"Posting to bot webhook: {discord_id} {roles}", extra=log_fields
            )
            response = await self.client.post(
                self.webhook_url, json=event, timeout=self.timeout
            )
            response.raise_for_status()

        except httpx.TimeoutException:
            metrics.notifications_total.labels(status="timeout").inc()
            logger.error(
                f"Bot webhook timed out after {self.timeout}s "
                f"for Discord ID {discord_id}",
                extra={**log_fields, "status": "timeout"},
            )
            return

        except httpx.HTTPStatusError as e:
            metrics.notifications_total.labels(status="rejected").inc()
            logger.error(
                f"Bot webhook rejected event for Discord ID {discord_id}: "
                f"HTTP {e.response.status_code}",
                extra={
                    **log_fields,
                    "status": "rejected",
                    "http_status": e.response.status_code,
                },
            )
            return

        except Exception as e:
            metrics.notifications_total.labels(status="error").inc()
            logger.error(
                f"Failed to post to bot webhook for Discord ID "
                f"{discord_id}: {type(e).__name__}: {e}",
                extra={**log_fields, "status": "error"},
            )
            return

        metrics.notifications_total.labels(status="delivered").inc()
        logger.debug(
            f"Role notification delivered for Discord ID {discord_id}",
            extra={**log_fields, "status": "delivered"},
        )

    def dispatch(self, discord_id: str, roles: List[str]) -> None:
        """
        Schedule notify() in the background.

        The task is referenced until it completes so it cannot be
        garbage collected mid-flight.

        Args:
            discord_id: Discord user ID
            roles: Complete role set that should now apply
        """
        task = asyncio.get_running_loop().create_task(
            self.notify(discord_id, list(roles)),
            name=f"notify-roles-{discord_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning(f"Role notification {task.get_name()} cancelled")
            return

        error = task.exception()
        if error is not None:
            metrics.notifications_total.labels(status="error").inc()
            logger.error(
                f"Role notification {task.get_name()} failed: {error}",
                exc_info=error,
            )

    async def drain(self, timeout: float = 10.0) -> None:
        """
        Wait for in-flight notifications.

        Args:
            timeout: Max seconds to wait before cancelling the rest
        """
        if not self._pending:
            return

        pending = list(self._pending)
        _, not_done = await asyncio.wait(pending, timeout=timeout)
        for task in not_done:
            task.cancel()
        if not_done:
            await asyncio.gather(*not_done, return_exceptions=True)

    async def aclose(self) -> None:
        """Drain pending notifications and close HTTP client."""
        await self.drain()
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

"""Notification infrastructure."""

from huissier.infrastructure.notifications.webhook_role_notifier import (
    WebhookRoleNotifier,
)

__all__ = ["WebhookRoleNotifier"]

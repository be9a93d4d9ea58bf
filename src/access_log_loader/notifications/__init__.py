"""Notification channel for transfer status messages."""

from .base import NotificationError, Notifier, NullNotifier
from .discord import DiscordWebhookNotifier
from .reporter import Reporter, format_failed_entries

__all__ = [
    "Notifier",
    "NullNotifier",
    "NotificationError",
    "DiscordWebhookNotifier",
    "Reporter",
    "format_failed_entries",
]

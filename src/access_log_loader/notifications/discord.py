"""
Discord webhook notifier.

Posts plain-text messages to a Discord channel through an incoming webhook.
"""

import logging
from typing import Optional

import httpx

from ..config.constants import MAX_MESSAGE_LENGTH
from .base import NotificationError, Notifier

logger = logging.getLogger(__name__)


class DiscordWebhookNotifier(Notifier):
    """Notifier posting to a Discord webhook URL."""

    def __init__(
        self,
        webhook_url: str,
        client: Optional[httpx.AsyncClient] = None,
        username: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Args:
            webhook_url: Full webhook URL
                (https://discord.com/api/webhooks/<id>/<token>)
            client: Shared httpx client. If omitted the notifier creates
                one on first use and closes it in close().
            username: Optional display name overriding the webhook's default
            timeout: Request timeout in seconds for the notifier's own client
        """
        if not webhook_url:
            raise ValueError("webhook_url is required")
        self.webhook_url = webhook_url
        self.username = username
        self._timeout = timeout
        self._external_client = client
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._external_client is not None:
            return self._external_client
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def announce(self, message: str) -> None:
        payload = {"content": message[:MAX_MESSAGE_LENGTH]}
        if self.username:
            payload["username"] = self.username

        try:
            response = await self._get_client().post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"Discord webhook request failed: {e}") from e

        if response.status_code >= 400:
            raise NotificationError(
                f"Discord webhook returned HTTP {response.status_code}: "
                f"{response.text[:200]}"
            )

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

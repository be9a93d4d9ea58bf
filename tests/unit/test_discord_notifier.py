"""
Unit tests for the Discord webhook notifier.

Requests go through an httpx client backed by httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from access_log_loader.notifications import DiscordWebhookNotifier, NotificationError

WEBHOOK_URL = "https://discord.com/api/webhooks/123/token"


def announce(notifier, message):
    """Deliver one message, closing the mock client afterwards."""

    async def _run():
        try:
            await notifier.announce(message)
        finally:
            await notifier._external_client.aclose()

    asyncio.run(_run())


def make_notifier(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DiscordWebhookNotifier(WEBHOOK_URL, client=client, **kwargs)


class TestDiscordWebhookNotifier:
    """Tests for DiscordWebhookNotifier."""

    def test_posts_content(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(204)

        announce(make_notifier(handler), "Log transfer started.")

        assert len(requests) == 1
        assert str(requests[0].url) == WEBHOOK_URL
        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {"content": "Log transfer started."}

    def test_truncates_content(self):
        payloads = []

        def handler(request):
            payloads.append(json.loads(request.content))
            return httpx.Response(204)

        announce(make_notifier(handler), "x" * 3000)

        assert payloads[0]["content"] == "x" * 2000

    def test_username(self):
        payloads = []

        def handler(request):
            payloads.append(json.loads(request.content))
            return httpx.Response(204)

        announce(make_notifier(handler, username="logs"), "hello")

        assert payloads[0] == {"content": "hello", "username": "logs"}

    def test_http_error(self):
        def handler(request):
            return httpx.Response(404, text="Unknown Webhook")

        with pytest.raises(NotificationError, match="HTTP 404: Unknown Webhook"):
            announce(make_notifier(handler), "hello")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NotificationError, match="request failed"):
            announce(make_notifier(handler), "hello")

    def test_shared_client_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        notifier = DiscordWebhookNotifier(WEBHOOK_URL, client=client)

        async def _run():
            await notifier.close()
            closed = client.is_closed
            await client.aclose()
            return closed

        assert asyncio.run(_run()) is False

    def test_empty_url_rejected(self):
        with pytest.raises(ValueError):
            DiscordWebhookNotifier("")

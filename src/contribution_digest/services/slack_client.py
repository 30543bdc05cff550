"""Slack incoming webhook client."""

import logging
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contribution_digest.config import Config, get_config
from contribution_digest.exceptions import SlackDeliveryError

logger = logging.getLogger(__name__)


class SlackWebhookClient:
    """Async client posting messages to a Slack incoming webhook."""

    def __init__(self, config: Config | None = None):
        self.config = config or get_config()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": "contribution-digest/0.1.0"},
                timeout=self.config.request_timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "SlackWebhookClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def build_payload(self, text: str) -> dict[str, Any]:
        """Build the webhook payload around a rendered message."""
        return {
            "text": text,
            "username": self.config.slack_username,
            "channel": self.config.slack_channel,
            "icon_emoji": self.config.slack_icon,
            "unfurl_links": False,
        }

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
    )
    async def send_message(self, text: str) -> None:
        """Post a message to the configured webhook.

        Args:
            text: Message body, sent verbatim

        Raises:
            SlackDeliveryError: If no webhook is configured or Slack rejects the message
        """
        if not self.config.slack_hook_url:
            raise SlackDeliveryError("Slack webhook URL is not configured")

        client = await self._get_client()
        response = await client.post(self.config.slack_hook_url, json=self.build_payload(text))

        if not response.is_success:
            raise SlackDeliveryError(
                f"Slack webhook returned {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info("Delivered digest to %s", self.config.slack_channel)

# =============================================================================
# lib/webhook_client.py - Automation Webhook Client
# =============================================================================
# Posts a field mapping as JSON to a Zapier catch hook (or any URL that
# accepts the same shape). No authentication; the URL itself is the secret.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class WebhookClientError(Exception):
    """Raised when a webhook call fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WebhookClient:
    """Async client for one webhook URL."""

    def __init__(self, http: httpx.AsyncClient, url: str, timeout: float = 10.0):
        self._http = http
        self.url = url
        self._timeout = timeout

    async def notify(self, payload: dict[str, Any]) -> None:
        """
        POST the payload as the JSON request body.

        Raises:
            WebhookClientError: On transport failure or non-2xx response
        """
        try:
            response = await self._http.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise WebhookClientError(f"Webhook request failed: {e!r}") from e

        if not response.is_success:
            raise WebhookClientError(
                f"Webhook returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

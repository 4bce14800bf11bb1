# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeUpstream: an in-memory Airtable table plus Zapier hooks behind an
#   httpx.MockTransport, recording every outbound request in order
# =============================================================================

import asyncio
import json
import os
from typing import Any, Callable
from urllib.parse import unquote

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

AIRTABLE_ENDPOINT = "https://api.airtable.test/v0/appTest/Subscribers"
AIRTABLE_API_KEY = "test-airtable-key"
SUBSCRIBE_HOOK = "https://hooks.zapier.test/hooks/catch/1/subscribe"
UNSUBSCRIBE_HOOK = "https://hooks.zapier.test/hooks/catch/1/unsubscribe"

os.environ.setdefault("AIRTABLE_API_KEY", AIRTABLE_API_KEY)
os.environ.setdefault("AIRTABLE_ENDPOINT", AIRTABLE_ENDPOINT)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import pytest

from app.config import Settings
from core.models.relay import RelayConfig


# =============================================================================
# Fake Upstream
# =============================================================================

class FakeUpstream:
    """
    In-memory stand-in for Airtable and the Zapier hooks.

    - records: id -> fields currently stored
    - requests: every request received, in arrival order
    - failures: (method, url) -> HTTP status or exception to raise
    - hooks: (method, url) -> async callable run before answering, used to
      hold a request open until another one arrives
    """

    def __init__(self):
        self.records: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], Any] = {}
        self.hooks: dict[tuple[str, str], Callable] = {}
        self._next_id = 0

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str | None = None, url: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if (method is None or r.method == method)
            and (url is None or str(r.url) == url)
        ]

    def json_body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, str(request.url))

        hook = self.hooks.get(key)
        if hook is not None:
            await hook()

        failure = self.failures.get(key)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return httpx.Response(failure, json={"error": {"type": "SIMULATED"}})

        url = str(request.url)
        if url in (SUBSCRIBE_HOOK, UNSUBSCRIBE_HOOK):
            return httpx.Response(200, json={"status": "success"})

        if url == AIRTABLE_ENDPOINT and request.method == "POST":
            return self._create(request)

        if url.startswith(AIRTABLE_ENDPOINT + "/"):
            record_id = unquote(url[len(AIRTABLE_ENDPOINT) + 1:])
            if record_id not in self.records:
                return httpx.Response(404, json={"error": "NOT_FOUND"})
            if request.method == "GET":
                return httpx.Response(200, json={
                    "id": record_id,
                    "createdTime": "2024-01-15T10:30:00.000Z",
                    "fields": self.records[record_id],
                })
            if request.method == "DELETE":
                del self.records[record_id]
                return httpx.Response(200, json={"id": record_id, "deleted": True})

        return httpx.Response(404, json={"error": "NOT_FOUND"})

    def _create(self, request: httpx.Request) -> httpx.Response:
        body = self.json_body(request)
        created = []
        for record in body["records"]:
            self._next_id += 1
            record_id = f"rec{self._next_id:03d}"
            self.records[record_id] = record["fields"]
            created.append({
                "id": record_id,
                "createdTime": "2024-01-15T10:30:00.000Z",
                "fields": record["fields"],
            })
        return httpx.Response(200, json={"records": created})

    def store(self, record_id: str, fields: dict[str, Any]) -> None:
        self.records[record_id] = fields


def wait_for_request(upstream: FakeUpstream, method: str, url: str) -> Callable:
    """
    Build a hook that blocks until upstream has received (method, url).

    Fails with TimeoutError if the other request never arrives, which is
    what happens when calls are made one after another.
    """
    async def hook():
        async def arrived():
            while not upstream.calls(method, url):
                await asyncio.sleep(0.005)
        await asyncio.wait_for(arrived(), timeout=1.0)
    return hook


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def upstream():
    """Fresh fake Airtable table and Zapier hooks."""
    return FakeUpstream()


@pytest.fixture
def relay_config():
    """RelayConfig with both webhooks configured."""
    return RelayConfig(
        data_store_endpoint=AIRTABLE_ENDPOINT,
        data_store_api_key=AIRTABLE_API_KEY,
        subscribe_webhook_url=SUBSCRIBE_HOOK,
        unsubscribe_webhook_url=UNSUBSCRIBE_HOOK,
        timeout_seconds=5.0,
    )


@pytest.fixture
def data_store_only_config():
    """RelayConfig with no webhooks (Airtable only)."""
    return RelayConfig(
        data_store_endpoint=AIRTABLE_ENDPOINT,
        data_store_api_key=AIRTABLE_API_KEY,
        timeout_seconds=5.0,
    )


@pytest.fixture
def test_settings():
    """Settings with both webhooks configured, ignoring any .env file."""
    return Settings(
        _env_file=None,
        AIRTABLE_API_KEY=AIRTABLE_API_KEY,
        AIRTABLE_ENDPOINT=AIRTABLE_ENDPOINT,
        ZAPIER_ENDPOINT_SUBSCRIBE=SUBSCRIBE_HOOK,
        ZAPIER_ENDPOINT_UNSUBSCRIBE=UNSUBSCRIBE_HOOK,
    )


@pytest.fixture
def sample_submission():
    """Sample newsletter form submission."""
    return {"email": "a@b.com", "name": "Ada Lovelace", "source": "footer"}

# =============================================================================
# lib/ - Upstream HTTP Clients
# =============================================================================
# This package contains the clients for the services the relay talks to:
# - airtable_client.py: Airtable records API (create, fetch, delete)
# - webhook_client.py: Zapier catch hooks (JSON POST)
#
# Both take a shared httpx.AsyncClient and can be tested in isolation.
# =============================================================================

from lib.airtable_client import AirtableClient, AirtableClientError
from lib.webhook_client import WebhookClient, WebhookClientError

__all__ = [
    # Airtable
    "AirtableClient",
    "AirtableClientError",
    # Webhooks
    "WebhookClient",
    "WebhookClientError",
]

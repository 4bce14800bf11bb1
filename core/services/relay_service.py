# =============================================================================
# core/services/relay_service.py - Subscribe/Unsubscribe Relay Logic
# =============================================================================
# Forwards form submissions to Airtable (system of record) and to Zapier
# webhooks (side notifications).
#
# subscribe:    create record  ||  notify webhook             -> join
# unsubscribe:  fetch record  ->  delete record || notify     -> join
#
# Calls joined with asyncio.gather always run to completion; one failing
# never cancels the other. Airtable failures are raised, webhook failures are
# logged and reported in the result.
# =============================================================================

import asyncio
import logging
from typing import Any, Awaitable

import httpx

from app.exceptions import DataStoreError, RecordNotFoundError
from core.models.relay import (
    RecordReference,
    RelayConfig,
    Submission,
    SubscribeResult,
    UnsubscribeResult,
)
from lib.airtable_client import AirtableClient, AirtableClientError
from lib.webhook_client import WebhookClient, WebhookClientError

logger = logging.getLogger(__name__)


async def _skip() -> None:
    return None


class RelayService:
    """
    Service for the subscribe/unsubscribe relay.

    Built once at startup from a RelayConfig and a shared httpx.AsyncClient.
    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(self, config: RelayConfig, http: httpx.AsyncClient):
        self.config = config
        self.data_store = AirtableClient(
            http,
            endpoint=config.data_store_endpoint,
            api_key=config.data_store_api_key,
            timeout=config.timeout_seconds,
        )
        self.subscribe_webhook = (
            WebhookClient(http, config.subscribe_webhook_url, config.timeout_seconds)
            if config.subscribe_webhook_url
            else None
        )
        self.unsubscribe_webhook = (
            WebhookClient(http, config.unsubscribe_webhook_url, config.timeout_seconds)
            if config.unsubscribe_webhook_url
            else None
        )

    @staticmethod
    def _notify(webhook: WebhookClient | None, payload: dict[str, Any]) -> Awaitable[None]:
        if webhook is None:
            return _skip()
        return webhook.notify(payload)

    @staticmethod
    def _webhook_outcome(
        webhook: WebhookClient | None,
        outcome: Any,
        event: str,
    ) -> tuple[bool, str | None]:
        """Log a webhook failure and report (notified, error)."""
        if webhook is None:
            return False, None

        if isinstance(outcome, BaseException):
            if not isinstance(outcome, WebhookClientError):
                raise outcome
            logger.warning(f"{event} webhook failed, continuing: {outcome}")
            return False, str(outcome)

        return True, None

    async def subscribe(self, submission: Submission) -> SubscribeResult:
        """
        Store a submission and notify the subscribe webhook.

        Both calls are issued before either is awaited. The submission is
        forwarded unmodified; repeating it creates another record.

        Args:
            submission: Form fields from the request body

        Returns:
            SubscribeResult with the created record ids and webhook outcome

        Raises:
            DataStoreError: If Airtable failed or rejected the record
        """
        created, notified = await asyncio.gather(
            self.data_store.create_record(submission),
            self._notify(self.subscribe_webhook, submission),
            return_exceptions=True,
        )

        webhook_notified, webhook_error = self._webhook_outcome(
            self.subscribe_webhook, notified, "Subscribe"
        )

        if isinstance(created, BaseException):
            if not isinstance(created, AirtableClientError):
                raise created
            logger.error(f"Failed to store submission: {created}")
            raise DataStoreError("create", created.message, created.status_code) from created

        record_ids = [r.get("id") for r in created.get("records", []) if r.get("id")]
        logger.info(f"Stored submission as record(s): {record_ids}")

        return SubscribeResult(
            record_ids=record_ids,
            webhook_notified=webhook_notified,
            webhook_error=webhook_error,
        )

    async def unsubscribe(self, record_id: RecordReference) -> UnsubscribeResult:
        """
        Remove a stored record and forward its fields to the unsubscribe webhook.

        The fetch completes before anything else, since the webhook needs the
        record's fields. Delete and notify then run concurrently.

        Args:
            record_id: Airtable record id from the unsubscribe link

        Returns:
            UnsubscribeResult with the redirect location and webhook outcome

        Raises:
            RecordNotFoundError: If no usable record exists under record_id
            DataStoreError: If Airtable failed on fetch or delete
        """
        try:
            record = await self.data_store.fetch_record(record_id)
        except AirtableClientError as e:
            logger.error(f"Failed to fetch record {record_id}: {e}")
            raise DataStoreError("fetch", e.message, e.status_code) from e

        if record is None:
            raise RecordNotFoundError(record_id)

        deleted, notified = await asyncio.gather(
            self.data_store.delete_record(record_id),
            self._notify(self.unsubscribe_webhook, record.fields),
            return_exceptions=True,
        )

        webhook_notified, webhook_error = self._webhook_outcome(
            self.unsubscribe_webhook, notified, "Unsubscribe"
        )

        if isinstance(deleted, BaseException):
            if not isinstance(deleted, AirtableClientError):
                raise deleted
            logger.error(f"Failed to delete record {record_id}: {deleted}")
            raise DataStoreError("delete", deleted.message, deleted.status_code) from deleted

        logger.info(f"Unsubscribed record: {record_id}")

        return UnsubscribeResult(
            record_id=record_id,
            redirect_url=self.config.unsubscribe_redirect_url,
            webhook_notified=webhook_notified,
            webhook_error=webhook_error,
        )

# =============================================================================
# lib/airtable_client.py - Airtable REST Client
# =============================================================================
# Thin async wrapper around the three Airtable calls the relay makes:
# - create_record: POST {endpoint}            body {"records": [{"fields": ...}]}
# - fetch_record:  GET {endpoint}/{id}
# - delete_record: DELETE {endpoint}/{id}
#
# Every call is authenticated with the bearer token and bounded by a timeout.
# Failures surface as AirtableClientError; a missing record on fetch is a
# normal None result, not an error.
#
# Usage:
#   client = AirtableClient(http, endpoint, api_key, timeout=10.0)
#   created = await client.create_record({"email": "a@b.com"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from core.models.relay import Record, RecordReference, Submission

# Set up logging for this module
logger = logging.getLogger(__name__)


class AirtableClientError(Exception):
    """
    Error during Airtable operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRTABLE_ERROR",
        status_code: int | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class AirtableClient:
    """
    Async client for a single Airtable table.

    The httpx.AsyncClient is shared and owned by the caller; this class never
    closes it.

    Example:
        client = AirtableClient(http, "https://api.airtable.com/v0/app123/Subscribers", "key")
        record = await client.fetch_record("rec123")
        if record is not None:
            await client.delete_record(record.id)
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        endpoint: str,
        api_key: str,
        timeout: float = 10.0,
    ):
        self._http = http
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _headers(self, json_body: bool = False) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def record_url(self, record_id: RecordReference) -> str:
        """URL of one record. The id is quoted as a single path segment."""
        return f"{self._endpoint}/{quote(record_id, safe='')}"

    async def _send(
        self,
        method: str,
        url: str,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request, turning transport failures into AirtableClientError."""
        try:
            return await self._http.request(method, url, timeout=self._timeout, **kwargs)
        except httpx.TimeoutException as e:
            raise AirtableClientError(
                message=f"Airtable {operation} timed out after {self._timeout}s",
                code="AIRTABLE_TIMEOUT",
                suggestion="Check Airtable status or raise HTTP_TIMEOUT_SECONDS",
                details={"operation": operation, "error": str(e)},
            ) from e
        except httpx.HTTPError as e:
            raise AirtableClientError(
                message=f"Airtable {operation} failed: {e}",
                code="AIRTABLE_UNREACHABLE",
                suggestion="Check AIRTABLE_ENDPOINT and network connectivity",
                details={"operation": operation, "error": str(e)},
            ) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return

        suggestion = None
        if response.status_code in (401, 403):
            suggestion = "Check AIRTABLE_API_KEY and its access to the base"
        elif response.status_code == 422:
            suggestion = "Check that submitted field names exist in the table"

        raise AirtableClientError(
            message=f"Airtable {operation} returned HTTP {response.status_code}",
            code="AIRTABLE_HTTP_ERROR",
            status_code=response.status_code,
            suggestion=suggestion,
            details={"operation": operation, "body": response.text[:500]},
        )

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    async def create_record(self, fields: Submission) -> dict[str, Any]:
        """
        Store a submission as a new record.

        Args:
            fields: Submission mapping, sent unmodified

        Returns:
            Parsed Airtable response ({"records": [...]})

        Raises:
            AirtableClientError: On transport failure or non-2xx response
        """
        response = await self._send(
            "POST",
            self._endpoint,
            "create",
            headers=self._headers(json_body=True),
            json={"records": [{"fields": fields}]},
        )
        self._raise_for_status(response, "create")

        try:
            body = response.json()
        except ValueError:
            body = {}

        logger.debug(f"Created {len(body.get('records', []))} Airtable record(s)")
        return body

    async def fetch_record(self, record_id: RecordReference) -> Record | None:
        """
        Read one record.

        Returns:
            The Record, or None if Airtable has no usable record under that id

        Raises:
            AirtableClientError: On transport failure or non-2xx other than 404
        """
        response = await self._send(
            "GET",
            self.record_url(record_id),
            "fetch",
            headers=self._headers(),
        )

        if response.status_code == 404:
            logger.info(f"Airtable record not found: {record_id}")
            return None
        self._raise_for_status(response, "fetch")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        return Record.from_api(payload, record_id)

    async def delete_record(self, record_id: RecordReference) -> None:
        """
        Delete one record.

        Raises:
            AirtableClientError: On transport failure or non-2xx response
        """
        response = await self._send(
            "DELETE",
            self.record_url(record_id),
            "delete",
            headers=self._headers(),
        )
        self._raise_for_status(response, "delete")
        logger.debug(f"Deleted Airtable record: {record_id}")

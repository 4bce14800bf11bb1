# =============================================================================
# core/models/relay.py - Relay Schemas
# =============================================================================
# These models describe what flows through the subscribe/unsubscribe relay:
# - Submission: the form fields posted by the site, forwarded verbatim
# - RecordReference: the Airtable record id used by unsubscribe links
# - Record: an Airtable record as returned by GET /{id}
# - RelayConfig: endpoints and credentials, built once at startup
# - SubscribeResult / UnsubscribeResult: outcome reported to the routers
#
# The relay never edits a Submission. Airtable owns the schema.
# =============================================================================

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Opaque mapping of form field name to value
Submission = dict[str, Any]

# Opaque Airtable record id, e.g. "recXXXXXXXXXXXXXX"
RecordReference = str


class Record(BaseModel):
    """
    An Airtable record.

    Example:
        {
            "id": "rec123",
            "createdTime": "2024-01-15T10:30:00.000Z",
            "fields": {"email": "a@b.com", "name": "Ada"}
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Airtable record id")
    fields: dict[str, Any] = Field(
        default_factory=dict,
        description="The submission that was stored"
    )
    created_time: str | None = Field(
        default=None,
        alias="createdTime",
        description="Creation timestamp reported by Airtable"
    )

    @classmethod
    def from_api(cls, payload: Any, record_id: RecordReference) -> "Record | None":
        """
        Build a Record from a GET response body.

        Returns None when the body carries no usable ``fields`` mapping,
        e.g. an error object or an empty response.
        """
        if not isinstance(payload, dict):
            return None

        fields = payload.get("fields")
        if not isinstance(fields, dict):
            return None

        return cls(
            id=payload.get("id") or record_id,
            fields=fields,
            created_time=payload.get("createdTime"),
        )


@dataclass(frozen=True)
class RelayConfig:
    """Everything the relay needs to reach its upstreams."""

    data_store_endpoint: str
    data_store_api_key: str
    subscribe_webhook_url: str | None = None
    unsubscribe_webhook_url: str | None = None
    timeout_seconds: float = 10.0
    unsubscribe_redirect_url: str = "/?msg=unsubscribe"


@dataclass
class SubscribeResult:
    """Outcome of a subscribe relay."""

    record_ids: list[str]
    webhook_notified: bool
    webhook_error: str | None = None


@dataclass
class UnsubscribeResult:
    """Outcome of an unsubscribe relay."""

    record_id: RecordReference
    redirect_url: str
    webhook_notified: bool
    webhook_error: str | None = None

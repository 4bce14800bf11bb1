# =============================================================================
# app/routers/relay.py - Subscribe / Unsubscribe Endpoints
# =============================================================================
# Called by the site's newsletter form and by the unsubscribe link in emails.
# Neither endpoint authenticates its caller: anyone holding a record id can
# unsubscribe it.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, Response, status
from fastapi.responses import RedirectResponse

from app.dependencies import RelayServiceDep
from app.exceptions import InvalidSubmissionError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/subscribe", status_code=status.HTTP_200_OK)
async def subscribe(
    relay: RelayServiceDep,
    submission: Annotated[
        Any,
        Body(
            description="Form fields, forwarded to Airtable and Zapier as-is",
            examples=[{"email": "a@b.com", "name": "Ada"}],
        ),
    ],
):
    """
    Store a form submission.

    Creates an Airtable record from the posted fields and notifies the
    subscribe webhook. Responds 200 with an empty body; 502 if Airtable
    failed. Webhook failures are logged only.
    """
    if not isinstance(submission, dict):
        raise InvalidSubmissionError(type(submission).__name__)

    await relay.subscribe(submission)

    return Response(status_code=status.HTTP_200_OK)


@router.get("/unsubscribe", status_code=status.HTTP_302_FOUND)
async def unsubscribe(
    relay: RelayServiceDep,
    record_id: Annotated[str, Query(alias="id", min_length=1, description="Airtable record id")],
):
    """
    Remove a subscriber.

    Fetches the record, deletes it and forwards its fields to the
    unsubscribe webhook, then redirects to the site (302). Unknown ids
    get a 404.
    """
    result = await relay.unsubscribe(record_id)

    return RedirectResponse(
        url=result.redirect_url,
        status_code=status.HTTP_302_FOUND,
    )

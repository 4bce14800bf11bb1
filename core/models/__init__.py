# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the schemas that flow through the relay:
# - relay.py: Submission, Record, RelayConfig and relay results
# =============================================================================

from .relay import (
    Record,
    RecordReference,
    RelayConfig,
    Submission,
    SubscribeResult,
    UnsubscribeResult,
)

__all__ = [
    "Record",
    "RecordReference",
    "RelayConfig",
    "Submission",
    "SubscribeResult",
    "UnsubscribeResult",
]

# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the relay logic:
# - models/: Pydantic schemas and dataclasses for submissions and records
# - services/: RelayService, the subscribe/unsubscribe workflows
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable with a fake HTTP transport.
# =============================================================================

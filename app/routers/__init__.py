# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - relay.py: Subscribe and unsubscribe endpoints
#
# Each router is mounted in main.py under settings.API_PREFIX.
# =============================================================================

from . import health
from . import relay

__all__ = [
    "health",
    "relay",
]

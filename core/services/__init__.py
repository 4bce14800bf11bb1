# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .relay_service import RelayService

__all__ = [
    "RelayService",
]

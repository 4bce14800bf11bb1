# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services.relay_service import RelayService


def get_relay_service(request: Request) -> RelayService:
    """
    Get the RelayService built during application startup.

    Returns the instance stored on app.state by the lifespan handler.
    """
    return request.app.state.relay_service


def get_app_settings(request: Request) -> Settings:
    """Get the Settings the application was created with."""
    return request.app.state.settings


# Type aliases for dependency injection
RelayServiceDep = Annotated[RelayService, Depends(get_relay_service)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]

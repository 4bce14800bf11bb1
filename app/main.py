# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the FormRelay API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#
# Tests build their own instance with create_app(settings, transport=...).
# =============================================================================

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.exceptions import FormRelayException, form_relay_exception_handler
from app.routers import health, relay
from core.services.relay_service import RelayService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        transport: Optional httpx transport for outbound calls (tests pass a
            MockTransport)

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: open the shared HTTP client, build the relay service
        - Shutdown: close the HTTP client
        """
        logger.info(f"Starting FormRelay API in {settings.ENVIRONMENT} mode")
        logger.info(
            f"Subscribe webhook: {'on' if settings.subscribe_webhook_url else 'off'}, "
            f"unsubscribe webhook: {'on' if settings.unsubscribe_webhook_url else 'off'}"
        )

        http = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )
        app.state.http_client = http
        app.state.relay_service = RelayService(settings.to_relay_config(), http)

        yield

        logger.info("Shutting down FormRelay API")
        await http.aclose()

    app = FastAPI(
        title="FormRelay API",
        description="Relays newsletter subscribe and unsubscribe requests to Airtable and Zapier.",
        version=health.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Relay",
                "description": "Subscribe and unsubscribe form handlers",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )
    app.state.settings = settings

    # =========================================================================
    # Middleware
    # =========================================================================

    # The site posts the form from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(FormRelayException)
    async def handle_form_relay_exception(request: Request, exc: FormRelayException):
        """Handle custom FormRelay exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return await form_relay_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        relay.router,
        prefix=settings.API_PREFIX,
        tags=["Relay"]
    )

    app.include_router(
        health.router,
        prefix=settings.API_PREFIX,
        tags=["Health"]
    )

    # =========================================================================
    # API Root Endpoint
    # =========================================================================

    @app.get(settings.API_PREFIX or "/", tags=["Root"])
    async def root():
        """
        API root - returns service info.
        """
        return {
            "name": "FormRelay API",
            "version": health.VERSION,
            "docs": "/docs",
            "health": f"{settings.API_PREFIX}/health",
        }

    return app


configure_logging(get_settings())
app = create_app()

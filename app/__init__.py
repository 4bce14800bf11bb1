# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan, middleware, error handlers
# - config.py: Environment variable loading and settings
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# relay logic to the core/ package.
# =============================================================================

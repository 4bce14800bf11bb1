# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the FormRelay API:
# - test_config.py: Settings, webhook fallbacks, RelayConfig
# - test_airtable_client.py: Airtable and webhook clients
# - test_relay_service.py: Subscribe/unsubscribe relay logic
# - test_relay_routes.py: HTTP endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================

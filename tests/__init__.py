# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Entryboard API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_navigation.py: Navigation policy and guard middleware
# - test_auth.py: Token verification and login/signup/logout routes
# - test_entry_service.py: Store query shapes and error translation
# - test_entries_api.py: The read/write endpoints end to end
# - test_config_and_health.py: Settings loading and health checks
#
# Run tests with: pytest
# =============================================================================

# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the GrokTalk API:
# - test_crypto.py: API key encryption format and failure modes
# - test_models.py: Pydantic request/response shaping
# - test_config.py: Settings and CORS origin resolution
# - test_auth.py: Token verification dependencies
# - test_services.py: Service layer against a mocked Supabase client
# - test_supabase_client.py: Client singleton and PostgREST error helpers
# - test_account_service.py: Registration, login and profile flows
# - test_routes.py: HTTP behaviour through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================

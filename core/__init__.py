# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas for request bodies and responses
# - services/: Owner-scoped Supabase queries and Supabase Auth calls
#
# Route handlers stay thin and call into services; services raise the
# exceptions defined in app/exceptions.py.
# =============================================================================

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Replaces the Supabase client with a MagicMock
# - Builds chainable fake PostgREST queries
# - Mints HS256 access tokens shaped like Supabase's
# =============================================================================

import os
import time
from unittest.mock import MagicMock, patch
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-passphrase")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from jose import jwt

from lib.supabase_client import SupabaseClient

TEST_JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]

QUERY_METHODS = (
    "select",
    "insert",
    "update",
    "upsert",
    "delete",
    "eq",
    "neq",
    "order",
    "limit",
    "range",
    "single",
)


def build_query(data=None, count=None, error: Exception | None = None) -> MagicMock:
    """
    Build a fake PostgREST query builder.

    Every builder method returns the same mock, so any chain ends in
    .execute(), which returns an object with `.data` (or raises `error`).
    """
    query = MagicMock(name="query")
    for method in QUERY_METHODS:
        getattr(query, method).return_value = query

    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data, count=count)
    return query


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def make_query():
    """Factory fixture for fake query builders."""
    return build_query


@pytest.fixture
def mock_supabase():
    """Patch SupabaseClient.get_client() to return a MagicMock client."""
    client = MagicMock(name="supabase")
    with patch.object(SupabaseClient, "get_client", return_value=client):
        yield client


@pytest.fixture
def user_id():
    return str(uuid4())


@pytest.fixture
def make_token(user_id):
    """Mint an access token the way Supabase Auth shapes them."""

    def _make_token(
        sub: str | None = None,
        email: str = "ada@example.com",
        name: str | None = "Ada",
        expires_in: int = 3600,
        audience: str = "authenticated",
        secret: str = TEST_JWT_SECRET,
        omit_sub: bool = False,
    ) -> str:
        now = int(time.time())
        claims = {
            "email": email,
            "aud": audience,
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
            "user_metadata": {"name": name} if name else {},
        }
        if not omit_sub:
            claims["sub"] = sub or user_id
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make_token


@pytest.fixture
def sample_project_row(user_id):
    """Project row as returned by PostgREST."""
    return {
        "id": "2f1c6a4e-8d4b-4c1e-9a7d-0b6b1f7e9c11",
        "name": "Code Reviewer",
        "description": "Reviews Python pull requests",
        "instructions": "You are a meticulous senior reviewer.",
        "conversation_starters": ["Review this diff"],
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-16T09:30:00+00:00",
    }


@pytest.fixture
def sample_chat_row():
    """chat_history row with JSON messages."""
    return {
        "id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
        "title": "Refactoring ideas",
        "messages": [{"role": "user", "content": "Hi"}],
        "updated_at": "2024-01-16T09:30:00+00:00",
        "project_id": None,
    }


@pytest.fixture
def sample_api_key_row():
    """user_api_keys row without key material."""
    return {
        "id": "9b2d1f0a-3c4e-4f5a-8b6c-7d8e9f0a1b2c",
        "name": "Personal",
        "provider": "openai",
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-15T10:00:00+00:00",
    }

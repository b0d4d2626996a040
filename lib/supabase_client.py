# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# Single access point to the hosted Supabase project.
#
# - get_client(): shared service_role client (bypasses RLS, so every query
#   built on it must filter by user_id)
# - create_anon_client(): throwaway anon-key client for password sign-in
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   rows = client.table("projects").select("*").eq("user_id", uid).execute().data
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client, ClientOptions

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NOT_FOUND_CODE = "PGRST116"


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


def _server_options() -> ClientOptions:
    # Server-side clients never persist or refresh user sessions
    return ClientOptions(persist_session=False, auto_refresh_token=False)


class SupabaseClient:
    """
    Typed wrapper around the supabase-py client.

    Implements the singleton pattern for the service-role client. All
    methods are class methods so callers never instantiate the wrapper.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton service-role client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY,
                    options=_server_options(),
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def create_anon_client(cls) -> Client:
        """
        Create a fresh anon-key client.

        Signing in stores the user's session on the client that performed
        the sign-in, so each sign-in gets its own short-lived client and
        the shared service-role client keeps its own credentials.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            return create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=_server_options(),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase anon client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests)."""
        cls._instance = None

    @staticmethod
    def is_not_found(error: Exception) -> bool:
        """True when a PostgREST error means 'no rows matched'."""
        return NOT_FOUND_CODE in str(error)

    @classmethod
    def ping(cls, table: str) -> None:
        """
        Run a one-row select against a table.

        Raises:
            SupabaseClientError: If the database cannot be reached
        """
        try:
            cls.get_client().table(table).select("*").limit(1).execute()
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
                details={"table": table},
            )

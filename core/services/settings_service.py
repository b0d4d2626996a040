# =============================================================================
# core/services/settings_service.py - Per-user UI Settings
# =============================================================================
# One row per user in user_settings, created on first save.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.exceptions import DatabaseOperationError
from core.models.user_settings import DEFAULT_USER_SETTINGS, UserSettingsUpdate
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

TABLE = "user_settings"


class SettingsService:
    """Service for reading and saving user settings."""

    @staticmethod
    def get_settings(user_id: UUID | str) -> dict[str, Any]:
        """
        Get the user's stored settings, or the defaults if none are saved.

        Raises:
            DatabaseOperationError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("user_id", normalize_uuid(user_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch user settings: {e}")
            raise DatabaseOperationError("Failed to fetch user settings", str(e))

        rows = response.data or []
        if rows:
            return rows[0]
        return dict(DEFAULT_USER_SETTINGS)

    @staticmethod
    def save_settings(user_id: UUID | str, request: UserSettingsUpdate) -> dict[str, Any]:
        """
        Insert or update the user's settings row.

        Returns:
            The row as stored

        Raises:
            DatabaseOperationError: If the upsert fails
        """
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        data = {
            **request.to_upsert_row(),
            "user_id": user_id_str,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            response = (
                client.table(TABLE)
                .upsert(data, on_conflict="user_id")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to save user settings: {e}")
            raise DatabaseOperationError("Failed to save user settings", str(e))

        if not response.data:
            raise DatabaseOperationError("Failed to save user settings", "Upsert returned no data")

        logger.info(f"Saved settings for user: {user_id_str}")
        return response.data[0]

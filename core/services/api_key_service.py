# =============================================================================
# core/services/api_key_service.py - Stored API Key Business Logic
# =============================================================================
# Users keep their third-party provider keys here so the frontend can call
# providers on their behalf.
#
# - Plaintext is encrypted with lib.crypto before it reaches the database
# - Only get_api_key() and get_key_for_provider() decrypt
# - A record that fails to decrypt is an error, never an empty key
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import (
    ApiKeyDecryptionError,
    ApiKeyNotFoundError,
    DatabaseOperationError,
    MissingFieldsError,
    ProviderKeyNotFoundError,
)
from core.models.api_key import (
    API_KEY_PUBLIC_COLUMNS,
    API_KEY_SECRET_COLUMNS,
    ApiKeyCreate,
    ApiKeyUpdate,
)
from core.services.queries import delete_owned_row, fetch_owned_row, insert_row, update_owned_row
from lib.crypto import CipherError, decrypt_secret, encrypt_secret
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

TABLE = "user_api_keys"


class ApiKeyService:
    """Service for encrypted provider API keys."""

    @staticmethod
    def _decrypt(row: dict[str, Any]) -> str:
        try:
            return decrypt_secret(row.get("encrypted_key"))
        except CipherError as e:
            logger.error(f"Could not decrypt API key {row.get('id')}: {e.code}")
            raise ApiKeyDecryptionError(str(row.get("id")))

    @staticmethod
    def list_api_keys(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        List a user's keys (metadata only), newest first.

        Raises:
            DatabaseOperationError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select(API_KEY_PUBLIC_COLUMNS)
                .eq("user_id", normalize_uuid(user_id))
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list API keys: {e}")
            raise DatabaseOperationError("Failed to fetch API keys", str(e))

    @staticmethod
    def create_api_key(user_id: UUID | str, request: ApiKeyCreate) -> dict[str, Any]:
        """
        Encrypt and store a new key.

        Returns:
            The inserted row (callers must not expose encrypted_key)

        Raises:
            MissingFieldsError: If name, key or provider is blank
            DatabaseOperationError: If the insert fails
        """
        missing = request.missing_fields()
        if missing:
            raise MissingFieldsError("Name, API key, and provider are required", missing)

        data = {
            "name": request.name,
            "provider": request.provider,
            "encrypted_key": encrypt_secret(request.secret),
            "user_id": normalize_uuid(user_id),
        }
        return insert_row(TABLE, data, label="API key")

    @staticmethod
    def get_api_key(api_key_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Fetch one key with its plaintext under "api_key".

        Raises:
            ApiKeyNotFoundError: If it doesn't exist or the user doesn't own it
            ApiKeyDecryptionError: If the stored record is corrupt
        """
        row = fetch_owned_row(
            TABLE, API_KEY_SECRET_COLUMNS, api_key_id, user_id, ApiKeyNotFoundError, label="API key"
        )
        result = {k: v for k, v in row.items() if k != "encrypted_key"}
        result["api_key"] = ApiKeyService._decrypt(row)
        return result

    @staticmethod
    def update_api_key(
        api_key_id: UUID | str,
        user_id: UUID | str,
        request: ApiKeyUpdate,
    ) -> dict[str, Any]:
        """
        Rename, re-label or replace a key.

        A replacement secret is encrypted with a fresh nonce.

        Raises:
            ApiKeyNotFoundError: If it doesn't exist or the user doesn't own it
        """
        update_data = request.to_update_row()
        if request.secret is not None:
            update_data["encrypted_key"] = encrypt_secret(request.secret)

        if not update_data:
            return fetch_owned_row(
                TABLE, API_KEY_PUBLIC_COLUMNS, api_key_id, user_id, ApiKeyNotFoundError, label="API key"
            )

        return update_owned_row(
            TABLE, api_key_id, user_id, update_data, ApiKeyNotFoundError, label="API key"
        )

    @staticmethod
    def delete_api_key(api_key_id: UUID | str, user_id: UUID | str) -> None:
        delete_owned_row(TABLE, api_key_id, user_id, ApiKeyNotFoundError, label="API key")

    @staticmethod
    def get_key_for_provider(user_id: UUID | str, provider: str) -> dict[str, Any]:
        """
        Most recently updated key for a provider, decrypted under "key_value".

        Raises:
            ProviderKeyNotFoundError: If the user has no key for the provider
            ApiKeyDecryptionError: If the stored record is corrupt
            DatabaseOperationError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("id, name, provider, encrypted_key")
                .eq("user_id", normalize_uuid(user_id))
                .eq("provider", provider)
                .order("updated_at", desc=True)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch API key for provider {provider}: {e}")
            raise DatabaseOperationError("Failed to fetch API key", str(e))

        rows = response.data or []
        if not rows:
            raise ProviderKeyNotFoundError(provider)

        row = rows[0]
        return {
            "id": row["id"],
            "name": row.get("name"),
            "provider": row.get("provider"),
            "key_value": ApiKeyService._decrypt(row),
        }

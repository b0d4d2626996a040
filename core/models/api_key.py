# =============================================================================
# core/models/api_key.py - Stored API Key Schemas
# =============================================================================
# Users store their own provider API keys (OpenAI, xAI, ...). Keys are
# encrypted before insert; only the decrypt endpoints ever return the
# plaintext.
#
# Request bodies accept the secret as either "apiKey" or "keyValue" since
# both spellings are used by existing clients.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .base import CamelModel, blank

# Columns safe to return (no key material)
API_KEY_PUBLIC_COLUMNS = "id, name, provider, created_at, updated_at"

# Columns needed to decrypt
API_KEY_SECRET_COLUMNS = "id, name, provider, encrypted_key, created_at, updated_at"


class _ApiKeyInput(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    provider: str | None = Field(default=None, max_length=100)
    api_key: str | None = None
    key_value: str | None = None

    @property
    def secret(self) -> str | None:
        """The plaintext key: apiKey unless blank, else keyValue."""
        return self.api_key if not blank(self.api_key) else self.key_value


class ApiKeyCreate(_ApiKeyInput):
    """
    Schema for storing a new API key.

    Example:
        {"name": "Personal", "provider": "openai", "apiKey": "sk-..."}
    """

    def missing_fields(self) -> list[str]:
        required = {"name": self.name, "apiKey": self.secret, "provider": self.provider}
        return [field for field, value in required.items() if blank(value)]


class ApiKeyUpdate(_ApiKeyInput):
    """Partial update; a new secret is re-encrypted by the service."""

    def to_update_row(self) -> dict[str, Any]:
        """Plain column values the client sent (the secret is excluded)."""
        return self.model_dump(include={"name", "provider"}, exclude_unset=True)


class ApiKeySummary(BaseModel):
    """API key metadata. Uses the raw snake_case column names on the wire."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str | None = None
    provider: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ApiKeySummary":
        return cls(
            id=str(row["id"]),
            name=row.get("name"),
            provider=row.get("provider"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


class ApiKeyListResponse(CamelModel):
    """{"apiKeys": [...]}"""

    api_keys: list[ApiKeySummary] = Field(default_factory=list)


class ApiKeyMutationResponse(CamelModel):
    """{"message": ..., "apiKey": {...}}"""

    message: str
    api_key: ApiKeySummary


class ApiKeySecretResponse(CamelModel):
    """A single key with its decrypted value."""

    id: str
    name: str | None = None
    provider: str | None = None
    api_key: str
    created_at: str | None = None
    updated_at: str | None = None


class ProviderKeyResponse(CamelModel):
    """The newest key for a provider, decrypted."""

    id: str
    name: str | None = None
    provider: str | None = None
    key_value: str

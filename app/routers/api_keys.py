# =============================================================================
# app/routers/api_keys.py - Stored API Key Endpoints
# =============================================================================
# Endpoints:
# - GET    /api-keys                     list (metadata only)
# - POST   /api-keys                     store a key (encrypted at rest)
# - GET    /api-keys/provider/{provider} newest key for a provider, decrypted
# - GET    /api-keys/{id}                one key, decrypted
# - PUT    /api-keys/{id}                rename / replace
# - DELETE /api-keys/{id}
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from app.dependencies import CurrentUser
from core.models.api_key import (
    ApiKeyCreate,
    ApiKeyListResponse,
    ApiKeyMutationResponse,
    ApiKeySecretResponse,
    ApiKeySummary,
    ApiKeyUpdate,
    ProviderKeyResponse,
)
from core.services.api_key_service import ApiKeyService

router = APIRouter()

ApiKeyId = Annotated[UUID, Path(description="API key UUID")]


@router.get("", response_model=ApiKeyListResponse)
def list_api_keys(user: CurrentUser):
    """List the caller's keys without key material, newest first."""
    rows = ApiKeyService.list_api_keys(user.id)
    return ApiKeyListResponse(api_keys=[ApiKeySummary.from_row(row) for row in rows])


@router.post("", response_model=ApiKeyMutationResponse, status_code=status.HTTP_201_CREATED)
def create_api_key(request: ApiKeyCreate, user: CurrentUser):
    """
    Store a provider key.

    The key may be sent as `apiKey` or `keyValue`.
    """
    row = ApiKeyService.create_api_key(user.id, request)
    return ApiKeyMutationResponse(
        message="API key created successfully",
        api_key=ApiKeySummary.from_row(row),
    )


@router.get("/provider/{provider}", response_model=ProviderKeyResponse)
def get_key_for_provider(
    provider: Annotated[str, Path(min_length=1, max_length=100)],
    user: CurrentUser,
):
    """Get the most recently updated key for a provider, decrypted."""
    key = ApiKeyService.get_key_for_provider(user.id, provider)
    return ProviderKeyResponse(
        id=str(key["id"]),
        name=key.get("name"),
        provider=key.get("provider"),
        key_value=key["key_value"],
    )


@router.get("/{api_key_id}", response_model=ApiKeySecretResponse)
def get_api_key(api_key_id: ApiKeyId, user: CurrentUser):
    key = ApiKeyService.get_api_key(api_key_id, user.id)
    return ApiKeySecretResponse(
        id=str(key["id"]),
        name=key.get("name"),
        provider=key.get("provider"),
        api_key=key["api_key"],
        created_at=key.get("created_at"),
        updated_at=key.get("updated_at"),
    )


@router.put("/{api_key_id}", response_model=ApiKeyMutationResponse)
def update_api_key(api_key_id: ApiKeyId, request: ApiKeyUpdate, user: CurrentUser):
    row = ApiKeyService.update_api_key(api_key_id, user.id, request)
    return ApiKeyMutationResponse(
        message="API key updated successfully",
        api_key=ApiKeySummary.from_row(row),
    )


@router.delete("/{api_key_id}")
def delete_api_key(api_key_id: ApiKeyId, user: CurrentUser) -> dict:
    ApiKeyService.delete_api_key(api_key_id, user.id)
    return {"message": "API key deleted successfully"}

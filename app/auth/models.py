# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from core.models.base import CamelModel


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase access token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    name: Optional[str] = None  # user_metadata.name


class RegisterRequest(BaseModel):
    """Body for POST /auth/register. Blank fields are rejected with 400."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """Body for POST /auth/login."""
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    """Body for PUT /auth/profile."""
    name: Optional[str] = None
    email: Optional[str] = None


class AccountUser(BaseModel):
    """{id, email, name} as returned inside auth responses."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None


class AuthTokenResponse(BaseModel):
    """
    Response for login and registration.

    `token` is omitted when registration succeeded but the follow-up
    sign-in did not.
    """
    message: str
    token: Optional[str] = None
    user: AccountUser


class MeResponse(CamelModel):
    """Response for GET /auth/me."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[str] = None


class ProfileResponse(CamelModel):
    """Response for PUT /auth/profile."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    updated_at: Optional[str] = None


class TokenPayload(BaseModel):
    """
    Decoded access token claims from Supabase.

    Supabase tokens include standard JWT claims plus user_metadata.
    """
    model_config = ConfigDict(extra="ignore")

    sub: str  # User ID
    email: Optional[str] = None
    aud: Optional[str] = None  # Audience (should be "authenticated")
    exp: Optional[int] = None
    role: Optional[str] = None
    user_metadata: Optional[dict] = None

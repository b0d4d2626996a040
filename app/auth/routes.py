# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Account endpoints backed by Supabase Auth:
# - POST /auth/register, POST /auth/login: return an access token
# - GET /auth/me, PUT /auth/profile: the signed-in user's auth profile
# - GET /auth: legacy lookup in the public users table
# - GET /auth/verify: token check
#
# session_router carries GET /session, mounted at the API root.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.auth.models import (
    AuthTokenResponse,
    AuthUser,
    LoginRequest,
    MeResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
)
from core.services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter()
session_router = APIRouter()


@router.post(
    "/register",
    response_model=AuthTokenResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(request: RegisterRequest):
    """
    Create an account and return an access token.

    The account is created pre-confirmed. If the follow-up sign-in fails
    the response is still 201, without a token.
    """
    return AccountService.register(request.email, request.password, request.name)


@router.post("/login", response_model=AuthTokenResponse)
def login(request: LoginRequest):
    """
    Sign in with email and password.

    Raises:
        400: If email or password is missing
        401: If the credentials are wrong
    """
    return AccountService.login(request.email, request.password)


@router.get("/me", response_model=MeResponse)
def get_me(user: AuthUser = Depends(get_current_user)):
    """
    Get the current user's auth profile.

    Falls back to the token claims when the admin lookup fails.
    """
    profile = AccountService.get_auth_user(user.id)
    if profile:
        return MeResponse(**profile)

    return MeResponse(id=str(user.id), email=user.email, name=user.name)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    request: ProfileUpdateRequest,
    user: AuthUser = Depends(get_current_user),
):
    """Update display name and, optionally, email."""
    profile = AccountService.update_profile(user.id, name=request.name, email=request.email)
    return ProfileResponse(**profile)


@router.get("")
def get_legacy_profile(user: AuthUser = Depends(get_current_user)) -> dict:
    """
    Get the user's row from the public users table (matched by email).

    Raises:
        404: If the user has no row there
    """
    row = AccountService.get_public_user(user.email)
    return {
        "authenticated": True,
        "user": {
            "id": row["id"],
            "email": row.get("email"),
            "name": row.get("username"),
            "created_at": row.get("created_at"),
        },
    }


@router.get("/verify")
def verify_token(user: AuthUser = Depends(get_current_user)) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
    }


@session_router.get("/session")
def get_session(user: AuthUser = Depends(get_current_user)) -> dict:
    """Session info derived from the token alone (no database call)."""
    return {
        "user": {
            "id": str(user.id),
            "email": user.email,
            "name": user.name or user.email,
        },
        "authenticated": True,
    }

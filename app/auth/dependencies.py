# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Access tokens are Supabase Auth JWTs. Verification order:
# - ES256/RS256 (Supabase signing keys) via the project's JWKS
# - HS256 with SUPABASE_JWT_SECRET (legacy shared secret)
# - Otherwise ask Supabase Auth (auth.get_user) to validate the token
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Any, Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# Missing or non-Bearer headers yield None; we answer 401 ourselves
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour

# After a failed fetch, serve what we have without refetching for this long
JWKS_FAILURE_TTL = 60
_jwks_failure_time: float = 0

TOKEN_AUDIENCE = "authenticated"


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _get_jwks_url() -> str:
    """Get the JWKS URL from the Supabase project URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time, _jwks_failure_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    if (current_time - _jwks_failure_time) < JWKS_FAILURE_TTL:
        return _jwks_cache or {"keys": []}

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except Exception as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        _jwks_failure_time = current_time
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Optional[Any], Optional[str]]:
    """
    Pick the key to verify a token locally.

    Returns:
        (key, algorithm), or (None, None) when the token must be verified
        by Supabase Auth instead
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        raise _unauthorized("Invalid token: malformed header")

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        if settings.SUPABASE_JWT_SECRET:
            return settings.SUPABASE_JWT_SECRET, "HS256"
        return None, None

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"No local key for alg={alg}, kid={kid}; verifying with Supabase Auth")
    return None, None


def _user_from_payload(payload: dict) -> AuthUser:
    try:
        claims = TokenPayload(**payload)
    except ValidationError:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(claims.sub)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {claims.sub}")
        raise _unauthorized("Invalid token: malformed user ID")

    return AuthUser(
        id=user_uuid,
        email=claims.email,
        name=(claims.user_metadata or {}).get("name"),
    )


def _verify_with_supabase(token: str) -> AuthUser:
    """Validate a token by asking Supabase Auth who it belongs to."""
    try:
        response = SupabaseClient.get_client().auth.get_user(token)
    except Exception as e:
        logger.warning(f"Supabase Auth rejected token: {e}")
        raise _unauthorized()

    user = response.user if response else None
    if not user:
        raise _unauthorized()

    return AuthUser(
        id=UUID(str(user.id)),
        email=user.email,
        name=(user.user_metadata or {}).get("name"),
    )


def authenticate_token(token: str) -> AuthUser:
    """
    Verify a bearer token and return its user.

    Raises:
        HTTPException: 401 if the token is invalid or expired
    """
    signing_key, algorithm = _get_signing_key(token)
    if signing_key is None:
        return _verify_with_supabase(token)

    try:
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {str(e)}")

    user = _user_from_payload(payload)
    logger.debug(f"Authenticated user: {user.id}")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> AuthUser:
    """
    Extract and validate the user from the Authorization header.

    Runs as a sync dependency (in FastAPI's threadpool) because JWKS
    fetches and Supabase Auth lookups are blocking HTTP calls.

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    if credentials is None:
        raise _unauthorized()
    return authenticate_token(credentials.credentials)


def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> Optional[AuthUser]:
    """
    Optionally get the current user.

    Returns None if no token is provided or the token is invalid.
    """
    if credentials is None:
        return None

    try:
        return authenticate_token(credentials.credentials)
    except HTTPException:
        return None

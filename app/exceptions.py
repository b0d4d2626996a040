# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where useful, a suggestion
# telling the client how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class GrokTalkException(Exception):
    """
    Base exception for the GrokTalk API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "GROKTALK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingFieldsError(GrokTalkException):
    """Raised when required body fields are absent or empty."""

    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message=message,
            code="MISSING_FIELDS",
            status_code=400,
            suggestion=f"Provide non-empty values for: {', '.join(fields)}",
            details={"fields": fields}
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================
# Rows owned by another user raise the same error as missing rows so the
# API never reveals that someone else's record exists.

class ProjectNotFoundError(GrokTalkException):
    """Raised when a project doesn't exist or belongs to another user."""

    def __init__(self, project_id: str):
        super().__init__(
            message="Project not found",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            details={"project_id": project_id}
        )


class ChatNotFoundError(GrokTalkException):
    """Raised when a chat doesn't exist or belongs to another user."""

    def __init__(self, chat_id: str):
        super().__init__(
            message="Chat not found",
            code="CHAT_NOT_FOUND",
            status_code=404,
            details={"chat_id": chat_id}
        )


class ApiKeyNotFoundError(GrokTalkException):
    """Raised when an API key doesn't exist or belongs to another user."""

    def __init__(self, api_key_id: str):
        super().__init__(
            message="API key not found",
            code="API_KEY_NOT_FOUND",
            status_code=404,
            details={"api_key_id": api_key_id}
        )


class ProviderKeyNotFoundError(GrokTalkException):
    """Raised when the user has no API key stored for a provider."""

    def __init__(self, provider: str):
        super().__init__(
            message="API key not found for this provider",
            code="PROVIDER_KEY_NOT_FOUND",
            status_code=404,
            suggestion="Add a key for this provider with POST /api-keys",
            details={"provider": provider}
        )


class UserNotFoundError(GrokTalkException):
    """Raised when the authenticated user has no row in public.users."""

    def __init__(self, email: str | None):
        super().__init__(
            message="User not found in database",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"email": email}
        )


# =============================================================================
# Account Exceptions
# =============================================================================

class InvalidCredentialsError(GrokTalkException):
    """Raised when email/password sign-in fails."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class RegistrationFailedError(GrokTalkException):
    """Raised when Supabase Auth refuses to create a user."""

    def __init__(self, reason: str):
        super().__init__(
            message=reason or "Failed to create user",
            code="REGISTRATION_FAILED",
            status_code=400,
            suggestion="The email may already be registered or the password too weak",
        )


class ProfileUpdateError(GrokTalkException):
    """Raised when updating the auth user's profile fails."""

    def __init__(self, error: str):
        super().__init__(
            message="Failed to update profile",
            code="PROFILE_UPDATE_FAILED",
            status_code=500,
            details={"error": error}
        )


# =============================================================================
# Server-side Exceptions
# =============================================================================

class DatabaseOperationError(GrokTalkException):
    """Raised when a Supabase query fails for reasons other than 'not found'."""

    def __init__(self, message: str, error: str):
        super().__init__(
            message=message,
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


class ApiKeyDecryptionError(GrokTalkException):
    """Raised when a stored API key cannot be decrypted."""

    def __init__(self, api_key_id: str):
        super().__init__(
            message="Stored API key could not be decrypted",
            code="API_KEY_DECRYPTION_FAILED",
            status_code=500,
            suggestion="Delete the key and add it again",
            details={"api_key_id": api_key_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def groktalk_exception_handler(
    request: Request,
    exc: GrokTalkException
) -> JSONResponse:
    """
    Convert GrokTalkException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )

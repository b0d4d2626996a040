# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common helpers used by the library modules and the service layer.
# =============================================================================

import json
from typing import Any
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format for PostgREST filters.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# JSON Utilities
# =============================================================================

def to_json_string(value: Any, default: str = "[]") -> str:
    """
    Return value as a compact JSON string.

    Strings are assumed to already hold serialized JSON and pass through
    untouched. None becomes `default`.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return default
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base class for errors raised by the lib/ modules.

    These never reach clients directly: the service layer logs the code
    and raises the matching GrokTalkException instead.

    Attributes:
        code: Machine-readable error code (e.g. "AUTHENTICATION_FAILED")
        message: Human-readable error message
        suggestion: What an operator can do about it
        details: Additional context for logs
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        if self.suggestion:
            return f"[{self.code}] {self.message} ({self.suggestion})"
        return f"[{self.code}] {self.message}"

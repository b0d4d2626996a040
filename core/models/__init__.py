# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - base.py: camelCase base model shared by API-facing schemas
# - project.py: Project (saved prompt bundle) schemas
# - chat.py: Chat transcript schemas
# - api_key.py: Stored provider API key schemas
# - user_settings.py: Per-user UI settings
#
# These models define the "contract" between API and clients.
# =============================================================================

from .base import CamelModel

# -----------------------------------------------------------------------------
# Project Models
# -----------------------------------------------------------------------------
from .project import (
    PROJECT_COLUMNS,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)

# -----------------------------------------------------------------------------
# Chat Models
# -----------------------------------------------------------------------------
from .chat import (
    CHAT_COLUMNS,
    ChatCreate,
    ChatResponse,
    ChatUpdate,
)

# -----------------------------------------------------------------------------
# API Key Models
# -----------------------------------------------------------------------------
from .api_key import (
    API_KEY_PUBLIC_COLUMNS,
    API_KEY_SECRET_COLUMNS,
    ApiKeyCreate,
    ApiKeyListResponse,
    ApiKeyMutationResponse,
    ApiKeySecretResponse,
    ApiKeySummary,
    ApiKeyUpdate,
    ProviderKeyResponse,
)

# -----------------------------------------------------------------------------
# User Settings Models
# -----------------------------------------------------------------------------
from .user_settings import DEFAULT_USER_SETTINGS, UserSettingsUpdate

__all__ = [
    "CamelModel",
    # Project
    "PROJECT_COLUMNS",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    # Chat
    "CHAT_COLUMNS",
    "ChatCreate",
    "ChatResponse",
    "ChatUpdate",
    # API keys
    "API_KEY_PUBLIC_COLUMNS",
    "API_KEY_SECRET_COLUMNS",
    "ApiKeyCreate",
    "ApiKeyListResponse",
    "ApiKeyMutationResponse",
    "ApiKeySecretResponse",
    "ApiKeySummary",
    "ApiKeyUpdate",
    "ProviderKeyResponse",
    # Settings
    "DEFAULT_USER_SETTINGS",
    "UserSettingsUpdate",
]

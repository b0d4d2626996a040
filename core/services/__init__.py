# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .account_service import AccountService
from .api_key_service import ApiKeyService
from .chat_service import ChatService
from .project_service import ProjectService
from .settings_service import SettingsService

__all__ = [
    "AccountService",
    "ApiKeyService",
    "ChatService",
    "ProjectService",
    "SettingsService",
]

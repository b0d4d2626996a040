# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - projects.py: Project (prompt bundle) CRUD
# - chats.py: Chat transcript CRUD
# - api_keys.py: Encrypted provider API keys
# - user_settings.py: Per-user UI settings
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import chats
from . import api_keys
from . import user_settings

__all__ = [
    "health",
    "projects",
    "chats",
    "api_keys",
    "user_settings",
]

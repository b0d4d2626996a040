# =============================================================================
# app/routers/user_settings.py - User Settings Endpoints
# =============================================================================

from typing import Any

from fastapi import APIRouter

from app.dependencies import CurrentUser
from core.models.user_settings import UserSettingsUpdate
from core.services.settings_service import SettingsService

router = APIRouter()


@router.get("")
def get_user_settings(user: CurrentUser) -> dict[str, Any]:
    """Stored settings, or the defaults if the user never saved any."""
    return SettingsService.get_settings(user.id)


@router.api_route("", methods=["PUT", "POST"])
def save_user_settings(request: UserSettingsUpdate, user: CurrentUser) -> dict[str, Any]:
    """Create or update the caller's settings and return the stored row."""
    return SettingsService.save_settings(user.id, request)

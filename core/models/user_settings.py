# =============================================================================
# core/models/user_settings.py - Per-user UI Settings
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Returned when the user has never saved settings
DEFAULT_USER_SETTINGS: dict[str, Any] = {
    "theme": "dark",
    "language": "en",
    "notifications": True,
}


class UserSettingsUpdate(BaseModel):
    """
    Body for PUT/POST /user-settings.

    Unknown keys are dropped, which also keeps clients from writing
    user_id or updated_at.
    """

    model_config = ConfigDict(extra="ignore")

    theme: str | None = Field(default=None, max_length=50)
    language: str | None = Field(default=None, max_length=20)
    notifications: bool | None = None

    def to_upsert_row(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)

# =============================================================================
# core/models/chat.py - Chat Transcript Schemas
# =============================================================================
# A chat is a titled transcript stored as one row in chat_history. The
# messages column is opaque to the backend: the client decides its shape
# and always gets it back as a JSON string.
# =============================================================================

from typing import Any

from pydantic import Field

from lib.utils import to_json_string

from .base import CamelModel, blank

CHAT_COLUMNS = "id, title, messages, updated_at, project_id"


class ChatCreate(CamelModel):
    """
    Schema for saving a new chat.

    Example:
        {
            "title": "Refactoring ideas",
            "messages": [{"role": "user", "content": "Hi"}],
            "projectId": "550e8400-e29b-41d4-a716-446655440000"
        }
    """

    title: str | None = Field(default=None, max_length=500)

    # Either a JSON array or an already-serialized JSON string
    messages: Any = None

    project_id: str | None = None

    def missing_fields(self) -> list[str]:
        return [
            field
            for field, value in (("title", self.title), ("messages", self.messages))
            if blank(value)
        ]

    def to_insert_row(self, user_id: str) -> dict[str, Any]:
        return {
            "title": self.title,
            "messages": self.messages,
            "project_id": self.project_id or None,
            "user_id": user_id,
        }


class ChatUpdate(CamelModel):
    """Partial update for a chat; only sent fields are written."""

    title: str | None = Field(default=None, max_length=500)
    messages: Any = None
    project_id: str | None = None

    def to_update_row(self) -> dict[str, Any]:
        row = self.model_dump(exclude_unset=True)
        if "project_id" in row:
            row["project_id"] = row["project_id"] or None
        return row


class ChatResponse(CamelModel):
    """
    Chat as returned to clients.

    Example:
        {
            "id": "8f14e45f-...",
            "title": "Refactoring ideas",
            "messages": "[{\"role\":\"user\",\"content\":\"Hi\"}]",
            "updatedAt": "2024-01-15T10:30:00Z",
            "projectId": null
        }
    """

    id: str
    title: str | None = None
    messages: str = "[]"
    updated_at: str | None = None
    project_id: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ChatResponse":
        project_id = row.get("project_id")
        return cls(
            id=str(row["id"]),
            title=row.get("title"),
            messages=to_json_string(row.get("messages")),
            updated_at=row.get("updated_at"),
            project_id=str(project_id) if project_id else None,
        )

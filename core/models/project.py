# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# A project is a saved prompt bundle: a name, a description, the system
# instructions sent with every chat, and optional conversation starters.
#
# - ProjectCreate: Body for POST /projects
# - ProjectUpdate: Body for PUT /projects/{id} (partial)
# - ProjectResponse: What clients receive (camelCase)
# =============================================================================

from typing import Any

from pydantic import Field

from .base import CamelModel, blank

# Columns selected for every project query
PROJECT_COLUMNS = "id, name, description, instructions, conversation_starters, created_at, updated_at"


class ProjectCreate(CamelModel):
    """
    Schema for creating a project.

    Fields are optional at the schema level so the service can answer a
    missing field with a single 400 naming every absent field.

    Example:
        {
            "name": "Code Reviewer",
            "description": "Reviews Python pull requests",
            "instructions": "You are a meticulous senior reviewer...",
            "conversationStarters": ["Review this diff", "Explain this error"]
        }
    """

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    instructions: str | None = None

    # Suggested first messages shown in the UI
    conversation_starters: list[str] | None = Field(
        default=None,
        description="Suggested opening prompts"
    )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or blank."""
        required = {
            "name": self.name,
            "description": self.description,
            "instructions": self.instructions,
        }
        return [field for field, value in required.items() if blank(value)]

    def to_insert_row(self, user_id: str) -> dict[str, Any]:
        """Build the row inserted into the projects table."""
        return {
            "name": self.name,
            "description": self.description,
            "instructions": self.instructions,
            "conversation_starters": self.conversation_starters or [],
            "user_id": user_id,
        }


class ProjectUpdate(CamelModel):
    """
    Schema for updating a project.

    Only fields present in the request body are written; an explicit null
    is written as null.
    """

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    instructions: str | None = None
    conversation_starters: list[str] | None = None

    def to_update_row(self) -> dict[str, Any]:
        """Column values for the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ProjectResponse(CamelModel):
    """
    Schema for returning a project to clients.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Code Reviewer",
            "description": "Reviews Python pull requests",
            "instructions": "You are a meticulous senior reviewer...",
            "conversationStarters": [],
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z"
        }
    """

    id: str
    name: str | None = None
    description: str | None = None
    instructions: str | None = None
    conversation_starters: list[str] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ProjectResponse":
        """Shape a projects table row for the API."""
        return cls(
            id=str(row["id"]),
            name=row.get("name"),
            description=row.get("description"),
            instructions=row.get("instructions"),
            conversation_starters=row.get("conversation_starters") or [],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# CRUD for saved prompt bundles. Every query is scoped to the owning user.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import DatabaseOperationError, MissingFieldsError, ProjectNotFoundError
from core.models.project import PROJECT_COLUMNS, ProjectCreate, ProjectUpdate
from core.services.queries import delete_owned_row, fetch_owned_row, insert_row, update_owned_row
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

TABLE = "projects"


class ProjectService:
    """Service for project management operations."""

    @staticmethod
    def list_projects(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        List a user's projects, most recently updated first.

        Raises:
            DatabaseOperationError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select(PROJECT_COLUMNS)
                .eq("user_id", normalize_uuid(user_id))
                .order("updated_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list projects: {e}")
            raise DatabaseOperationError("Failed to fetch projects", str(e))

    @staticmethod
    def create_project(user_id: UUID | str, request: ProjectCreate) -> dict[str, Any]:
        """
        Create a project.

        Raises:
            MissingFieldsError: If name, description or instructions is blank
            DatabaseOperationError: If the insert fails
        """
        missing = request.missing_fields()
        if missing:
            raise MissingFieldsError("Name, description, and instructions are required", missing)

        return insert_row(TABLE, request.to_insert_row(normalize_uuid(user_id)), label="project")

    @staticmethod
    def get_project(project_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Get one of the user's projects.

        Raises:
            ProjectNotFoundError: If it doesn't exist or the user doesn't own it
        """
        return fetch_owned_row(
            TABLE, PROJECT_COLUMNS, project_id, user_id, ProjectNotFoundError, label="project"
        )

    @staticmethod
    def update_project(
        project_id: UUID | str,
        user_id: UUID | str,
        request: ProjectUpdate,
    ) -> dict[str, Any]:
        """
        Apply a partial update.

        An empty update returns the current project unchanged.

        Raises:
            ProjectNotFoundError: If it doesn't exist or the user doesn't own it
        """
        update_data = request.to_update_row()
        if not update_data:
            return ProjectService.get_project(project_id, user_id)

        return update_owned_row(
            TABLE, project_id, user_id, update_data, ProjectNotFoundError, label="project"
        )

    @staticmethod
    def delete_project(project_id: UUID | str, user_id: UUID | str) -> None:
        """
        Delete a project.

        Chats linked to the project keep their rows; the database decides
        whether project_id is nulled or cascades.

        Raises:
            ProjectNotFoundError: If it doesn't exist or the user doesn't own it
        """
        delete_owned_row(TABLE, project_id, user_id, ProjectNotFoundError, label="project")

# =============================================================================
# app/routers/projects.py - Project CRUD Endpoints
# =============================================================================
# Handles saved prompt bundles ("projects").
# All endpoints require authentication and only touch the caller's rows.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from app.dependencies import CurrentUser
from core.models.project import ProjectCreate, ProjectResponse, ProjectUpdate
from core.services.project_service import ProjectService

router = APIRouter()

ProjectId = Annotated[UUID, Path(description="Project UUID")]


@router.get("", response_model=list[ProjectResponse])
def list_projects(user: CurrentUser):
    """List the caller's projects, most recently updated first."""
    rows = ProjectService.list_projects(user.id)
    return [ProjectResponse.from_row(row) for row in rows]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(request: ProjectCreate, user: CurrentUser):
    """
    Create a project.

    name, description and instructions are required;
    conversationStarters defaults to an empty list.
    """
    row = ProjectService.create_project(user.id, request)
    return ProjectResponse.from_row(row)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: ProjectId, user: CurrentUser):
    row = ProjectService.get_project(project_id, user.id)
    return ProjectResponse.from_row(row)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: ProjectId, request: ProjectUpdate, user: CurrentUser):
    """Update only the fields present in the body."""
    row = ProjectService.update_project(project_id, user.id, request)
    return ProjectResponse.from_row(row)


@router.delete("/{project_id}")
def delete_project(project_id: ProjectId, user: CurrentUser) -> dict:
    ProjectService.delete_project(project_id, user.id)
    return {"message": "Project deleted successfully"}

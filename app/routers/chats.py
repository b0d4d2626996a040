# =============================================================================
# app/routers/chats.py - Chat History Endpoints
# =============================================================================
# Saved chat transcripts. `messages` always comes back as a JSON string,
# whatever shape the client stored.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from app.dependencies import CurrentUser
from core.models.chat import ChatCreate, ChatResponse, ChatUpdate
from core.services.chat_service import ChatService

router = APIRouter()

ChatId = Annotated[UUID, Path(description="Chat UUID")]


@router.get("", response_model=list[ChatResponse])
def list_chats(
    user: CurrentUser,
    project_id: Annotated[
        str | None, Query(alias="projectId", description="Only chats in this project")
    ] = None,
):
    """List the caller's chats, most recently updated first."""
    rows = ChatService.list_chats(user.id, project_id=project_id)
    return [ChatResponse.from_row(row) for row in rows]


@router.post("", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
def create_chat(request: ChatCreate, user: CurrentUser):
    """Save a chat. title and messages are required."""
    row = ChatService.create_chat(user.id, request)
    return ChatResponse.from_row(row)


@router.get("/{chat_id}", response_model=ChatResponse)
def get_chat(chat_id: ChatId, user: CurrentUser):
    row = ChatService.get_chat(chat_id, user.id)
    return ChatResponse.from_row(row)


@router.put("/{chat_id}", response_model=ChatResponse)
def update_chat(chat_id: ChatId, request: ChatUpdate, user: CurrentUser):
    row = ChatService.update_chat(chat_id, user.id, request)
    return ChatResponse.from_row(row)


@router.delete("/{chat_id}")
def delete_chat(chat_id: ChatId, user: CurrentUser) -> dict:
    ChatService.delete_chat(chat_id, user.id)
    return {"message": "Chat deleted successfully"}

# =============================================================================
# core/services/chat_service.py - Chat Transcript Business Logic
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import ChatNotFoundError, DatabaseOperationError, MissingFieldsError
from core.models.chat import CHAT_COLUMNS, ChatCreate, ChatUpdate
from core.services.queries import delete_owned_row, fetch_owned_row, insert_row, update_owned_row
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

TABLE = "chat_history"


class ChatService:
    """Service for saved chat transcripts."""

    @staticmethod
    def list_chats(
        user_id: UUID | str,
        project_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List a user's chats, most recently updated first.

        Args:
            user_id: Owner
            project_id: If given, only chats linked to this project

        Raises:
            DatabaseOperationError: If the query fails
        """
        client = SupabaseClient.get_client()

        query = (
            client.table(TABLE)
            .select(CHAT_COLUMNS)
            .eq("user_id", normalize_uuid(user_id))
        )
        if project_id:
            query = query.eq("project_id", project_id)

        try:
            response = query.order("updated_at", desc=True).execute()
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list chats: {e}")
            raise DatabaseOperationError("Failed to fetch chat history", str(e))

    @staticmethod
    def create_chat(user_id: UUID | str, request: ChatCreate) -> dict[str, Any]:
        """
        Save a new chat.

        Raises:
            MissingFieldsError: If title or messages is missing
            DatabaseOperationError: If the insert fails
        """
        missing = request.missing_fields()
        if missing:
            raise MissingFieldsError("Title and messages are required", missing)

        return insert_row(TABLE, request.to_insert_row(normalize_uuid(user_id)), label="chat")

    @staticmethod
    def get_chat(chat_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Raises:
            ChatNotFoundError: If it doesn't exist or the user doesn't own it
        """
        return fetch_owned_row(TABLE, CHAT_COLUMNS, chat_id, user_id, ChatNotFoundError, label="chat")

    @staticmethod
    def update_chat(
        chat_id: UUID | str,
        user_id: UUID | str,
        request: ChatUpdate,
    ) -> dict[str, Any]:
        """
        Apply a partial update (title, messages and/or project link).

        Raises:
            ChatNotFoundError: If it doesn't exist or the user doesn't own it
        """
        update_data = request.to_update_row()
        if not update_data:
            return ChatService.get_chat(chat_id, user_id)

        return update_owned_row(TABLE, chat_id, user_id, update_data, ChatNotFoundError, label="chat")

    @staticmethod
    def delete_chat(chat_id: UUID | str, user_id: UUID | str) -> None:
        delete_owned_row(TABLE, chat_id, user_id, ChatNotFoundError, label="chat")

# =============================================================================
# core/services/queries.py - Owner-scoped Row Helpers
# =============================================================================
# Every table the API exposes has a user_id column, and the service-role
# client bypasses row level security. These helpers make the user_id filter
# part of every single-row read, update and delete so no service can
# forget it.
#
# Each helper takes a `not_found` factory, called with the row id, that
# builds the exception to raise when the row is missing or not owned.
# =============================================================================

import logging
from typing import Any, Callable
from uuid import UUID

from app.exceptions import DatabaseOperationError, GrokTalkException
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

NotFoundFactory = Callable[[str], GrokTalkException]


def fetch_owned_row(
    table: str,
    columns: str,
    row_id: str | UUID,
    user_id: str | UUID,
    not_found: NotFoundFactory,
    label: str = "row",
) -> dict[str, Any]:
    """
    Fetch one row by id, restricted to the owner.

    Raises:
        GrokTalkException: From `not_found` if no owned row matches
        DatabaseOperationError: If the query fails
    """
    client = SupabaseClient.get_client()
    row_id_str = normalize_uuid(row_id)

    try:
        response = (
            client.table(table)
            .select(columns)
            .eq("id", row_id_str)
            .eq("user_id", normalize_uuid(user_id))
            .single()
            .execute()
        )
    except Exception as e:
        if SupabaseClient.is_not_found(e):
            raise not_found(row_id_str)
        logger.error(f"Failed to fetch {table} row {row_id_str}: {e}")
        raise DatabaseOperationError(f"Failed to fetch {label}", str(e))

    if not response.data:
        raise not_found(row_id_str)
    return response.data


def update_owned_row(
    table: str,
    row_id: str | UUID,
    user_id: str | UUID,
    update_data: dict[str, Any],
    not_found: NotFoundFactory,
    label: str = "row",
) -> dict[str, Any]:
    """
    Update one owned row and return it as stored.

    Raises:
        GrokTalkException: From `not_found` if no owned row matches
        DatabaseOperationError: If the update fails
    """
    client = SupabaseClient.get_client()
    row_id_str = normalize_uuid(row_id)

    try:
        response = (
            client.table(table)
            .update(update_data)
            .eq("id", row_id_str)
            .eq("user_id", normalize_uuid(user_id))
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to update {table} row {row_id_str}: {e}")
        raise DatabaseOperationError(f"Failed to update {label}", str(e))

    if not response.data:
        raise not_found(row_id_str)

    logger.info(f"Updated {table} row {row_id_str} ({', '.join(sorted(update_data))})")
    return response.data[0]


def delete_owned_row(
    table: str,
    row_id: str | UUID,
    user_id: str | UUID,
    not_found: NotFoundFactory,
    label: str = "row",
) -> None:
    """
    Delete one owned row.

    Raises:
        GrokTalkException: From `not_found` if no owned row matched
        DatabaseOperationError: If the delete fails
    """
    client = SupabaseClient.get_client()
    row_id_str = normalize_uuid(row_id)

    try:
        response = (
            client.table(table)
            .delete()
            .eq("id", row_id_str)
            .eq("user_id", normalize_uuid(user_id))
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to delete {table} row {row_id_str}: {e}")
        raise DatabaseOperationError(f"Failed to delete {label}", str(e))

    if not response.data:
        raise not_found(row_id_str)

    logger.info(f"Deleted {table} row {row_id_str}")


def insert_row(table: str, data: dict[str, Any], label: str = "row") -> dict[str, Any]:
    """
    Insert a row and return it as stored.

    Raises:
        DatabaseOperationError: If the insert fails or returns nothing
    """
    client = SupabaseClient.get_client()

    try:
        response = client.table(table).insert(data).execute()
    except Exception as e:
        logger.error(f"Failed to insert into {table}: {e}")
        raise DatabaseOperationError(f"Failed to create {label}", str(e))

    if not response.data:
        raise DatabaseOperationError(f"Failed to create {label}", "Insert returned no data")

    row = response.data[0]
    logger.info(f"Created {table} row {row.get('id')} for user {data.get('user_id')}")
    return row

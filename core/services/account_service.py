# =============================================================================
# core/services/account_service.py - Account Business Logic
# =============================================================================
# Registration, sign-in and profile updates go through Supabase Auth.
#
# - Admin operations (create user, lookup, update) use the service client
# - Password sign-in uses a throwaway anon client per call, see
#   SupabaseClient.create_anon_client()
# =============================================================================

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from app.exceptions import (
    DatabaseOperationError,
    InvalidCredentialsError,
    MissingFieldsError,
    ProfileUpdateError,
    RegistrationFailedError,
    UserNotFoundError,
)
from core.models.base import blank
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


def _timestamp(value: Any) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _display_name(user: Any) -> str | None:
    metadata = getattr(user, "user_metadata", None) or {}
    return metadata.get("name")


def user_summary(user: Any) -> dict[str, Any]:
    """Shape a Supabase Auth user as {id, email, name}."""
    return {
        "id": str(user.id),
        "email": user.email,
        "name": _display_name(user),
    }


class AccountService:
    """Service wrapping Supabase Auth account operations."""

    @staticmethod
    def _sign_in(email: str, password: str):
        """Password sign-in on a fresh anon client. Returns the AuthResponse."""
        client = SupabaseClient.create_anon_client()
        return client.auth.sign_in_with_password({"email": email, "password": password})

    @staticmethod
    def register(email: str | None, password: str | None, name: str | None) -> dict[str, Any]:
        """
        Create a confirmed user and sign them in.

        Returns:
            {"message", "user"} plus "token" when the follow-up sign-in
            succeeds

        Raises:
            MissingFieldsError: If email, password or name is blank
            RegistrationFailedError: If Supabase Auth refuses the user
        """
        missing = [
            field
            for field, value in (("email", email), ("password", password), ("name", name))
            if blank(value)
        ]
        if missing:
            raise MissingFieldsError("Email, password, and name are required", missing)

        client = SupabaseClient.get_client()

        try:
            created = client.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": {"name": name},
            })
        except Exception as e:
            logger.warning(f"Registration rejected for {email}: {e}")
            raise RegistrationFailedError(getattr(e, "message", None) or str(e))

        if not created or not created.user:
            raise RegistrationFailedError("Failed to create user")

        logger.info(f"Registered user: {created.user.id}")
        result: dict[str, Any] = {
            "message": "User created successfully",
            "user": {"id": str(created.user.id), "email": created.user.email, "name": name},
        }

        # The account exists either way; a failed sign-in just means no token
        try:
            signed_in = AccountService._sign_in(email, password)
        except Exception as e:
            logger.warning(f"Sign-in after registration failed for {created.user.id}: {e}")
            return result

        if signed_in and signed_in.session and signed_in.user:
            result["token"] = signed_in.session.access_token
            result["user"]["name"] = _display_name(signed_in.user) or name

        return result

    @staticmethod
    def login(email: str | None, password: str | None) -> dict[str, Any]:
        """
        Sign in with email and password.

        Raises:
            MissingFieldsError: If email or password is blank
            InvalidCredentialsError: If Supabase Auth rejects the credentials
        """
        missing = [
            field for field, value in (("email", email), ("password", password)) if blank(value)
        ]
        if missing:
            raise MissingFieldsError("Email and password are required", missing)

        try:
            signed_in = AccountService._sign_in(email, password)
        except Exception as e:
            logger.warning(f"Login failed for {email}: {e}")
            raise InvalidCredentialsError()

        if not signed_in or not signed_in.session or not signed_in.user:
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {signed_in.user.id}")
        return {
            "message": "Login successful",
            "token": signed_in.session.access_token,
            "user": user_summary(signed_in.user),
        }

    @staticmethod
    def get_auth_user(user_id: UUID | str) -> dict[str, Any] | None:
        """
        Look up a user in Supabase Auth.

        Returns:
            {"id", "email", "name", "created_at"} or None if the lookup fails
        """
        client = SupabaseClient.get_client()

        try:
            response = client.auth.admin.get_user_by_id(normalize_uuid(user_id))
        except Exception as e:
            logger.warning(f"Could not fetch auth user {user_id}: {e}")
            return None

        if not response or not response.user:
            return None

        return {
            **user_summary(response.user),
            "created_at": _timestamp(response.user.created_at),
        }

    @staticmethod
    def update_profile(
        user_id: UUID | str,
        name: str | None = None,
        email: str | None = None,
    ) -> dict[str, Any]:
        """
        Update display name and/or email. Omitted fields are left unchanged.

        Raises:
            ProfileUpdateError: If Supabase Auth rejects the update
        """
        client = SupabaseClient.get_client()

        attributes: dict[str, Any] = {}
        if name is not None:
            attributes["user_metadata"] = {"name": name}
        if email:
            attributes["email"] = email

        try:
            response = client.auth.admin.update_user_by_id(normalize_uuid(user_id), attributes)
        except Exception as e:
            logger.error(f"Failed to update profile for {user_id}: {e}")
            raise ProfileUpdateError(str(e))

        if not response or not response.user:
            raise ProfileUpdateError("Update returned no user")

        logger.info(f"Updated profile for user: {user_id}")
        return {
            **user_summary(response.user),
            "updated_at": _timestamp(response.user.updated_at),
        }

    @staticmethod
    def get_public_user(email: str | None) -> dict[str, Any]:
        """
        Fetch the user's row from the public users table by email.

        Raises:
            UserNotFoundError: If there is no row for this email
            DatabaseOperationError: If the query fails
        """
        if not email:
            raise UserNotFoundError(email)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("users")
                .select("id, username, email, created_at")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch public user: {e}")
            raise DatabaseOperationError("Failed to fetch user", str(e))

        rows = response.data or []
        if not rows:
            raise UserNotFoundError(email)
        return rows[0]

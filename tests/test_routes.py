# =============================================================================
# tests/test_routes.py - HTTP Endpoint Tests
# =============================================================================
# Exercises the FastAPI app through TestClient. The auth dependency is
# overridden with a fixed user and services are patched at the router
# modules, so these tests cover routing, status codes, serialization and
# error handling only.
# =============================================================================

from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, get_current_user
from app.dependencies import get_supabase_client
from app.exceptions import (
    ApiKeyDecryptionError,
    DatabaseOperationError,
    InvalidCredentialsError,
    MissingFieldsError,
    ProjectNotFoundError,
    ProviderKeyNotFoundError,
)
from app.main import app

ROW_ID = "2f1c6a4e-8d4b-4c1e-9a7d-0b6b1f7e9c11"


@pytest.fixture
def current_user(user_id):
    return AuthUser(id=UUID(user_id), email="ada@example.com", name="Ada")


@pytest.fixture
def client(current_user):
    """TestClient with authentication bypassed."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """TestClient with real authentication."""
    app.dependency_overrides.clear()
    return TestClient(app)


# =============================================================================
# Authentication
# =============================================================================

class TestAuthRequired:
    """Protected routes reject requests without a valid bearer token."""

    @pytest.mark.parametrize("method, path", [
        ("get", "/api/projects"),
        ("get", "/api/chat"),
        ("get", "/api/api-keys"),
        ("get", "/api/user-settings"),
        ("get", "/api/session"),
        ("get", "/api/auth/me"),
        ("delete", f"/api/projects/{ROW_ID}"),
    ])
    def test_missing_token(self, anonymous_client, method, path):
        response = getattr(anonymous_client, method)(path)

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, anonymous_client, make_token):
        response = anonymous_client.get(
            "/api/session",
            headers={"Authorization": f"Bearer {make_token(expires_in=-60)}"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_valid_token(self, anonymous_client, make_token, user_id):
        response = anonymous_client.get(
            "/api/session",
            headers={"Authorization": f"Bearer {make_token(name=None)}"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "user": {"id": user_id, "email": "ada@example.com", "name": "ada@example.com"},
            "authenticated": True,
        }


class TestAuthRoutes:
    """Tests for /api/auth."""

    def test_register(self, anonymous_client, user_id):
        with patch("app.auth.routes.AccountService") as service:
            service.register.return_value = {
                "message": "User created successfully",
                "token": "tok",
                "user": {"id": user_id, "email": "ada@example.com", "name": "Ada"},
            }

            response = anonymous_client.post(
                "/api/auth/register",
                json={"email": "ada@example.com", "password": "pw", "name": "Ada"},
            )

        assert response.status_code == 201
        assert response.json()["token"] == "tok"
        service.register.assert_called_once_with("ada@example.com", "pw", "Ada")

    def test_register_without_token(self, anonymous_client, user_id):
        with patch("app.auth.routes.AccountService") as service:
            service.register.return_value = {
                "message": "User created successfully",
                "user": {"id": user_id, "email": "ada@example.com", "name": "Ada"},
            }

            response = anonymous_client.post("/api/auth/register", json={})

        assert response.status_code == 201
        assert "token" not in response.json()

    def test_register_missing_fields(self, anonymous_client):
        with patch("app.auth.routes.AccountService") as service:
            service.register.side_effect = MissingFieldsError(
                "Email, password, and name are required", ["name"]
            )

            response = anonymous_client.post("/api/auth/register", json={"email": "a@b.c"})

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Email, password, and name are required"
        assert body["code"] == "MISSING_FIELDS"

    def test_login_invalid(self, anonymous_client):
        with patch("app.auth.routes.AccountService") as service:
            service.login.side_effect = InvalidCredentialsError()

            response = anonymous_client.post(
                "/api/auth/login", json={"email": "ada@example.com", "password": "nope"}
            )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_me_uses_auth_profile(self, client, user_id):
        with patch("app.auth.routes.AccountService") as service:
            service.get_auth_user.return_value = {
                "id": user_id,
                "email": "ada@example.com",
                "name": "Ada",
                "created_at": "2024-01-15T10:00:00+00:00",
            }

            response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["createdAt"] == "2024-01-15T10:00:00+00:00"

    def test_me_falls_back_to_token(self, client, user_id):
        with patch("app.auth.routes.AccountService") as service:
            service.get_auth_user.return_value = None

            response = client.get("/api/auth/me")

        assert response.json() == {
            "id": user_id,
            "email": "ada@example.com",
            "name": "Ada",
            "createdAt": None,
        }

    def test_update_profile(self, client, user_id):
        with patch("app.auth.routes.AccountService") as service:
            service.update_profile.return_value = {
                "id": user_id,
                "email": "ada@example.com",
                "name": "Ada L",
                "updated_at": "2024-02-01T00:00:00Z",
            }

            response = client.put("/api/auth/profile", json={"name": "Ada L"})

        assert response.status_code == 200
        assert response.json()["updatedAt"] == "2024-02-01T00:00:00Z"
        service.update_profile.assert_called_once_with(UUID(user_id), name="Ada L", email=None)

    def test_legacy_lookup(self, client, user_id):
        with patch("app.auth.routes.AccountService") as service:
            service.get_public_user.return_value = {
                "id": user_id,
                "username": "ada",
                "email": "ada@example.com",
                "created_at": "2024-01-15",
            }

            response = client.get("/api/auth")

        assert response.json() == {
            "authenticated": True,
            "user": {"id": user_id, "email": "ada@example.com", "name": "ada", "created_at": "2024-01-15"},
        }

    def test_verify(self, client, user_id):
        response = client.get("/api/auth/verify")

        assert response.json() == {"valid": True, "user_id": user_id, "email": "ada@example.com"}


# =============================================================================
# Projects
# =============================================================================

class TestProjectRoutes:
    """Tests for /api/projects."""

    def test_list_camel_case(self, client, sample_project_row):
        with patch("app.routers.projects.ProjectService") as service:
            service.list_projects.return_value = [sample_project_row]

            response = client.get("/api/projects")

        assert response.status_code == 200
        project = response.json()[0]
        assert project["conversationStarters"] == ["Review this diff"]
        assert "conversation_starters" not in project

    def test_create(self, client, current_user, sample_project_row):
        with patch("app.routers.projects.ProjectService") as service:
            service.create_project.return_value = sample_project_row

            response = client.post("/api/projects", json={
                "name": "Code Reviewer",
                "description": "Reviews Python pull requests",
                "instructions": "Be thorough",
                "conversationStarters": ["Review this diff"],
            })

        assert response.status_code == 201
        user_id, request = service.create_project.call_args.args
        assert user_id == current_user.id
        assert request.conversation_starters == ["Review this diff"]

    def test_create_missing_fields(self, client):
        with patch("app.routers.projects.ProjectService") as service:
            service.create_project.side_effect = MissingFieldsError(
                "Name, description, and instructions are required", ["instructions"]
            )

            response = client.post("/api/projects", json={"name": "x", "description": "y"})

        assert response.status_code == 400
        assert response.json()["details"] == {"fields": ["instructions"]}

    def test_get_not_found(self, client):
        with patch("app.routers.projects.ProjectService") as service:
            service.get_project.side_effect = ProjectNotFoundError(ROW_ID)

            response = client.get(f"/api/projects/{ROW_ID}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Project not found"

    def test_invalid_id(self, client):
        response = client.get("/api/projects/not-a-uuid")

        assert response.status_code == 422

    def test_delete(self, client, current_user):
        with patch("app.routers.projects.ProjectService") as service:
            response = client.delete(f"/api/projects/{ROW_ID}")

        assert response.json() == {"message": "Project deleted successfully"}
        service.delete_project.assert_called_once_with(UUID(ROW_ID), current_user.id)

    def test_database_error(self, client):
        with patch("app.routers.projects.ProjectService") as service:
            service.list_projects.side_effect = DatabaseOperationError("Failed to fetch projects", "timeout")

            response = client.get("/api/projects")

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"


# =============================================================================
# Chats
# =============================================================================

class TestChatRoutes:
    """Tests for /api/chat."""

    def test_list_filtered_by_project(self, client, current_user, sample_chat_row):
        with patch("app.routers.chats.ChatService") as service:
            service.list_chats.return_value = [sample_chat_row]

            response = client.get("/api/chat", params={"projectId": ROW_ID})

        service.list_chats.assert_called_once_with(current_user.id, project_id=ROW_ID)
        chat = response.json()[0]
        assert chat["messages"] == '[{"role":"user","content":"Hi"}]'
        assert chat["projectId"] is None
        assert "updatedAt" in chat

    def test_create(self, client, sample_chat_row):
        with patch("app.routers.chats.ChatService") as service:
            service.create_chat.return_value = sample_chat_row

            response = client.post("/api/chat", json={"title": "t", "messages": []})

        assert response.status_code == 201

    def test_update(self, client, sample_chat_row):
        with patch("app.routers.chats.ChatService") as service:
            service.update_chat.return_value = sample_chat_row

            response = client.put(f"/api/chat/{ROW_ID}", json={"title": "Renamed"})

        assert response.status_code == 200
        request = service.update_chat.call_args.args[2]
        assert request.to_update_row() == {"title": "Renamed"}

    def test_delete(self, client):
        with patch("app.routers.chats.ChatService"):
            response = client.delete(f"/api/chat/{ROW_ID}")

        assert response.json() == {"message": "Chat deleted successfully"}


# =============================================================================
# API Keys
# =============================================================================

class TestApiKeyRoutes:
    """Tests for /api/api-keys."""

    def test_list_shape(self, client, sample_api_key_row):
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.list_api_keys.return_value = [sample_api_key_row]

            response = client.get("/api/api-keys")

        assert response.json() == {"apiKeys": [sample_api_key_row]}

    def test_create_hides_key_material(self, client, sample_api_key_row):
        row = {**sample_api_key_row, "encrypted_key": "aa:bb:cc", "user_id": "u"}
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.create_api_key.return_value = row

            response = client.post(
                "/api/api-keys",
                json={"name": "Personal", "provider": "openai", "apiKey": "sk-1"},
            )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "API key created successfully"
        assert body["apiKey"] == sample_api_key_row

    def test_get_decrypted(self, client, sample_api_key_row):
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.get_api_key.return_value = {**sample_api_key_row, "api_key": "sk-secret"}

            response = client.get(f"/api/api-keys/{ROW_ID}")

        body = response.json()
        assert body["apiKey"] == "sk-secret"
        assert body["createdAt"] == sample_api_key_row["created_at"]

    def test_get_corrupt(self, client):
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.get_api_key.side_effect = ApiKeyDecryptionError(ROW_ID)

            response = client.get(f"/api/api-keys/{ROW_ID}")

        assert response.status_code == 500
        assert response.json()["code"] == "API_KEY_DECRYPTION_FAILED"

    def test_provider_route_not_shadowed(self, client, current_user):
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.get_key_for_provider.return_value = {
                "id": ROW_ID, "name": "Personal", "provider": "xai", "key_value": "xai-1",
            }

            response = client.get("/api/api-keys/provider/xai")

        service.get_key_for_provider.assert_called_once_with(current_user.id, "xai")
        assert response.json() == {"id": ROW_ID, "name": "Personal", "provider": "xai", "keyValue": "xai-1"}

    def test_provider_missing(self, client):
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.get_key_for_provider.side_effect = ProviderKeyNotFoundError("xai")

            response = client.get("/api/api-keys/provider/xai")

        assert response.status_code == 404
        assert response.json()["detail"] == "API key not found for this provider"

    def test_update(self, client, sample_api_key_row):
        with patch("app.routers.api_keys.ApiKeyService") as service:
            service.update_api_key.return_value = sample_api_key_row

            response = client.put(f"/api/api-keys/{ROW_ID}", json={"keyValue": "sk-new"})

        assert response.json()["message"] == "API key updated successfully"
        assert service.update_api_key.call_args.args[2].secret == "sk-new"

    def test_delete(self, client):
        with patch("app.routers.api_keys.ApiKeyService"):
            response = client.delete(f"/api/api-keys/{ROW_ID}")

        assert response.json() == {"message": "API key deleted successfully"}


# =============================================================================
# User Settings
# =============================================================================

class TestUserSettingsRoutes:
    """Tests for /api/user-settings."""

    def test_get(self, client):
        with patch("app.routers.user_settings.SettingsService") as service:
            service.get_settings.return_value = {"theme": "dark", "language": "en", "notifications": True}

            response = client.get("/api/user-settings")

        assert response.json() == {"theme": "dark", "language": "en", "notifications": True}

    @pytest.mark.parametrize("method", ["put", "post"])
    def test_save_accepts_put_and_post(self, client, current_user, method):
        with patch("app.routers.user_settings.SettingsService") as service:
            service.save_settings.return_value = {"user_id": str(current_user.id), "theme": "light"}

            response = getattr(client, method)(
                "/api/user-settings", json={"theme": "light", "user_id": "someone-else"}
            )

        assert response.status_code == 200
        user_id, request = service.save_settings.call_args.args
        assert user_id == current_user.id
        assert request.to_upsert_row() == {"theme": "light"}


# =============================================================================
# Health
# =============================================================================

class TestHealthRoutes:
    """Tests for health endpoints."""

    def test_health(self, anonymous_client):
        response = anonymous_client.get("/api/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "OK"
        assert body["message"] == "GrokTalk API is running"

    def test_ready(self, anonymous_client):
        supabase = MagicMock()
        app.dependency_overrides[get_supabase_client] = lambda: supabase

        response = anonymous_client.get("/api/health/ready")

        app.dependency_overrides.clear()
        assert response.json()["status"] == "ready"
        supabase.ping.assert_called_once_with("projects")

    def test_degraded(self, anonymous_client):
        supabase = MagicMock()
        supabase.ping.side_effect = Exception("connection refused")
        app.dependency_overrides[get_supabase_client] = lambda: supabase

        response = anonymous_client.get("/api/health/ready")

        app.dependency_overrides.clear()
        body = response.json()
        assert body["status"] == "degraded"
        assert body["checks"]["database"].startswith("unhealthy")

    def test_live(self, anonymous_client):
        assert anonymous_client.get("/api/health/live").json()["status"] == "alive"

    def test_root(self, anonymous_client):
        body = anonymous_client.get("/").json()

        assert body["name"] == "GrokTalk API"
        assert body["health"] == "/api/health"

"""Unit tests for the login, signup and logout routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from iam.application.services import AccountService
from iam.application.value_objects import AuthenticatedIdentity, IssuedSession
from iam.dependencies.account import get_account_service
from iam.dependencies.authentication import get_authenticated_identity
from iam.dependencies.tenant import get_resolved_tenant
from iam.domain.aggregates import User
from iam.ports.exceptions import (
    DuplicateEmailError,
    TenantUnresolvedError,
    UnauthenticatedError,
    ValidationFailedError,
)
from infrastructure.settings import SessionSettings, get_session_settings
from main import app

TOKEN = "ab" * 32


@pytest.fixture
def mock_account_service() -> AsyncMock:
    """Mock AccountService for testing."""
    return AsyncMock(spec=AccountService)


@pytest.fixture
def user(tenant_a) -> User:
    return User.create(
        tenant_id=tenant_a.id,
        email="alice@example.com",
        password_hash="hashed:secret1",
        name="Alice",
    )


@pytest.fixture
def client(mock_account_service, tenant_a):
    app.dependency_overrides[get_account_service] = lambda: mock_account_service
    app.dependency_overrides[get_resolved_tenant] = lambda: tenant_a
    app.dependency_overrides[get_session_settings] = lambda: SessionSettings(
        lifetime_days=30, cookie_name="session_token", cookie_secure=False
    )
    yield TestClient(app, base_url="http://acme.app.com")
    app.dependency_overrides.clear()


def _set_cookie(response) -> str:
    return response.headers["set-cookie"].lower()


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_success_sets_cookie(self, client, mock_account_service, user):
        """A successful login returns the user and sets the session cookie."""
        mock_account_service.login.return_value = IssuedSession(user=user, token=TOKEN)

        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "secret1"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "user": {"id": user.id.value, "email": "alice@example.com", "name": "Alice"},
        }
        cookie = _set_cookie(response)
        assert f"session_token={TOKEN}" in cookie
        assert "httponly" in cookie
        assert "samesite=lax" in cookie
        assert "path=/" in cookie
        assert f"max-age={30 * 24 * 60 * 60}" in cookie
        assert "secure" not in cookie

    def test_response_never_contains_digest(self, client, mock_account_service, user):
        """The password digest is never serialized."""
        mock_account_service.login.return_value = IssuedSession(user=user, token=TOKEN)

        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "secret1"},
        )

        assert "hashed:secret1" not in response.text
        assert "password" not in response.json()["user"]

    def test_secure_cookie_over_https(self, mock_account_service, user, tenant_a):
        """Requests served over TLS get a Secure cookie."""
        mock_account_service.login.return_value = IssuedSession(user=user, token=TOKEN)
        app.dependency_overrides[get_account_service] = lambda: mock_account_service
        app.dependency_overrides[get_resolved_tenant] = lambda: tenant_a
        try:
            client = TestClient(app, base_url="https://acme.app.com")
            response = client.post(
                "/api/auth/login",
                json={"email": "alice@example.com", "password": "secret1"},
            )
        finally:
            app.dependency_overrides.clear()

        assert "secure" in _set_cookie(response)

    def test_unresolved_tenant_returns_404(self, client, mock_account_service):
        """Login on an unknown tenant host returns 404."""
        mock_account_service.login.side_effect = TenantUnresolvedError("Tenant not found")

        response = client.post("/api/auth/login", json={})

        assert response.status_code == 404
        assert response.json()["detail"] == "Tenant not found"

    def test_missing_fields_returns_400(self, client, mock_account_service):
        """Missing credentials return 400 with the service's message."""
        mock_account_service.login.side_effect = ValidationFailedError(
            "Email and password are required"
        )

        response = client.post("/api/auth/login", json={"email": "a@b.co"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email and password are required"

    def test_bad_credentials_returns_401(self, client, mock_account_service):
        """Wrong credentials return the generic 401 without a cookie."""
        mock_account_service.login.side_effect = UnauthenticatedError(
            "Invalid email or password"
        )

        response = client.post(
            "/api/auth/login", json={"email": "a@b.co", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"
        assert "set-cookie" not in response.headers

    def test_unexpected_error_returns_500(self, client, mock_account_service):
        """Internal failures return a detail-free 500."""
        mock_account_service.login.side_effect = RuntimeError("connection reset")

        response = client.post(
            "/api/auth/login", json={"email": "a@b.co", "password": "secret1"}
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"
        assert "connection reset" not in response.text

    def test_malformed_body_returns_400(self, client):
        """A body that is not JSON is a 400, not a 422."""
        response = client.post(
            "/api/auth/login",
            content="not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400


class TestSignup:
    """Tests for POST /api/auth/signup."""

    def test_success_returns_201(self, client, mock_account_service, user, tenant_a):
        """A successful signup returns 201, the user and a cookie."""
        mock_account_service.signup.return_value = IssuedSession(user=user, token=TOKEN)

        response = client.post(
            "/api/auth/signup",
            json={"email": "Alice@Example.com", "password": "secret1", "name": "Alice"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "alice@example.com"
        assert f"session_token={TOKEN}" in _set_cookie(response)
        mock_account_service.signup.assert_awaited_once_with(
            tenant_a, "Alice@Example.com", "secret1", "Alice"
        )

    def test_duplicate_returns_409(self, client, mock_account_service):
        """A duplicate email in the tenant returns 409."""
        mock_account_service.signup.side_effect = DuplicateEmailError("exists")

        response = client.post(
            "/api/auth/signup", json={"email": "a@b.co", "password": "secret1"}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "User with this email already exists"

    def test_weak_password_returns_400(self, client, mock_account_service):
        """Validation failures return 400 with the correctable message."""
        mock_account_service.signup.side_effect = ValidationFailedError(
            "Password must be at least 6 characters long"
        )

        response = client.post(
            "/api/auth/signup", json={"email": "a@b.co", "password": "123"}
        )

        assert response.status_code == 400
        assert "at least 6 characters" in response.json()["detail"]

    def test_unresolved_tenant_returns_404(self, client, mock_account_service):
        """Signup on an unknown tenant host returns 404."""
        mock_account_service.signup.side_effect = TenantUnresolvedError("Tenant not found")

        response = client.post(
            "/api/auth/signup", json={"email": "a@b.co", "password": "secret1"}
        )

        assert response.status_code == 404


class TestLogout:
    """Tests for the logout routes."""

    def test_post_logout_revokes_and_clears(self, client, mock_account_service):
        """POST logout revokes the cookie's session and clears the cookie."""
        response = client.post(
            "/api/auth/logout", headers={"Cookie": f"session_token={TOKEN}"}
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_account_service.logout.assert_awaited_once_with(TOKEN)
        cookie = _set_cookie(response)
        assert 'session_token=""' in cookie or "session_token=;" in cookie
        assert "max-age=0" in cookie

    def test_post_logout_without_cookie(self, client, mock_account_service):
        """Logout succeeds without a session."""
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        mock_account_service.logout.assert_awaited_once_with(None)

    def test_get_logout_redirects_home(self, client, mock_account_service):
        """GET logout revokes the session and redirects to /."""
        response = client.get(
            "/api/auth/logout",
            headers={"Cookie": f"session_token={TOKEN}"},
            follow_redirects=False,
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/"
        assert "max-age=0" in _set_cookie(response)
        mock_account_service.logout.assert_awaited_once_with(TOKEN)

    def test_get_logout_redirects_even_on_failure(self, client, mock_account_service):
        """The redirect happens even when revocation failed."""
        mock_account_service.logout.side_effect = RuntimeError("db down")

        response = client.get("/api/auth/logout", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/"

    def test_logout_all(self, client, mock_account_service, user, tenant_a):
        """logout-all revokes every session in the tenant and reports the count."""
        identity = AuthenticatedIdentity(user=user, tenant=tenant_a)
        app.dependency_overrides[get_authenticated_identity] = lambda: identity
        mock_account_service.logout_everywhere.return_value = 3

        response = client.post("/api/auth/logout-all")

        assert response.status_code == 200
        assert response.json()["revoked_sessions"] == 3
        mock_account_service.logout_everywhere.assert_awaited_once_with(identity)
        assert "max-age=0" in _set_cookie(response)

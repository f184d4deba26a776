"""End-to-end request flows across two tenants.

The real services, dependencies and routes run against the in-memory
repositories; only storage is faked.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from iam.dependencies.account import get_dashboard_service, get_password_hasher
from iam.dependencies.data_access import get_scoped_data_access
from iam.dependencies.session import get_session_store
from iam.dependencies.tenant import get_tenant_resolver
from infrastructure.database.dependencies import get_write_session
from main import app

ACME = {"host": "acme.app.com"}
GLOBEX = {"host": "globex.app.com"}


@pytest.fixture
def client(
    mock_session, data_access, session_store, dashboard_service, resolver, hasher
):
    app.dependency_overrides[get_write_session] = lambda: mock_session
    app.dependency_overrides[get_scoped_data_access] = lambda: data_access
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_tenant_resolver] = lambda: resolver
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_dashboard_service] = lambda: dashboard_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _signup(client, headers, email="bob@x.com", password="secret1"):
    return client.post(
        "/api/auth/signup",
        json={"email": email, "password": password},
        headers=headers,
    )


def _token(response) -> str:
    return response.cookies["session_token"]


class TestTenantIsolationFlow:
    """Scenarios spanning resolution, sessions and scoped data access."""

    def test_signup_then_dashboard(self, client):
        """A new user sees their own tenant on the dashboard."""
        token = _token(_signup(client, ACME))

        response = client.get(
            "/api/dashboard", headers={**ACME, "Cookie": f"session_token={token}"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tenant"]["subdomain"] == "acme"
        assert body["user"]["email"] == "bob@x.com"
        assert body["stats"] == {"total_users": 1, "active_sessions": 1}

    def test_token_is_rejected_on_other_tenant(self, client):
        """A session from tenant A is a generic 401 on tenant B."""
        token = _token(_signup(client, ACME))

        response = client.get(
            "/api/dashboard", headers={**GLOBEX, "Cookie": f"session_token={token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    def test_same_email_in_two_tenants(self, client):
        """One email signs up independently in two tenants."""
        acme = _signup(client, ACME, password="acme-pass")
        globex = _signup(client, GLOBEX, password="globex-pass")

        assert acme.status_code == 201
        assert globex.status_code == 201
        assert acme.json()["user"]["id"] != globex.json()["user"]["id"]

        wrong = client.post(
            "/api/auth/login",
            json={"email": "bob@x.com", "password": "acme-pass"},
            headers=GLOBEX,
        )
        assert wrong.status_code == 401

    def test_duplicate_in_same_tenant(self, client):
        """A second signup with the same email in one tenant is a conflict."""
        _signup(client, ACME)

        assert _signup(client, ACME).status_code == 409

    def test_unknown_tenant_on_public_and_protected_routes(self, client):
        """Public routes answer 404 and protected routes 401 for an unknown tenant."""
        host = {"host": "initech.app.com"}

        assert _signup(client, host).status_code == 404
        assert client.get("/api/dashboard", headers=host).status_code == 401

    def test_logout_invalidates_session(self, client):
        """After logout the token no longer authenticates."""
        token = _token(_signup(client, ACME))
        cookie = {"Cookie": f"session_token={token}"}

        assert client.post("/api/auth/logout", headers={**ACME, **cookie}).status_code == 200
        response = client.get("/api/dashboard", headers={**ACME, **cookie})

        assert response.status_code == 401

    def test_settings_are_isolated(self, client):
        """Settings written in one tenant are not visible in another."""
        acme = {**ACME, "Cookie": f"session_token={_token(_signup(client, ACME))}"}
        globex = {
            **GLOBEX,
            "Cookie": f"session_token={_token(_signup(client, GLOBEX))}",
        }

        client.put("/api/settings", json={"settings": {"plan": "pro"}}, headers=acme)

        assert client.get("/api/settings", headers=acme).json()["settings"] == {
            "plan": "pro"
        }
        assert client.get("/api/settings", headers=globex).json()["settings"] is None

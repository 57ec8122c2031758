"""Unit tests for user moderation routes."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient


@pytest.mark.unit
class TestListUsers:
    """Tests for GET /api/v1/users and /users/departments."""

    def test_admin_lists_users(self, client: TestClient, alice, root, login) -> None:
        """All accounts, sorted by username."""
        login(root)

        response = client.get("/api/v1/users")

        assert response.status_code == status.HTTP_200_OK
        assert [u["username"] for u in response.json()["data"]] == ["alice", "root"]

    def test_student_refused(self, client: TestClient, alice, login) -> None:
        """403 for students."""
        login(alice)

        assert client.get("/api/v1/users").status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_refused(self, client: TestClient) -> None:
        """401 without a session."""
        assert client.get("/api/v1/users").status_code == status.HTTP_401_UNAUTHORIZED

    def test_departments(self, client: TestClient, alice, root, login) -> None:
        """Distinct declared departments."""
        login(root)

        response = client.get("/api/v1/users/departments")

        assert response.json()["data"] == ["Math"]


@pytest.mark.unit
class TestUpdateRole:
    """Tests for PATCH /api/v1/users/{id}/role."""

    def test_admin_promotes(self, client: TestClient, alice, root, login) -> None:
        """Role changes."""
        login(root)

        response = client.patch(f"/api/v1/users/{alice.id}/role", json={"role": "ADMIN"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["role"] == "ADMIN"

    def test_unknown_role(self, client: TestClient, alice, root, login) -> None:
        """422 for values outside the enumeration."""
        login(root)

        response = client.patch(f"/api/v1/users/{alice.id}/role", json={"role": "GOD"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_self_change_refused(self, client: TestClient, root, login) -> None:
        """403 when an admin targets themself."""
        login(root)

        response = client.patch(f"/api/v1/users/{root.id}/role", json={"role": "STUDENT"})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_user(self, client: TestClient, root, login) -> None:
        """404 for invalid ID."""
        login(root)

        response = client.patch("/api/v1/users/ghost/role", json={"role": "ADMIN"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.unit
class TestUpdateStatus:
    """Tests for PATCH /api/v1/users/{id}/status."""

    def test_admin_deactivates(self, client: TestClient, alice, root, login) -> None:
        """Active flag changes."""
        login(root)

        response = client.patch(f"/api/v1/users/{alice.id}/status", json={"active": False})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["active"] is False

    def test_student_refused(self, client: TestClient, alice, bob, login) -> None:
        """403 for students."""
        login(alice)

        response = client.patch(f"/api/v1/users/{bob.id}/status", json={"active": False})

        assert response.status_code == status.HTTP_403_FORBIDDEN

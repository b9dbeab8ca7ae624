"""Tests for health, user and preference endpoints."""

from fastapi.testclient import TestClient

from learnme import __version__
from learnme.web.api import create_app


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert "timestamp" in data


class TestUnhandledErrors:
    def test_json_500(self, monkeypatch):
        """Unexpected exceptions become a generic JSON 500."""

        def boom(user_id):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("learnme.web.routes.users.get_user", boom)
        client = TestClient(create_app(), raise_server_exceptions=False)

        response = client.get("/api/users/usr1")
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


class TestCreateUser:
    """Tests for POST /api/users."""

    def test_create_minimal(self, client):
        response = client.post("/api/users", json={"name": "Pedro"})
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Pedro"
        assert data["id"].startswith("usr")
        assert data["email"] is None
        assert "createdAt" in data

    def test_create_full(self, client):
        response = client.post(
            "/api/users",
            json={
                "name": "María",
                "email": "maria@example.com",
                "bio": "Learning Rust",
                "github": "https://github.com/maria",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "maria@example.com"
        assert data["github"] == "https://github.com/maria"

    def test_invalid_email(self, client):
        response = client.post("/api/users", json={"name": "C", "email": "not-an-email"})
        assert response.status_code == 400
        assert "email" in response.json()["detail"].lower()

    def test_duplicate_email(self, client):
        client.post("/api/users", json={"name": "A", "email": "dup@example.com"})
        response = client.post("/api/users", json={"name": "B", "email": "dup@example.com"})
        assert response.status_code == 409


class TestReadUser:
    def test_found(self, client, user):
        response = client.get(f"/api/users/{user.user_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Ana Lopez"

    def test_not_found(self, client):
        assert client.get("/api/users/usr-missing").status_code == 404


class TestPreferences:
    """Tests for GET/PUT /api/user/preferences."""

    def test_requires_header(self, client):
        response = client.get("/api/user/preferences")
        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_unknown_user(self, client):
        response = client.get("/api/user/preferences", headers={"X-User-Id": "usr-missing"})
        assert response.status_code == 404

    def test_defaults(self, client, auth):
        response = client.get("/api/user/preferences", headers=auth)
        assert response.status_code == 200
        prefs = response.json()["user"]
        assert prefs["theme"] == "system"
        assert prefs["autoSave"] is True
        assert prefs["showHints"] is True
        assert prefs["learningLevel"] == "beginner"
        assert prefs["preferredPace"] == "normal"
        assert prefs["favoriteLanguages"] == []

    def test_partial_update(self, client, auth):
        response = client.put(
            "/api/user/preferences",
            headers=auth,
            json={"theme": "dark", "favoriteLanguages": ["python", "go"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["theme"] == "dark"
        assert body["user"]["favoriteLanguages"] == ["python", "go"]
        # Untouched fields keep their values
        assert body["user"]["learningLevel"] == "beginner"

    def test_invalid_value(self, client, auth):
        response = client.put("/api/user/preferences", headers=auth, json={"theme": "neon"})
        assert response.status_code == 422

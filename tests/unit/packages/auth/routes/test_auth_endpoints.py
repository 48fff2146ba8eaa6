from common.core.exceptions import RemoteServiceError
from tests.fixtures import CREDENTIALS_HEADER


class TestAuthEndpoints:
    async def test_login_returns_token_and_user(self, client, mock_backend):
        mock_backend.fetch_rows.return_value = [
            CREDENTIALS_HEADER,
            ["Bob Smith", "bob", "pw", "user", "Document,Calendar", ""],
        ]

        response = await client.post(
            "/api/v1/auth/login", json={"username": "bob", "password": "pw"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["tokenType"] == "bearer"
        assert data["user"] == {
            "userId": "bob",
            "name": "Bob Smith",
            "role": "user",
            "permissions": ["Document", "Calendar"],
        }

    async def test_login_missing_fields(self, client, mock_backend):
        response = await client.post("/api/v1/auth/login", json={"username": "bob"})

        assert response.status_code == 400
        mock_backend.fetch_rows.assert_not_called()

    async def test_login_invalid_credentials(self, client, mock_backend):
        mock_backend.fetch_rows.return_value = [CREDENTIALS_HEADER]

        response = await client.post(
            "/api/v1/auth/login", json={"username": "bob", "password": "pw"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    async def test_login_remote_failure(self, client, mock_backend):
        mock_backend.fetch_rows.side_effect = RemoteServiceError("Server error: 500")

        response = await client.post(
            "/api/v1/auth/login", json={"username": "bob", "password": "pw"}
        )

        assert response.status_code == 502

    async def test_me_and_logout(self, client, auth_headers):
        me = await client.get("/api/v1/auth/me", headers=auth_headers)
        assert me.status_code == 200
        assert me.json()["role"] == "admin"

        logout = await client.post("/api/v1/auth/logout", headers=auth_headers)
        assert logout.status_code == 204

        after = await client.get("/api/v1/auth/me", headers=auth_headers)
        assert after.status_code == 401

    async def test_me_requires_bearer_token(self, client):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    async def test_missing_permission_forbidden(self, client, mock_backend):
        mock_backend.fetch_rows.return_value = [
            CREDENTIALS_HEADER,
            ["Carl", "carl", "pw", "user", "Calendar", ""],
        ]
        login = await client.post(
            "/api/v1/auth/login", json={"username": "carl", "password": "pw"}
        )
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        response = await client.get("/api/v1/documents/", headers=headers)

        assert response.status_code == 403

"""
Unit tests for authentication endpoints.

Tests:
- POST /auth/token
- POST /auth/register
"""

from jobly.core.security import decode_token


class TestToken:
    """Test the login endpoint"""

    def test_works(self, client):
        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        claims = decode_token(response.json()["token"])
        assert claims["sub"] == "u1"
        assert claims["is_admin"] is False

    def test_admin_claim(self, client):
        response = client.post("/auth/token", json={"username": "admin", "password": "admin1password"})
        assert decode_token(response.json()["token"])["is_admin"] is True

    def test_unknown_user(self, client):
        response = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid username/password"

    def test_wrong_password(self, client):
        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})
        assert response.status_code == 401

    def test_missing_data(self, client):
        assert client.post("/auth/token", json={"username": "u1"}).status_code == 400

    def test_invalid_data(self, client):
        assert client.post("/auth/token", json={"username": 42, "password": "above-is-a-number"}).status_code == 400


class TestRegister:
    """Test the self-registration endpoint"""

    NEW_USER = {
        "username": "new",
        "firstName": "first",
        "lastName": "last",
        "password": "password",
        "email": "new@email.com",
    }

    def test_works(self, client):
        response = client.post("/auth/register", json=self.NEW_USER)

        assert response.status_code == 201
        claims = decode_token(response.json()["token"])
        assert claims["sub"] == "new"
        assert claims["is_admin"] is False

    def test_cannot_register_as_admin(self, client):
        response = client.post("/auth/register", json={**self.NEW_USER, "isAdmin": True})
        assert response.status_code == 400

    def test_new_user_can_log_in(self, client):
        client.post("/auth/register", json=self.NEW_USER)

        response = client.post("/auth/token", json={"username": "new", "password": "password"})
        assert response.status_code == 200

    def test_duplicate(self, client):
        response = client.post("/auth/register", json={**self.NEW_USER, "username": "u1"})
        assert response.status_code == 400

    def test_missing_data(self, client):
        assert client.post("/auth/register", json={"username": "new"}).status_code == 400

    def test_invalid_email(self, client):
        response = client.post("/auth/register", json={**self.NEW_USER, "email": "not-an-email"})
        assert response.status_code == 400

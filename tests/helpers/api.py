"""HTTP helpers for API route tests."""

from fastapi.testclient import TestClient

SEED_PASSWORD = "password123"


def login(client: TestClient, username: str, password: str = SEED_PASSWORD) -> dict[str, str]:
    """Log in and return the Authorization header for the session."""
    response = client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}

"""Unit tests for the health endpoint."""


def test_health_is_public(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_openapi_lists_api_routes(client, project_version):
    schema = client.get("/openapi.json").json()

    assert schema["info"]["version"] == project_version
    assert "/api/tasks/" in schema["paths"]
    assert "/api/projects/{project_id}" in schema["paths"]

"""Unit tests for LoggingMiddleware."""

from taskhub.api.middleware import CORRELATION_HEADER


def test_correlation_id_is_echoed(client):
    response = client.get("/api/health", headers={CORRELATION_HEADER: "req-abc"})
    assert response.headers[CORRELATION_HEADER] == "req-abc"


def test_correlation_id_is_generated(client):
    first = client.get("/api/health").headers[CORRELATION_HEADER]
    second = client.get("/api/health").headers[CORRELATION_HEADER]

    assert first
    assert first != second


def test_error_responses_carry_correlation_id(client):
    response = client.get("/api/auth/profile", headers={CORRELATION_HEADER: "req-401"})

    assert response.status_code == 401
    assert response.headers[CORRELATION_HEADER] == "req-401"

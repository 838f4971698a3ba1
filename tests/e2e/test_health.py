"""End-to-end tests for health endpoints."""


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_database_health(client):
    response = client.get("/health/database")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "database": "reachable",
        "inviteCodes": 0,
    }


def test_cors_debug(client):
    response = client.get("/health/cors", headers={"Origin": "https://app.lacs.cc"})

    data = response.json()
    assert data["origin"] == "https://app.lacs.cc"
    assert data["origin_allowed"] is True
    assert "https://app.lacs.cc" in data["allowed_origins"]


def test_cors_debug_omits_credentials(client):
    response = client.get(
        "/health/cors",
        headers={
            "Origin": "https://app.lacs.cc",
            "Authorization": "Bearer secret-token",
            "Cookie": "sb-access-token=secret-token",
            "X-Request-Id": "abc",
        },
    )

    headers = response.json()["headers"]
    assert "authorization" not in headers
    assert "cookie" not in headers
    assert headers["x-request-id"] == "abc"
    assert "secret-token" not in response.text

def test_liveness_probe(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "up"
    assert body["environment"] == "testing"
    assert {"version", "timestamp"} <= set(body)


def test_readiness_reports_database(client):
    response = client.get("/readiness")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "components": {"database": "connected"}}


def test_root_banner(client):
    body = client.get("/").json()
    assert body["message"] == "VacaPlanner API"
    assert body["docs"] == "/docs"


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Process-Time" in response.headers


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 32


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "error" in response.json()

from fastapi.testclient import TestClient


def _get_client() -> TestClient:
    from app.main import app

    return TestClient(app)


def test_health_endpoint_returns_ok() -> None:
    response = _get_client().get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_generated_when_missing() -> None:
    response = _get_client().get("/health")

    assert response.headers.get("X-Request-Id")


def test_request_id_echoed_from_header() -> None:
    req_id = "improve-req-42"
    response = _get_client().get("/health", headers={"X-Request-Id": req_id, "X-User-Id": "someone"})

    assert response.headers.get("X-Request-Id") == req_id

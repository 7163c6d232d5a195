# tests/http_api/test_app.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from flyer_api.main import app
from flyer_api.routers.dependencies import get_products_service

API_PREFIX = "/api"

HTTP_METHODS = {"get", "post", "put", "patch", "delete"}


def _get_api_operations() -> dict[tuple[str, str], dict]:
    """Map (METHOD, path) to its OpenAPI operation for every documented route."""
    return {
        (method.upper(), path): operation
        for path, item in app.openapi()["paths"].items()
        for method, operation in item.items()
        if method in HTTP_METHODS
    }


@pytest.mark.parametrize("resource", ["auth", "products", "flyers"])
def test_routes_registered_and_tagged(resource: str) -> None:
    """
    Every resource router is mounted under /api/<resource> and tagged with
    its resource name so it is grouped in the OpenAPI docs.
    """
    operations = {
        key: op
        for key, op in _get_api_operations().items()
        if key[1].startswith(f"{API_PREFIX}/{resource}")
    }

    assert operations, f"Expected at least one {API_PREFIX}/{resource} route to be registered."
    for (method, path), operation in operations.items():
        assert resource in operation.get("tags", []), (
            f"{method} {path} is missing the '{resource}' tag."
        )


def test_expected_operations_exist() -> None:
    registered = set(_get_api_operations())

    expected = {
        ("POST", "/api/auth/register"),
        ("POST", "/api/auth/login"),
        ("GET", "/api/auth/profile"),
        ("PUT", "/api/auth/profile"),
        ("GET", "/api/products"),
        ("POST", "/api/products"),
        ("GET", "/api/products/search/{query}"),
        ("GET", "/api/products/{product_id}"),
        ("PUT", "/api/products/{product_id}"),
        ("DELETE", "/api/products/{product_id}"),
        ("GET", "/api/flyers"),
        ("POST", "/api/flyers"),
        ("GET", "/api/flyers/{flyer_id}"),
        ("PUT", "/api/flyers/{flyer_id}"),
        ("DELETE", "/api/flyers/{flyer_id}"),
        ("POST", "/api/flyers/{flyer_id}/duplicate"),
    }
    assert expected <= registered


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert data["timestamp"]


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_unknown_route_uses_message_envelope(client: TestClient) -> None:
    response = client.get(f"{API_PREFIX}/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Route not found"}


def test_missing_record_keeps_its_own_message(client: TestClient, alice) -> None:
    response = client.get(f"{API_PREFIX}/products/{'f' * 32}", headers=alice)
    assert response.status_code == 404
    assert response.json() == {"message": "Product not found"}


def test_large_responses_are_compressed(client: TestClient) -> None:
    response = client.get("/openapi.json", headers={"Accept-Encoding": "gzip"})
    assert response.status_code == 200
    assert response.headers["content-encoding"] == "gzip"
    assert "paths" in response.json()


def test_small_responses_are_not_compressed(client: TestClient) -> None:
    response = client.get("/health", headers={"Accept-Encoding": "gzip"})
    assert "content-encoding" not in response.headers


def test_storage_errors_become_503(client: TestClient, alice) -> None:
    class _BrokenService:
        def list_products(self, identity):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    app.dependency_overrides[get_products_service] = lambda: _BrokenService()
    try:
        response = client.get(f"{API_PREFIX}/products", headers=alice)
    finally:
        app.dependency_overrides.pop(get_products_service, None)

    assert response.status_code == 503
    assert response.json() == {"message": "Storage unavailable"}


def test_unexpected_errors_become_500(client: TestClient, alice) -> None:
    class _BuggyService:
        def list_products(self, identity):
            raise RuntimeError("boom")

    app.dependency_overrides[get_products_service] = lambda: _BuggyService()
    try:
        with TestClient(app, raise_server_exceptions=False) as quiet_client:
            response = quiet_client.get(f"{API_PREFIX}/products", headers=alice)
    finally:
        app.dependency_overrides.pop(get_products_service, None)

    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}

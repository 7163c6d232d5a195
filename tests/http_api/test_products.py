# tests/http_api/test_products.py
from typing import Any, Dict

from fastapi.testclient import TestClient

API_PREFIX = "/api"


def _product_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Espresso Beans",
        "description": "Single origin, 1kg",
        "price": 18.5,
        "barcode": "123",
        "category": "coffee",
        "imageUrl": "https://cdn.example.com/beans.png",
    }
    payload.update(overrides)
    return payload


def _create(client: TestClient, headers, **overrides) -> Dict[str, Any]:
    response = client.post(f"{API_PREFIX}/products", json=_product_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestProductCrud:

    def test_create_returns_camel_case_product(self, client: TestClient, alice) -> None:
        data = _create(client, alice)

        assert data["id"]
        assert data["name"] == "Espresso Beans"
        assert data["price"] == 18.5
        assert data["imageUrl"] == "https://cdn.example.com/beans.png"
        assert data["ownerUserId"]
        assert "createdAt" in data and "updatedAt" in data

    def test_list_and_get(self, client: TestClient, alice) -> None:
        first = _create(client, alice, barcode="1")
        second = _create(client, alice, name="Filter Papers", barcode="2")

        listing = client.get(f"{API_PREFIX}/products", headers=alice)
        assert listing.status_code == 200
        assert {p["id"] for p in listing.json()} == {first["id"], second["id"]}

        single = client.get(f"{API_PREFIX}/products/{second['id']}", headers=alice)
        assert single.status_code == 200
        assert single.json()["name"] == "Filter Papers"

    def test_update_is_partial(self, client: TestClient, alice) -> None:
        product = _create(client, alice)

        response = client.put(
            f"{API_PREFIX}/products/{product['id']}",
            json={"price": 20},
            headers=alice,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 20
        assert data["name"] == product["name"]
        assert data["barcode"] == product["barcode"]

    def test_required_fields_cannot_be_nulled(self, client: TestClient, alice) -> None:
        product = _create(client, alice)
        response = client.put(
            f"{API_PREFIX}/products/{product['id']}",
            json={"name": None},
            headers=alice,
        )
        assert response.status_code == 422

    def test_delete(self, client: TestClient, alice) -> None:
        product = _create(client, alice)

        response = client.delete(f"{API_PREFIX}/products/{product['id']}", headers=alice)
        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}

        again = client.get(f"{API_PREFIX}/products/{product['id']}", headers=alice)
        assert again.status_code == 404
        assert again.json() == {"message": "Product not found"}

    def test_search(self, client: TestClient, alice) -> None:
        _create(client, alice, name="Green Tea", barcode="10")
        _create(client, alice, name="Mug", barcode="TEA-9")
        _create(client, alice, name="Spoon", barcode="11", description=None)

        response = client.get(f"{API_PREFIX}/products/search/tea", headers=alice)
        assert response.status_code == 200
        assert {p["name"] for p in response.json()} == {"Green Tea", "Mug"}


class TestProductValidation:

    def test_negative_price_is_rejected(self, client: TestClient, alice) -> None:
        response = client.post(
            f"{API_PREFIX}/products", json=_product_payload(price=-1), headers=alice
        )
        assert response.status_code == 422
        assert response.json()["message"] == "Validation failed"

    def test_missing_name_is_rejected(self, client: TestClient, alice) -> None:
        payload = _product_payload()
        del payload["name"]
        response = client.post(f"{API_PREFIX}/products", json=payload, headers=alice)
        assert response.status_code == 422

    def test_name_longer_than_100_is_rejected(self, client: TestClient, alice) -> None:
        response = client.post(
            f"{API_PREFIX}/products", json=_product_payload(name="x" * 101), headers=alice
        )
        assert response.status_code == 422

    def test_blank_barcode_means_no_barcode(self, client: TestClient, alice) -> None:
        first = _create(client, alice, barcode="  ")
        second = _create(client, alice, name="Other", barcode="")

        assert first["barcode"] is None
        assert second["barcode"] is None


class TestBarcodeScoping:

    def test_two_users_may_share_a_barcode(self, client: TestClient, alice, bob) -> None:
        _create(client, alice, barcode="123")
        _create(client, bob, barcode="123")

    def test_same_user_cannot_reuse_a_barcode(self, client: TestClient, alice) -> None:
        _create(client, alice, barcode="123")

        response = client.post(
            f"{API_PREFIX}/products",
            json=_product_payload(name="Another", barcode="123"),
            headers=alice,
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Barcode already exists for this user"}

    def test_update_to_a_taken_barcode_is_rejected(self, client: TestClient, alice) -> None:
        _create(client, alice, barcode="123")
        other = _create(client, alice, name="Other", barcode="456")

        response = client.put(
            f"{API_PREFIX}/products/{other['id']}",
            json={"barcode": "123"},
            headers=alice,
        )
        assert response.status_code == 400

    def test_update_keeping_own_barcode_is_allowed(self, client: TestClient, alice) -> None:
        product = _create(client, alice, barcode="123")

        response = client.put(
            f"{API_PREFIX}/products/{product['id']}",
            json={"barcode": "123", "name": "Renamed"},
            headers=alice,
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"


class TestProductOwnership:

    def test_other_users_products_are_invisible(self, client: TestClient, alice, bob) -> None:
        product = _create(client, alice)

        assert client.get(f"{API_PREFIX}/products", headers=bob).json() == []
        assert client.get(f"{API_PREFIX}/products/search/espresso", headers=bob).json() == []

        for method in ("get", "delete"):
            response = getattr(client, method)(f"{API_PREFIX}/products/{product['id']}", headers=bob)
            assert response.status_code == 404
            assert response.json() == {"message": "Product not found"}

        response = client.put(
            f"{API_PREFIX}/products/{product['id']}", json={"price": 0}, headers=bob
        )
        assert response.status_code == 404

        # Untouched for the owner.
        mine = client.get(f"{API_PREFIX}/products/{product['id']}", headers=alice)
        assert mine.json()["price"] == product["price"]

    def test_not_owned_and_missing_are_indistinguishable(self, client: TestClient, alice, bob) -> None:
        product = _create(client, alice)

        not_owned = client.get(f"{API_PREFIX}/products/{product['id']}", headers=bob)
        missing = client.get(f"{API_PREFIX}/products/{'f' * 32}", headers=bob)

        assert not_owned.status_code == missing.status_code == 404
        assert not_owned.json() == missing.json()

    def test_routes_require_a_token(self, client: TestClient) -> None:
        assert client.get(f"{API_PREFIX}/products").status_code == 401
        assert client.post(f"{API_PREFIX}/products", json=_product_payload()).status_code == 401
        assert client.get(
            f"{API_PREFIX}/products", headers={"Authorization": "Bearer garbage"}
        ).status_code == 401

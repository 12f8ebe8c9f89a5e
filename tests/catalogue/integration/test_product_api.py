"""Integration tests for the product endpoints via TestClient."""

import pytest


def _headers(caller):
    return {"X-User-Id": caller.user_id, "X-User-Role": caller.role.value}


def _create(client, caller, **overrides):
    body = {
        "name": "Woven Basket",
        "description": "Willow basket, medium",
        "price": 32.0,
        "category": "handmade-crafts",
        "inventory": {"quantity": 6, "unit": "piece"},
    }
    body.update(overrides)
    response = client.post("/products", json=body, headers=_headers(caller))
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateProductAPI:
    def test_returns_201_with_camel_case_body(self, client, artisan):
        data = _create(client, artisan)
        assert data["sellerId"] == artisan.user_id
        assert data["inventory"] == {"quantity": 6, "unit": "piece", "inStock": True}
        assert data["isActive"] is True

    def test_missing_identity_is_401(self, client):
        response = client.post("/products", json={})
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_unknown_role_is_401(self, client):
        response = client.post(
            "/products",
            json={},
            headers={"X-User-Id": "u-1", "X-User-Role": "wizard"},
        )
        assert response.status_code == 401

    def test_customer_gets_403(self, client, customer):
        response = client.post(
            "/products",
            json={
                "name": "Basket",
                "description": "Willow basket",
                "price": 1.0,
                "category": "other",
                "inventory": {"quantity": 1, "unit": "piece"},
            },
            headers=_headers(customer),
        )
        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Only artisans, sellers and admins can list products"}

    def test_invalid_body_is_400(self, client, artisan):
        response = client.post(
            "/products",
            json={"name": "Basket", "price": -3},
            headers=_headers(artisan),
        )
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestReadProductsAPI:
    def test_get_product(self, client, artisan):
        created = _create(client, artisan)
        response = client.get(f"/products/{created['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Woven Basket"

    def test_get_missing_product_is_404(self, client):
        response = client.get("/products/nope")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Product with id nope not found",
            "error": {"product": ["Product with id nope not found"]},
        }

    def test_list_is_paginated(self, client, artisan):
        for n in range(3):
            _create(client, artisan, name=f"Basket {n}")

        response = client.get("/products", params={"limit": 2})
        body = response.json()
        assert response.status_code == 200
        assert body["count"] == 2
        assert body["pagination"] == {"current": 1, "pages": 2, "total": 3}

    def test_low_stock(self, client, artisan):
        _create(client, artisan, name="Plenty", inventory={"quantity": 30, "unit": "piece"})
        _create(client, artisan, name="Scarce", inventory={"quantity": 2, "unit": "piece"})

        response = client.get("/products/low-stock", headers=_headers(artisan))
        assert response.status_code == 200
        assert [p["name"] for p in response.json()["data"]] == ["Scarce"]


class TestManageProductAPI:
    def test_update(self, client, artisan):
        created = _create(client, artisan)
        response = client.put(f"/products/{created['id']}", json={"price": 29.5}, headers=_headers(artisan))
        assert response.status_code == 200
        assert response.json()["data"]["price"] == 29.5

    def test_update_by_other_seller_is_403(self, client, artisan, other_seller):
        created = _create(client, artisan)
        response = client.put(f"/products/{created['id']}", json={"price": 1}, headers=_headers(other_seller))
        assert response.status_code == 403

    @pytest.mark.parametrize(("quantity", "in_stock"), [(0, False), (9, True)])
    def test_restock(self, client, artisan, quantity, in_stock):
        created = _create(client, artisan)
        response = client.put(
            f"/products/{created['id']}/inventory",
            json={"quantity": quantity},
            headers=_headers(artisan),
        )
        assert response.status_code == 200
        assert response.json()["data"]["inventory"]["inStock"] is in_stock

    def test_delete_soft_deletes(self, client, artisan):
        created = _create(client, artisan)
        response = client.delete(f"/products/{created['id']}", headers=_headers(artisan))
        assert response.status_code == 200

        assert client.get(f"/products/{created['id']}").json()["data"]["isActive"] is False
        assert client.get("/products").json()["count"] == 0

"""End-to-end tests over both FastAPI apps."""

import pytest
from fastapi.testclient import TestClient

from conftest import item_data
from shared.models.users import Users
from auth_service.app.main import app as auth_app
from inventory_service.app.main import app as inventory_app


@pytest.fixture()
def auth_client():
    return TestClient(auth_app)


@pytest.fixture()
def client():
    return TestClient(inventory_app)


def _register(auth_client, email="alice@example.com"):
    response = auth_client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": email, "password": "secret123"},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture()
def alice(auth_client):
    data = _register(auth_client)
    return {"Authorization": f"Bearer {data['token']}"}


@pytest.fixture()
def bob(auth_client):
    data = _register(auth_client, "bob@example.com")
    return {"Authorization": f"Bearer {data['token']}"}


class TestAuthEndpoints:
    def test_register(self, auth_client):
        response = auth_client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
        )
        body = response.json()

        assert response.status_code == 201
        assert body["status"] == "Success"
        assert body["status_code"] == "CREATED"
        assert body["data"]["user"]["email"] == "alice@example.com"
        assert "password" not in body["data"]["user"]
        assert body["data"]["token"]

    def test_register_duplicate(self, auth_client):
        _register(auth_client)
        response = auth_client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
        )
        assert response.status_code == 409
        assert response.json()["status_code"] == "CONFLICT"

    def test_register_short_password(self, auth_client):
        response = auth_client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "alice@example.com", "password": "123"},
        )
        body = response.json()
        assert response.status_code == 422
        assert body["status"] == "Failure"
        assert body["status_code"] == "VALIDATION_ERROR"
        assert "password" in body["message"]

    def test_login(self, auth_client):
        _register(auth_client)
        response = auth_client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["data"]["token_type"] == "bearer"

    def test_login_invalid_credentials(self, auth_client):
        _register(auth_client)
        response = auth_client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "wrong"})
        body = response.json()
        assert response.status_code == 401
        assert body["status_code"] == "UNAUTHORIZED"
        assert body["message"] == "Invalid credentials"

    def test_me(self, auth_client, alice):
        response = auth_client.get("/api/auth/me", headers=alice)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Alice"

    def test_me_without_token(self, auth_client):
        response = auth_client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"

    def test_me_with_bad_token(self, auth_client):
        response = auth_client.get(
            "/api/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_token_of_deleted_user(self, auth_client, alice, db):
        db.query(Users).delete()
        db.commit()
        response = auth_client.get("/api/auth/me", headers=alice)
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_logout(self, auth_client, alice):
        response = auth_client.post("/api/auth/logout", headers=alice)
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

    def test_health(self, auth_client):
        assert auth_client.get("/api/auth/health").json() == {"status": "healthy"}


class TestInventoryEndpoints:
    def _create(self, client, headers, **overrides):
        response = client.post("/api/inventory", json=item_data(**overrides), headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def test_requires_token(self, client):
        response = client.get("/api/inventory")
        assert response.status_code == 401
        assert response.json()["status_code"] == "UNAUTHORIZED"

    def test_create_and_get(self, client, alice):
        created = self._create(client, alice, quantity=3)

        assert created["stock_status"] == "LOW_STOCK"
        assert created["sku"].startswith("ELE-")
        assert created["price"] == "49.99"

        response = client.get(f"/api/inventory/{created['id']}", headers=alice)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Wireless Mouse"

    def test_create_validation_error(self, client, alice):
        response = client.post(
            "/api/inventory", json=item_data(category="Weapons"), headers=alice)
        assert response.status_code == 422
        assert response.json()["status_code"] == "VALIDATION_ERROR"

    def test_list_with_pagination(self, client, alice):
        for i in range(3):
            self._create(client, alice, name=f"Item {i}")

        response = client.get("/api/inventory?page=2&limit=2&sort=name", headers=alice)
        data = response.json()["data"]

        assert response.status_code == 200
        assert [i["name"] for i in data["items"]] == ["Item 2"]
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}

    def test_list_bad_sort(self, client, alice):
        response = client.get("/api/inventory?sort=-bogus", headers=alice)
        assert response.status_code == 400
        assert response.json()["status_code"] == "VALIDATION_ERROR"

    def test_list_by_category(self, client, alice):
        self._create(client, alice, category="Books", name="Python Book")
        self._create(client, alice)

        response = client.get("/api/inventory?category=Books", headers=alice)
        assert [i["name"] for i in response.json()["data"]["items"]] == ["Python Book"]

    def test_other_owner_sees_not_found(self, client, alice, bob):
        created = self._create(client, alice)

        response = client.get(f"/api/inventory/{created['id']}", headers=bob)
        assert response.status_code == 404
        assert response.json()["status_code"] == "NOT_FOUND"

        response = client.delete(f"/api/inventory/{created['id']}", headers=bob)
        assert response.status_code == 404

    def test_update(self, client, alice):
        created = self._create(client, alice)
        response = client.put(
            f"/api/inventory/{created['id']}", json={"name": "Silent Mouse"}, headers=alice)

        assert response.status_code == 200
        assert response.json()["status_code"] == "UPDATED"
        assert response.json()["data"]["name"] == "Silent Mouse"
        assert response.json()["data"]["quantity"] == 100

    def test_update_clears_description(self, client, alice):
        created = self._create(client, alice, description="old")
        response = client.put(
            f"/api/inventory/{created['id']}", json={"description": ""}, headers=alice)

        assert response.status_code == 200
        assert response.json()["data"]["description"] is None
        assert response.json()["data"]["name"] == "Wireless Mouse"

    def test_create_with_huge_quantity(self, client, alice):
        response = client.post(
            "/api/inventory", json=item_data(quantity=10 ** 19), headers=alice)
        assert response.status_code == 422
        assert response.json()["status_code"] == "VALIDATION_ERROR"

    def test_create_with_price_beyond_column(self, client, alice):
        response = client.post(
            "/api/inventory", json=item_data(price="123456789012.00"), headers=alice)
        assert response.status_code == 422
        assert response.json()["status_code"] == "VALIDATION_ERROR"

    def test_update_quantity_too_large(self, client, alice):
        created = self._create(client, alice)
        response = client.patch(
            f"/api/inventory/{created['id']}/quantity", json={"quantity": 10 ** 19}, headers=alice)
        assert response.status_code == 400
        assert response.json()["status_code"] == "VALIDATION_ERROR"

    def test_create_duplicate_sku_message(self, client, alice):
        self._create(client, alice, sku="ABC-1")
        response = client.post("/api/inventory", json=item_data(sku="abc-1"), headers=alice)
        assert response.status_code == 409
        assert response.json()["message"] == "SKU already exists"

    def test_update_sku_conflict(self, client, alice, bob):
        self._create(client, bob, sku="BOB-1")
        created = self._create(client, alice)

        response = client.put(
            f"/api/inventory/{created['id']}", json={"sku": "bob-1"}, headers=alice)
        assert response.status_code == 409
        assert response.json()["message"] == "SKU already exists"

    def test_update_quantity(self, client, alice):
        created = self._create(client, alice)
        response = client.patch(
            f"/api/inventory/{created['id']}/quantity", json={"quantity": 0}, headers=alice)
        assert response.json()["data"]["stock_status"] == "OUT_OF_STOCK"

    def test_update_quantity_negative(self, client, alice):
        created = self._create(client, alice)
        response = client.patch(
            f"/api/inventory/{created['id']}/quantity", json={"quantity": -1}, headers=alice)
        assert response.status_code == 400
        assert response.json()["status_code"] == "INVALID_ARGUMENT"

    def test_delete(self, client, alice):
        created = self._create(client, alice)
        response = client.delete(f"/api/inventory/{created['id']}", headers=alice)

        assert response.status_code == 200
        assert response.json()["message"] == "Inventory item deleted successfully"
        assert client.get(f"/api/inventory/{created['id']}", headers=alice).status_code == 404

    def test_low_stock_and_statistics(self, client, alice):
        self._create(client, alice, quantity=10, price="2.50", low_stock_threshold=10)
        self._create(client, alice, quantity=0, price="5.00", low_stock_threshold=10)
        self._create(client, alice, quantity=100, price="1.00", low_stock_threshold=10)

        low = client.get("/api/inventory/lowstock/items", headers=alice).json()["data"]
        assert low["count"] == 2

        stats = client.get("/api/inventory/stats/summary", headers=alice).json()["data"]
        assert stats == {
            "totalItems": 3,
            "totalValue": "125.00",
            "lowStockCount": 2,
            "outOfStockCount": 1,
        }

    def test_unknown_route(self, client, alice):
        response = client.get("/api/nothing-here", headers=alice)
        assert response.status_code == 404
        assert response.json()["status_code"] == "NOT_FOUND"

    def test_health(self, client):
        assert client.get("/api/inventory-service/health").json() == {"status": "healthy"}

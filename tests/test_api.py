"""HTTP surface, exercised end to end against a throwaway SQLite database."""

from decimal import Decimal

import pytest
from fastapi import Depends
from sqlalchemy.exc import OperationalError

from app.api.routers.orders import get_checkout_service
from app.data.database import get_db
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService

API = "/api/v1"


@pytest.fixture()
def shop(client):
    client.post(f"{API}/users/", json={"id": 1, "name": "Alice"})
    response = client.post(
        f"{API}/products/",
        json={
            "name": "Teapot",
            "brand": "Hario",
            "category": "Kitchen",
            "price": "9.99",
            "inventory": 5,
        },
    )
    return {"user_id": 1, "product_id": response.json()["product"]["id"]}


def add_item(client, user_id, product_id, quantity):
    return client.post(
        f"{API}/carts/items",
        params={"user_id": user_id},
        json={"product_id": product_id, "quantity": quantity},
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}


class TestUsersAndProducts:
    def test_create_and_get_user(self, client):
        assert client.post(f"{API}/users/", json={"id": 7, "name": "Bob"}).status_code == 201

        response = client.get(f"{API}/users/7")

        assert response.json()["name"] == "Bob"

    def test_missing_user(self, client):
        assert client.get(f"{API}/users/99").status_code == 404

    def test_product_shape(self, client, shop):
        response = client.get(f"{API}/products/{shop['product_id']}")

        data = response.json()
        assert response.status_code == 200
        assert data["name"] == "Teapot"
        assert data["brand"] == "Hario"
        assert data["category"] == "Kitchen"
        assert Decimal(data["price"]) == Decimal("9.99")
        assert data["inventory"] == 5

    def test_category_resolution(self, client, shop):
        response = client.post(
            f"{API}/products/",
            json={"name": "Cup", "brand": "Hario", "category": "Kitchen", "price": "3.00", "inventory": 1},
        )

        assert response.json()["category_resolution"] == "FOUND"

    def test_missing_product(self, client):
        assert client.get(f"{API}/products/3").status_code == 404


class TestCart:
    def test_add_item_creates_then_finds_cart(self, client, shop):
        first = add_item(client, shop["user_id"], shop["product_id"], 1)
        second = add_item(client, shop["user_id"], shop["product_id"], 2)

        assert first.json()["resolution"] == "CREATED"
        assert second.json()["resolution"] == "FOUND"
        cart = second.json()["cart"]
        assert cart["items"][0]["quantity"] == 3
        assert Decimal(cart["total_amount"]) == Decimal("29.97")

    def test_add_unknown_product(self, client, shop):
        assert add_item(client, shop["user_id"], 999, 1).status_code == 404

    def test_add_zero_quantity_is_invalid(self, client, shop):
        assert add_item(client, shop["user_id"], shop["product_id"], 0).status_code == 422

    def test_get_cart_and_total(self, client, shop):
        cart_id = add_item(client, shop["user_id"], shop["product_id"], 2).json()["cart"]["cart_id"]

        by_user = client.get(f"{API}/carts/users/{shop['user_id']}")
        total = client.get(f"{API}/carts/{cart_id}/total")

        assert by_user.json()["cart_id"] == cart_id
        assert Decimal(total.json()["total_amount"]) == Decimal("19.98")

    def test_update_and_remove_line(self, client, shop):
        cart = add_item(client, shop["user_id"], shop["product_id"], 2).json()["cart"]
        line_id = cart["items"][0]["line_id"]

        updated = client.put(f"{API}/carts/{cart['cart_id']}/items/{line_id}", json={"quantity": 5})
        assert updated.json()["items"][0]["quantity"] == 5

        removed = client.delete(f"{API}/carts/{cart['cart_id']}/items/{line_id}")
        assert removed.json()["items"] == []

        again = client.delete(f"{API}/carts/{cart['cart_id']}/items/{line_id}")
        assert again.status_code == 404

    def test_clear_cart(self, client, shop):
        cart_id = add_item(client, shop["user_id"], shop["product_id"], 1).json()["cart"]["cart_id"]

        assert client.delete(f"{API}/carts/{cart_id}").status_code == 204
        assert client.get(f"{API}/carts/{cart_id}").status_code == 404
        assert client.delete(f"{API}/carts/{cart_id}").status_code == 404


class TestCheckout:
    def test_checkout_places_order(self, client, shop):
        add_item(client, shop["user_id"], shop["product_id"], 2)

        response = client.post(f"{API}/orders/checkout", params={"user_id": shop["user_id"]})

        assert response.status_code == 201
        body = response.json()
        assert body["warnings"] == []
        order = body["order"]
        assert order["status"] == "PENDING"
        assert Decimal(order["total_amount"]) == Decimal("19.98")
        assert order["items"][0]["product_name"] == "Teapot"
        assert order["items"][0]["product_brand"] == "Hario"

        assert client.get(f"{API}/products/{shop['product_id']}").json()["inventory"] == 3
        assert client.get(f"{API}/carts/users/{shop['user_id']}").status_code == 404
        assert client.get(f"{API}/orders/{order['id']}").json()["id"] == order["id"]
        assert [o["id"] for o in client.get(f"{API}/orders/users/{shop['user_id']}").json()] == [order["id"]]

    def test_checkout_without_cart(self, client, shop):
        response = client.post(f"{API}/orders/checkout", params={"user_id": shop["user_id"]})

        assert response.status_code == 404

    def test_checkout_insufficient_inventory(self, client, shop):
        add_item(client, shop["user_id"], shop["product_id"], 10)

        response = client.post(f"{API}/orders/checkout", params={"user_id": shop["user_id"]})

        assert response.status_code == 409
        assert client.get(f"{API}/products/{shop['product_id']}").json()["inventory"] == 5
        assert client.get(f"{API}/carts/users/{shop['user_id']}").json()["items"][0]["quantity"] == 10

    def test_checkout_reports_cleanup_warning(self, client, shop, monkeypatch):
        add_item(client, shop["user_id"], shop["product_id"], 1)
        scheduled = []

        def broken_clear(self, cart_id):
            raise OperationalError("DELETE FROM carts", {}, Exception("database is locked"))

        def checkout_service(db=Depends(get_db)):
            return CheckoutService(db, cleanup_scheduler=scheduled.append, clear_attempts=1)

        monkeypatch.setattr(CartService, "clear", broken_clear)
        client.app.dependency_overrides[get_checkout_service] = checkout_service

        response = client.post(f"{API}/orders/checkout", params={"user_id": shop["user_id"]})

        assert response.status_code == 201
        assert len(response.json()["warnings"]) == 1
        assert len(scheduled) == 1

        again = client.post(f"{API}/orders/checkout", params={"user_id": shop["user_id"]})
        assert again.status_code == 400
        assert len(client.get(f"{API}/orders/users/{shop['user_id']}").json()) == 1
        assert client.get(f"{API}/products/{shop['product_id']}").json()["inventory"] == 4

    def test_orders_for_user_without_any(self, client, shop):
        assert client.get(f"{API}/orders/users/{shop['user_id']}").json() == []

    def test_missing_order(self, client):
        assert client.get(f"{API}/orders/42").status_code == 404

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from store_api.services.order_service import OrderService


def order_payload(user_id, *lines, address="123 Main St, New York, NY 10001"):
    return {
        "userId": user_id,
        "shippingAddress": address,
        "orderItems": [{"productId": product_id, "quantity": quantity} for product_id, quantity in lines],
    }


class TestOrderEndpoints:
    """HTTP contract of /api/orders"""

    def test_create_order(self, client, test_db, user, products):
        lamp, mouse = products

        response = client.post("/api/orders", json=order_payload(user.id, (lamp.id, 2), (mouse.id, 1)))
        assert response.status_code == 201

        order = response.json()
        assert response.headers["location"].endswith(f"/api/orders/{order['id']}")
        assert order["userId"] == user.id
        assert order["userName"] == "John Doe"
        assert order["status"] == "Pending"
        assert Decimal(order["totalAmount"]) == Decimal("45.00")
        assert order["shippedDate"] is None
        assert [item["productName"] for item in order["orderItems"]] == ["Desk Lamp", "Wireless Mouse"]
        assert Decimal(order["orderItems"][0]["subtotal"]) == Decimal("20.00")

        test_db.refresh(lamp)
        assert lamp.stock == 8

    def test_create_order_unknown_user(self, client, products):
        lamp, _ = products

        response = client.post("/api/orders", json=order_payload(999, (lamp.id, 1)))
        assert response.status_code == 400
        assert response.json() == {"message": "User with ID 999 does not exist."}

    def test_create_order_insufficient_stock(self, client, user, products):
        _, mouse = products

        response = client.post("/api/orders", json=order_payload(user.id, (mouse.id, 10)))
        assert response.status_code == 400
        assert response.json()["message"] == "Insufficient stock for product Wireless Mouse. Available: 5"

    def test_create_order_invalid_body(self, client, user):
        response = client.post("/api/orders", json=order_payload(user.id))
        assert response.status_code == 422

        response = client.post("/api/orders", json=order_payload(user.id, (1, 0)))
        assert response.status_code == 422

    def test_get_orders(self, client, user, products):
        lamp, _ = products
        created = client.post("/api/orders", json=order_payload(user.id, (lamp.id, 1))).json()

        all_orders = client.get("/api/orders").json()
        user_orders = client.get(f"/api/orders/user/{user.id}").json()
        single = client.get(f"/api/orders/{created['id']}")

        assert [order["id"] for order in all_orders] == [created["id"]]
        assert [order["id"] for order in user_orders] == [created["id"]]
        assert single.status_code == 200
        assert single.json() == created

    def test_get_nonexistent_order(self, client):
        response = client.get("/api/orders/99999")
        assert response.status_code == 404
        assert response.json() == {"message": "Order with ID 99999 not found."}

    def test_update_order_status(self, client, user, products):
        lamp, _ = products
        order_id = client.post("/api/orders", json=order_payload(user.id, (lamp.id, 1))).json()["id"]

        response = client.put(f"/api/orders/{order_id}", json={"status": "Shipped"})
        assert response.status_code == 200
        shipped = response.json()
        assert shipped["status"] == "Shipped"
        assert shipped["shippedDate"] is not None

        again = client.put(f"/api/orders/{order_id}", json={"status": "Shipped", "shippingAddress": "9 New Rd"}).json()
        assert again["shippedDate"] == shipped["shippedDate"]
        assert again["shippingAddress"] == "9 New Rd"

    def test_update_order_invalid_status(self, client, user, products):
        lamp, _ = products
        order_id = client.post("/api/orders", json=order_payload(user.id, (lamp.id, 1))).json()["id"]

        response = client.put(f"/api/orders/{order_id}", json={"status": "Teleported"})
        assert response.status_code == 400
        assert "Valid values are: Pending, Processing, Shipped, Delivered, Cancelled" in response.json()["message"]
        assert client.get(f"/api/orders/{order_id}").json()["status"] == "Pending"

    def test_update_nonexistent_order(self, client):
        response = client.put("/api/orders/4242", json={"status": "Shipped"})
        assert response.status_code == 404

    def test_delete_order(self, client, test_db, user, products):
        lamp, _ = products
        order_id = client.post("/api/orders", json=order_payload(user.id, (lamp.id, 3))).json()["id"]

        response = client.delete(f"/api/orders/{order_id}")
        assert response.status_code == 204
        assert client.get(f"/api/orders/{order_id}").status_code == 404
        assert client.delete(f"/api/orders/{order_id}").status_code == 404

        # deleting an order does not put stock back
        test_db.refresh(lamp)
        assert lamp.stock == 7


class TestCatalogEndpoints:
    def test_get_products(self, client, products):
        response = client.get("/api/products")
        assert response.status_code == 200
        data = response.json()
        assert [product["name"] for product in data] == ["Desk Lamp", "Wireless Mouse"]
        assert data[0]["categoryName"] == "Home Office"
        assert Decimal(data[1]["price"]) == Decimal("25.00")

    def test_products_paged(self, client, products):
        response = client.get("/api/products/paged", params={"pageNumber": 2, "pageSize": 1})
        assert response.status_code == 200
        page = response.json()
        assert page["totalCount"] == 2
        assert page["totalPages"] == 2
        assert page["pageNumber"] == 2
        assert [product["name"] for product in page["items"]] == ["Wireless Mouse"]

    def test_products_paged_rejects_bad_paging(self, client, products):
        assert client.get("/api/products/paged", params={"pageNumber": 0}).status_code == 422
        assert client.get("/api/products/paged", params={"pageSize": 0}).status_code == 422

    def test_search_products(self, client, products):
        response = client.get("/api/products/search", params={"name": "mouse"})
        assert response.status_code == 200
        assert [product["name"] for product in response.json()] == ["Wireless Mouse"]

        paged = client.get("/api/products/search/paged", params={"name": "e", "pageSize": 1}).json()
        assert paged["totalCount"] == 2
        assert paged["totalPages"] == 2

    def test_search_requires_term(self, client, products):
        response = client.get("/api/products/search", params={"name": "  "})
        assert response.status_code == 400
        assert response.json() == {"message": "Search term cannot be empty."}

        assert client.get("/api/products/search/paged").status_code == 400

    def test_product_crud(self, client, category):
        created = client.post(
            "/api/products",
            json={"name": "Webcam", "price": "59.99", "stock": 4, "categoryId": category.id},
        )
        assert created.status_code == 201
        product_id = created.json()["id"]
        assert created.headers["location"].endswith(f"/api/products/{product_id}")

        updated = client.put(f"/api/products/{product_id}", json={"stock": 9})
        assert updated.status_code == 200
        assert updated.json()["stock"] == 9
        assert updated.json()["name"] == "Webcam"

        by_category = client.get(f"/api/products/category/{category.id}").json()
        assert [product["id"] for product in by_category] == [product_id]

        assert client.delete(f"/api/products/{product_id}").status_code == 204
        assert client.get(f"/api/products/{product_id}").status_code == 404
        assert client.put(f"/api/products/{product_id}", json={"stock": 1}).status_code == 404

    def test_ordered_product_is_not_deleted(self, client, user, products):
        lamp, _ = products
        client.post("/api/orders", json=order_payload(user.id, (lamp.id, 1)))

        response = client.delete(f"/api/products/{lamp.id}")
        assert response.status_code == 400
        assert "referenced by existing orders" in response.json()["message"]
        assert client.get(f"/api/products/{lamp.id}").status_code == 200

    def test_create_product_unknown_category(self, client):
        response = client.post(
            "/api/products",
            json={"name": "Webcam", "price": "59.99", "stock": 4, "categoryId": 77},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Category with ID 77 does not exist."}

    def test_create_product_negative_stock(self, client, category):
        response = client.post(
            "/api/products",
            json={"name": "Webcam", "price": "59.99", "stock": -1, "categoryId": category.id},
        )
        assert response.status_code == 422

    def test_category_crud(self, client, products, category):
        listed = client.get("/api/categories").json()
        assert listed[0]["productCount"] == 2

        created = client.post("/api/categories", json={"name": "Garden", "description": "Outdoor"})
        assert created.status_code == 201
        category_id = created.json()["id"]

        renamed = client.put(f"/api/categories/{category_id}", json={"name": "Garden & Patio"}).json()
        assert renamed["name"] == "Garden & Patio"
        assert renamed["description"] == "Outdoor"

        assert client.delete(f"/api/categories/{category.id}").status_code == 400
        assert client.delete(f"/api/categories/{category_id}").status_code == 204
        assert client.get(f"/api/categories/{category_id}").status_code == 404


class TestUserAndAuthEndpoints:
    def test_register_and_login(self, client):
        registration = {
            "firstName": "Jane",
            "lastName": "Smith",
            "email": "jane.smith@example.com",
            "password": "hunter22",
        }

        response = client.post("/api/auth/register", json=registration)
        assert response.status_code == 201
        user = response.json()
        assert user["role"] == "Customer"
        assert "password" not in user
        assert "passwordHash" not in user

        assert client.post("/api/auth/register", json=registration).status_code == 400

        login = client.post("/api/auth/login", json={"email": "jane.smith@example.com", "password": "hunter22"})
        assert login.status_code == 200
        assert login.json()["id"] == user["id"]

    def test_login_failures(self, client, user):
        bad = client.post("/api/auth/login", json={"email": "john.doe@example.com", "password": "nope-nope"})
        assert bad.status_code == 401
        assert bad.json() == {"message": "Invalid email or password."}

        blank = client.post("/api/auth/login", json={"email": "", "password": ""})
        assert blank.status_code == 400

    def test_register_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"firstName": "A", "lastName": "B", "email": "ab@example.com", "password": "123"},
        )
        assert response.status_code == 422

    def test_user_endpoints(self, client, user):
        assert [u["email"] for u in client.get("/api/users").json()] == ["john.doe@example.com"]

        updated = client.put(f"/api/users/{user.id}", json={"role": "Admin", "address": "5 Elm St"})
        assert updated.status_code == 200
        assert updated.json()["role"] == "Admin"
        assert updated.json()["lastName"] == "Doe"

        assert client.delete(f"/api/users/{user.id}").status_code == 204
        assert client.get(f"/api/users/{user.id}").status_code == 404


class TestServiceEndpoints:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Store API" in response.json()["message"]

    def test_unexpected_error_hides_detail(self, client, monkeypatch):
        from main import app

        async def broken(self):
            raise RuntimeError("connection pool exhausted")

        monkeypatch.setattr(OrderService, "get_all_orders", broken)

        response = TestClient(app, raise_server_exceptions=False).get("/api/orders")
        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred processing your request."}

import uuid

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def ada(client: TestClient):
    response = client.post("/users", json={"username": "ada", "email": "ada@example.com", "full_name": "Ada"})
    assert response.status_code == 201
    return response.json()


class TestUsers:
    def test_create_user(self, ada):
        assert ada["user_name"] == "ada"
        assert ada["email"] == "ada@example.com"
        assert uuid.UUID(ada["id"])

    def test_duplicate_user(self, client, ada):
        response = client.post("/users", json={"username": "ada", "email": "new@example.com"})

        assert response.status_code == 409
        assert "ada" in response.json()["detail"]

    def test_read_users(self, client, ada):
        client.post("/users", json={"username": "bob", "email": "bob@example.com"})

        assert [u["user_name"] for u in client.get("/users").json()] == ["ada", "bob"]
        assert [u["user_name"] for u in client.get("/users", params={"limit": 1, "offset": 1}).json()] == ["bob"]
        assert client.get("/users/bob").json()["email"] == "bob@example.com"

    def test_paging_bounds(self, client, ada):
        assert client.get("/users", params={"limit": 0}).json() == []
        assert client.get("/users", params={"limit": -1}).status_code == 422
        assert client.get("/users", params={"offset": -1}).status_code == 422

    def test_created_on_is_utc(self, client, ada):
        created_on = client.get("/users/ada").json()["created_on"]

        assert created_on.endswith("Z") or created_on.endswith("+00:00")

    def test_missing_user(self, client):
        assert client.get("/users/nobody").status_code == 404
        assert client.delete("/users/nobody").status_code == 404

    def test_change_email(self, client, ada):
        response = client.patch("/users/ada", json={"email": "ada@lovelace.dev"})

        assert response.status_code == 200
        assert response.json()["email"] == "ada@lovelace.dev"

    def test_change_email_conflict(self, client, ada):
        client.post("/users", json={"username": "bob", "email": "bob@example.com"})

        assert client.patch("/users/ada", json={"email": "bob@example.com"}).status_code == 409

    def test_delete_user(self, client, ada):
        assert client.delete("/users/ada").status_code == 204
        assert client.get("/users/ada").status_code == 404


class TestOrders:
    def test_place_and_list_orders(self, client, ada):
        response = client.post(
            "/users/ada/orders", json={"product_name": "pen", "quantity": 3, "unit_price": "19.99"}
        )

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pending"
        assert order["user_id"] == ada["id"]
        assert float(order["total"]) == pytest.approx(59.97)

        listed = client.get("/users/ada/orders").json()
        assert [o["id"] for o in listed] == [order["id"]]

    def test_invalid_order(self, client, ada):
        response = client.post("/users/ada/orders", json={"product_name": "pen", "quantity": 0, "unit_price": "1"})

        assert response.status_code == 422

    def test_sub_cent_price(self, client, ada):
        response = client.post(
            "/users/ada/orders", json={"product_name": "pen", "quantity": 3, "unit_price": "1.234"}
        )

        assert response.status_code == 422
        assert client.get("/users/ada/orders").json() == []

    def test_order_for_missing_user(self, client):
        response = client.post("/users/nobody/orders", json={"product_name": "pen", "quantity": 1, "unit_price": "1"})

        assert response.status_code == 404

    def test_status_and_total(self, client, ada):
        order = client.post(
            "/users/ada/orders", json={"product_name": "pen", "quantity": 2, "unit_price": "2.50"}
        ).json()

        assert client.patch(f"/orders/{order['id']}", json={"status": "paid"}).json()["status"] == "paid"
        assert float(client.get("/users/ada/total").json()["total"]) == pytest.approx(5.0)

        assert client.patch(f"/orders/{order['id']}", json={"status": "cancelled"}).status_code == 200
        assert client.patch(f"/orders/{order['id']}", json={"status": "paid"}).status_code == 422
        assert float(client.get("/users/ada/total").json()["total"]) == 0

    def test_missing_order(self, client):
        assert client.patch(f"/orders/{uuid.uuid4()}", json={"status": "paid"}).status_code == 404

    def test_total_for_missing_user(self, client):
        assert client.get("/users/nobody/total").status_code == 404


class TestSchema:
    def test_schema_ddl(self, client):
        response = client.get("/schema", params={"dialect": "sqlite"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "CREATE TABLE customer_order" in response.text

    def test_unknown_dialect(self, client):
        assert client.get("/schema", params={"dialect": "oracle"}).status_code == 400

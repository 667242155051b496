from decimal import Decimal

from services.order_service.models import Order
from services.order_service.repository import OrderRepository


async def seed_orders(session_factory, count: int):
    async with session_factory() as db:
        for n in range(1, count + 1):
            await OrderRepository.create_order(db, Order(
                customer_name=f"Customer {n}",
                customer_email=f"customer{n}@acme.com",
                item="mouse",
                quantity=1,
                total_price=Decimal("25.00"),
            ))


async def test_create_order_returns_201(client, order_payload):
    resp = await client.post("/orders", json=order_payload)

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert set(data) == {
        "id", "customer_name", "customer_email", "item", "quantity",
        "status", "total_price", "created_at", "updated_at",
    }
    assert data["customer_name"] == "John Doe"
    assert data["status"] == "pending"
    assert data["total_price"] == "2499.98"


async def test_create_order_out_of_stock_returns_422(client, order_payload):
    resp = await client.post("/orders", json=dict(order_payload, quantity=51))

    assert resp.status_code == 422
    assert "out of stock" in resp.json()["message"]

    listing = await client.get("/orders")
    assert listing.json()["meta"]["total"] == 0


async def test_create_order_validates_required_fields(client):
    resp = await client.post("/orders", json={})

    assert resp.status_code == 422
    body = resp.json()
    assert body["message"] == "The given data was invalid."
    assert set(body["errors"]) == {"customer_name", "customer_email", "item", "quantity", "total_price"}
    assert body["errors"]["customer_name"] == ["Customer name is required."]
    assert body["errors"]["quantity"] == ["Quantity is required."]


async def test_create_order_validates_ranges(client, order_payload):
    resp = await client.post(
        "/orders",
        json=dict(order_payload, customer_email="not-an-email", quantity=0, total_price=0),
    )

    assert resp.status_code == 422
    assert set(resp.json()["errors"]) == {"customer_email", "quantity", "total_price"}
    assert resp.json()["errors"] == {
        "customer_email": ["Please provide a valid email address."],
        "quantity": ["Quantity must be at least 1."],
        "total_price": ["Total price must be greater than 0."],
    }


async def test_list_orders_with_pagination(client, session_factory):
    await seed_orders(session_factory, 15)

    resp = await client.get("/orders", params={"limit": 5})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 5
    assert [o["id"] for o in body["data"]] == [15, 14, 13, 12, 11]
    assert body["meta"]["total"] == 15
    assert body["meta"]["per_page"] == 5
    assert body["meta"]["current_page"] == 1
    assert body["meta"]["last_page"] == 3
    assert body["meta"]["from"] == 1
    assert body["meta"]["to"] == 5
    assert body["links"]["prev"] is None
    assert "page=2" in body["links"]["next"]


async def test_get_single_order(client, order_payload):
    created = (await client.post("/orders", json=order_payload)).json()["data"]

    resp = await client.get(f"/orders/{created['id']}")

    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == created["id"]
    assert resp.json()["data"]["customer_name"] == "John Doe"


async def test_get_nonexistent_order_returns_404(client):
    resp = await client.get("/orders/9999")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Order not found"}


async def test_update_order_status(client, order_payload):
    created = (await client.post("/orders", json=order_payload)).json()["data"]

    resp = await client.patch(f"/orders/{created['id']}", json={"status": "confirmed"})

    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "confirmed"
    fetched = (await client.get(f"/orders/{created['id']}")).json()["data"]
    assert fetched["status"] == "confirmed"


async def test_update_unknown_status_returns_422(client, order_payload):
    created = (await client.post("/orders", json=order_payload)).json()["data"]

    resp = await client.patch(f"/orders/{created['id']}", json={"status": "shipped"})

    assert resp.status_code == 422
    assert "status" in resp.json()["errors"]


async def test_update_nonexistent_order_returns_404(client):
    resp = await client.patch("/orders/9999", json={"status": "confirmed"})
    assert resp.status_code == 404


async def test_order_creation_runs_background_jobs(client, order_service, sink, order_payload):
    await client.post("/orders", json=order_payload)
    await order_service.jobs.join()

    assert any(m.startswith("ORDER CONFIRMATION") for m in sink.messages)
    assert any(m.startswith("EVENT NOTIFICATION") for m in sink.messages)


async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "running"

import asyncio

from sqlalchemy import func, select

from food_ordering.models import Customer
from tests.helpers import create_customer, create_restaurant, place_order


async def count_customers(db) -> int:
    return await db.scalar(select(func.count(Customer.id)))


async def test_create_customer_returns_generated_id(client):
    response = await client.post(
        "/customers",
        json={"name": "A", "email": "a@x.com", "phoneNumber": "555-123-4567"},
    )

    assert response.status_code == 200
    body = response.json()
    assert isinstance(body["id"], int)
    assert body["name"] == "A"
    assert body["email"] == "a@x.com"
    assert body["phoneNumber"] == "555-123-4567"
    assert body["address"] is None


async def test_duplicate_email_is_conflict(client, db):
    await create_customer(client, email="a@x.com")

    response = await client.post("/customers", json={"name": "B", "email": "a@x.com"})

    assert response.status_code == 409
    assert response.json()["error"] == "A customer with this email already exists"
    assert await count_customers(db) == 1


async def test_missing_name_or_email_is_rejected(client, db):
    for payload in ({"email": "a@x.com"}, {"name": "A"}, {"name": "", "email": "a@x.com"}):
        response = await client.post("/customers", json=payload)
        assert response.status_code == 400
        assert response.json()["success"] is False

    assert await count_customers(db) == 0


async def test_get_customer(client):
    customer = await create_customer(client)

    response = await client.get(f"/customers/{customer['id']}")

    assert response.status_code == 200
    assert response.json() == customer


async def test_get_missing_customer_is_404(client):
    response = await client.get("/customers/999")

    assert response.status_code == 404
    assert response.json()["error"] == "Customer not found"


async def test_list_customer_orders(client, seeded):
    customer_id = seeded["customer"]["id"]
    restaurant_id = seeded["restaurant"]["id"]
    other = await create_customer(client, name="B", email="b@x.com")
    first = await place_order(client, customer_id, restaurant_id, 14.99, [(seeded["pizza"]["id"], 1)])
    await client.patch(f"/orders/{first['id']}/status", json={"status": "COMPLETED"})
    await place_order(client, customer_id, restaurant_id, 8.99, [(seeded["salad"]["id"], 1)])
    await place_order(client, other["id"], restaurant_id, 8.99, [(seeded["salad"]["id"], 1)])

    response = await client.get(f"/customers/{customer_id}/orders")

    assert response.status_code == 200
    orders = response.json()
    assert len(orders) == 2
    assert {o["customerId"] for o in orders} == {customer_id}
    assert {o["status"] for o in orders} == {"PENDING", "COMPLETED"}


async def test_orders_of_unknown_customer_is_empty(client):
    response = await client.get("/customers/999/orders")

    assert response.status_code == 200
    assert response.json() == []


async def test_top_customers_limited_to_five_by_order_count(client, seeded):
    restaurant_id = seeded["restaurant"]["id"]
    pizza_id = seeded["pizza"]["id"]
    customers = [
        await create_customer(client, name=f"C{n}", email=f"c{n}@x.com")
        for n in range(6)
    ]
    # customer n places n + 1 orders
    for n, customer in enumerate(customers):
        for _ in range(n + 1):
            await place_order(client, customer["id"], restaurant_id, 14.99, [(pizza_id, 1)])

    response = await client.get("/customers/top")

    assert response.status_code == 200
    top = response.json()
    assert len(top) == 5
    assert [c["orderCount"] for c in top] == [6, 5, 4, 3, 2]
    assert top[0]["customerId"] == customers[-1]["id"]
    assert top[0]["name"] == "C5"


async def test_top_customers_empty_without_orders(client):
    await create_customer(client)
    await create_restaurant(client)

    response = await client.get("/customers/top")

    assert response.status_code == 200
    assert response.json() == []


async def test_concurrent_creates_with_one_email_yield_single_row(client, db):
    payload = {"name": "A", "email": "same@x.com"}

    responses = await asyncio.gather(*(client.post("/customers", json=payload) for _ in range(8)))

    codes = sorted(r.status_code for r in responses)
    assert codes == [200] + [409] * 7
    assert await count_customers(db) == 1


async def test_long_phone_number_is_accepted(client):
    response = await client.post(
        "/customers",
        json={"name": "A", "email": "a@x.com", "phoneNumber": "+1 (555) 123-4567 ext 89"},
    )

    assert response.status_code == 200
    assert response.json()["phoneNumber"] == "+1 (555) 123-4567 ext 89"


async def test_out_of_range_customer_id_is_400(client):
    for path in ("/customers/99999999999999999999", "/customers/2147483648/orders", "/customers/0"):
        response = await client.get(path)
        assert response.status_code == 400, path
        assert response.json()["success"] is False

"""Request helpers for seeding the API in tests."""

from typing import Any

import httpx


async def create_customer(client: httpx.AsyncClient, name: str = "A", email: str = "a@x.com") -> dict[str, Any]:
    response = await client.post("/customers", json={"name": name, "email": email})
    assert response.status_code == 200, response.text
    return response.json()


async def create_restaurant(client: httpx.AsyncClient, name: str = "Pizza Palace") -> dict[str, Any]:
    response = await client.post("/restaurants", json={"name": name, "location": "New York"})
    assert response.status_code == 200, response.text
    return response.json()


async def add_menu_item(
    client: httpx.AsyncClient,
    restaurant_id: int,
    name: str,
    price: float,
) -> dict[str, Any]:
    response = await client.post(
        f"/restaurants/{restaurant_id}/menu",
        json={"name": name, "price": price},
    )
    assert response.status_code == 200, response.text
    return response.json()


async def place_order(
    client: httpx.AsyncClient,
    customer_id: int,
    restaurant_id: int,
    total_price: float,
    items: list[tuple[int, int]],
) -> dict[str, Any]:
    response = await client.post(
        "/orders",
        json={
            "customerId": customer_id,
            "restaurantId": restaurant_id,
            "totalPrice": total_price,
            "items": [{"menuItemId": m, "quantity": q} for m, q in items],
        },
    )
    assert response.status_code == 200, response.text
    return response.json()

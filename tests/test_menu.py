from tests.helpers import place_order


async def test_update_price_keeps_availability(client, seeded):
    pizza = seeded["pizza"]
    await client.patch(f"/menu/{pizza['id']}", json={"isAvailable": False})

    response = await client.patch(f"/menu/{pizza['id']}", json={"price": 12.5})

    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 12.5
    assert body["isAvailable"] is False


async def test_update_availability_keeps_price(client, seeded):
    pizza = seeded["pizza"]

    response = await client.patch(f"/menu/{pizza['id']}", json={"isAvailable": False})

    assert response.status_code == 200
    body = response.json()
    assert body["isAvailable"] is False
    assert body["price"] == pizza["price"]


async def test_update_is_persisted(client, seeded):
    restaurant_id = seeded["restaurant"]["id"]
    salad = seeded["salad"]

    await client.patch(f"/menu/{salad['id']}", json={"price": 9.5, "isAvailable": False})
    response = await client.get(f"/restaurants/{restaurant_id}/menu")

    stored = next(item for item in response.json() if item["id"] == salad["id"])
    assert stored["price"] == 9.5
    assert stored["isAvailable"] is False


async def test_update_unknown_menu_item_is_404(client):
    response = await client.patch("/menu/999", json={"price": 1.0})

    assert response.status_code == 404
    assert response.json()["error"] == "Menu item not found"


async def test_update_rejects_negative_price(client, seeded):
    response = await client.patch(f"/menu/{seeded['pizza']['id']}", json={"price": -3})

    assert response.status_code == 400


async def test_top_items_empty_without_orders(client, seeded):
    response = await client.get("/menu/top-items")

    assert response.status_code == 200
    assert response.json() == []


async def test_top_items_sums_quantities_across_orders(client, seeded):
    customer_id = seeded["customer"]["id"]
    restaurant_id = seeded["restaurant"]["id"]
    pizza_id = seeded["pizza"]["id"]
    salad_id = seeded["salad"]["id"]
    # pizza: 2 + 2 = 4, salad: 3 in a single line
    await place_order(client, customer_id, restaurant_id, 50.0, [(pizza_id, 2), (salad_id, 3)])
    await place_order(client, customer_id, restaurant_id, 30.0, [(pizza_id, 2)])

    response = await client.get("/menu/top-items")

    assert response.status_code == 200
    assert response.json() == [
        {"menuItemId": pizza_id, "name": "Pizza Margherita", "totalQuantity": 4}
    ]


async def test_out_of_range_menu_item_id_is_400(client):
    response = await client.patch("/menu/99999999999999999999", json={"price": 1.0})

    assert response.status_code == 400

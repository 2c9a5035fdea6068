"""
Order Flow Simulation Script

Seeds a running server with a restaurant, its menu and a set of customers,
fires concurrent orders at it, completes a share of them and prints the
aggregates (revenue, top item, top customers).

Run from project root with the server up:
    python scripts/simulate.py --orders 50
"""

import argparse
import asyncio
import random
import sys
import time
import uuid
from typing import Any

import httpx

API_BASE_URL = "http://localhost:8001"
TOTAL_ORDERS = 50

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]
STREETS = ["Main St", "Broadway", "5th Avenue", "Park Ave", "Madison Ave", "Lexington Ave"]
MENU_ITEMS = [
    {"name": "Pizza Margherita", "price": 14.99},
    {"name": "Pepperoni Pizza", "price": 16.99},
    {"name": "Caesar Salad", "price": 8.99},
    {"name": "Garlic Bread", "price": 5.99},
    {"name": "Pasta Carbonara", "price": 13.99},
    {"name": "Tiramisu", "price": 7.99},
]


def generate_random_customer() -> dict[str, str]:
    """Generate random customer info with a unique email."""
    first = random.choice(FIRST_NAMES)
    last = random.choice(LAST_NAMES)
    return {
        "name": f"{first} {last}",
        "email": f"{first.lower()}.{last.lower()}.{uuid.uuid4().hex[:8]}@example.com",
        "phoneNumber": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
        "address": f"{random.randint(1, 999)} {random.choice(STREETS)}",
    }


def generate_order_payload(
    customer_ids: list[int],
    restaurant_id: int,
    menu: list[dict[str, Any]],
) -> dict[str, Any]:
    """Pick a customer and 1-4 menu lines; total is computed from menu prices."""
    lines = random.sample(menu, k=random.randint(1, min(4, len(menu))))
    items = [{"menuItemId": m["id"], "quantity": random.randint(1, 3)} for m in lines]
    total = sum(m["price"] * i["quantity"] for m, i in zip(lines, items))
    return {
        "customerId": random.choice(customer_ids),
        "restaurantId": restaurant_id,
        "totalPrice": round(total, 2),
        "items": items,
    }


# =============================================================================
# SEEDING
# =============================================================================

async def seed(client: httpx.AsyncClient, num_customers: int) -> dict[str, Any]:
    """Create one restaurant with a menu and ``num_customers`` customers."""
    response = await client.post(
        f"{API_BASE_URL}/restaurants",
        json={"name": "Simulation Pizzeria", "location": "New York"},
    )
    response.raise_for_status()
    restaurant = response.json()

    menu = []
    for item in MENU_ITEMS:
        response = await client.post(
            f"{API_BASE_URL}/restaurants/{restaurant['id']}/menu",
            json=item,
        )
        response.raise_for_status()
        menu.append(response.json())

    customer_ids = []
    for _ in range(num_customers):
        response = await client.post(f"{API_BASE_URL}/customers", json=generate_random_customer())
        response.raise_for_status()
        customer_ids.append(response.json()["id"])

    print(f"   Restaurant #{restaurant['id']} with {len(menu)} menu items")
    print(f"   {len(customer_ids)} customers")
    return {"restaurant": restaurant, "menu": menu, "customer_ids": customer_ids}


# =============================================================================
# ORDER FLOW
# =============================================================================

async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    payload: dict[str, Any],
    complete: bool,
) -> dict[str, Any]:
    """Create an order and optionally mark it COMPLETED."""
    start_time = time.time()
    try:
        response = await client.post(f"{API_BASE_URL}/orders", json=payload, timeout=30.0)
        if response.status_code != 200:
            return {
                "order_num": order_num,
                "success": False,
                "error": response.text[:100],
                "time": round(time.time() - start_time, 3),
            }
        order = response.json()

        if complete:
            response = await client.patch(
                f"{API_BASE_URL}/orders/{order['id']}/status",
                json={"status": "COMPLETED"},
                timeout=30.0,
            )
            response.raise_for_status()

        return {
            "order_num": order_num,
            "success": True,
            "order_id": order["id"],
            "total": order["totalPrice"],
            "completed": complete,
            "time": round(time.time() - start_time, 3),
        }
    except httpx.HTTPError as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(num_orders: int, num_customers: int, complete_ratio: float) -> dict[str, Any]:
    print("=" * 70)
    print("🚀 ORDER FLOW SIMULATION")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        print("\n🌱 Seeding...")
        data = await seed(client, num_customers)
        restaurant_id = data["restaurant"]["id"]

        print(f"\n📦 Sending {num_orders} concurrent orders...")
        start = time.time()
        tasks = [
            send_order(
                client,
                n,
                generate_order_payload(data["customer_ids"], restaurant_id, data["menu"]),
                complete=random.random() < complete_ratio,
            )
            for n in range(1, num_orders + 1)
        ]
        results = await asyncio.gather(*tasks)
        total_time = round(time.time() - start, 3)

        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]
        expected_revenue = round(sum(r["total"] for r in successful if r["completed"]), 2)

        print("\n" + "=" * 70)
        print("📊 RESULTS")
        print("=" * 70)
        print(f"   Successful: {len(successful)}/{num_orders}")
        print(f"   Total Time: {total_time}s")
        if successful:
            avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
            print(f"   Average Response: {avg_time}s")

        if failed:
            print("\n⚠️  Failed Order Details (showing first 5):")
            for f in failed[:5]:
                print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

        print("\n" + "=" * 70)
        print("🔍 AGGREGATES")
        print("=" * 70)
        response = await client.get(f"{API_BASE_URL}/restaurants/{restaurant_id}/revenue")
        revenue = response.json()["revenue"]
        marker = "✅" if abs(revenue - expected_revenue) < 0.01 else "❌"
        print(f"   {marker} Revenue: ${revenue:.2f} (expected ${expected_revenue:.2f})")

        response = await client.get(f"{API_BASE_URL}/menu/top-items")
        for item in response.json():
            print(f"   🍕 Top item: {item['name']} x{item['totalQuantity']}")

        response = await client.get(f"{API_BASE_URL}/customers/top")
        for rank, customer in enumerate(response.json(), start=1):
            print(f"   {rank}. {customer['name']} ({customer['orderCount']} orders)")
        print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def test_single_flows() -> bool:
    """Check the server and the duplicate-email rule before the simulation."""
    print("\n" + "=" * 70)
    print("🧪 TESTING INDIVIDUAL FLOWS")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        print("\n1️⃣ Health Check...")
        response = await client.get(f"{API_BASE_URL}/health")
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text}")
            return False
        data = response.json()
        print(f"   ✅ Status: {data.get('status')}")
        print(f"   Database: {data.get('database')}")

        print("\n2️⃣ Duplicate Customer Email...")
        customer = generate_random_customer()
        first = await client.post(f"{API_BASE_URL}/customers", json=customer)
        second = await client.post(f"{API_BASE_URL}/customers", json=customer)
        if first.status_code == 200 and second.status_code == 409:
            print("   ✅ Second create rejected with 409")
        else:
            print(f"   ❌ Got {first.status_code} then {second.status_code}")
            return False

    print("\n" + "=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Flow Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--customers", type=int, default=10, help="Number of customers to seed")
    parser.add_argument("--complete-ratio", type=float, default=0.6, help="Share of orders marked COMPLETED")
    parser.add_argument("--skip-tests", action="store_true", help="Skip individual tests")
    args = parser.parse_args()

    if not args.skip_tests:
        if not asyncio.run(test_single_flows()):
            print("\n❌ Pre-flight tests failed. Fix issues before running simulation.")
            sys.exit(1)
        print("\n✅ Pre-flight tests passed!")

    asyncio.run(run_simulation(args.orders, args.customers, args.complete_ratio))

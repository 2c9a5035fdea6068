"""Shared fixtures: an app on a throwaway SQLite file."""

from typing import Any

import httpx
import pytest

from food_ordering.core.config import Settings
from food_ordering.database import init_db
from food_ordering.main import create_app
from tests.helpers import add_menu_item, create_customer, create_restaurant


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'food_ordering_test.db'}",
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    await init_db(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def db(app):
    async with app.state.session_maker() as session:
        yield session


@pytest.fixture
async def seeded(client) -> dict[str, Any]:
    """One customer, one restaurant with two menu items."""
    customer = await create_customer(client)
    restaurant = await create_restaurant(client)
    pizza = await add_menu_item(client, restaurant["id"], "Pizza Margherita", 14.99)
    salad = await add_menu_item(client, restaurant["id"], "Caesar Salad", 8.99)
    return {
        "customer": customer,
        "restaurant": restaurant,
        "pizza": pizza,
        "salad": salad,
    }

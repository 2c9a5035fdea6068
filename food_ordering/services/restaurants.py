"""
Restaurant Service

Restaurant creation, menu listing and menu item creation, and the
completed-order revenue aggregate.
"""

import logging
from typing import Optional

from sqlalchemy import func, select

from food_ordering.core.errors import ValidationError
from food_ordering.models import MenuItem, Order, OrderStatus, Restaurant
from food_ordering.services.base import BaseService

logger = logging.getLogger(__name__)


class RestaurantService(BaseService):

    async def create(self, name: Optional[str], location: Optional[str]) -> Restaurant:
        if not name or not location:
            raise ValidationError("Name and location are required")

        restaurant = Restaurant(name=name, location=location)
        self.db.add(restaurant)
        await self.commit("Failed to create restaurant")
        await self.db.refresh(restaurant)

        logger.info(f"Restaurant #{restaurant.id} created: {restaurant.name}")
        return restaurant

    async def get_menu(self, restaurant_id: int) -> list[MenuItem]:
        result = await self.db.execute(
            select(MenuItem).where(MenuItem.restaurant_id == restaurant_id)
        )
        return list(result.scalars().all())

    async def add_menu_item(
        self,
        restaurant_id: int,
        name: Optional[str],
        price: Optional[float],
        is_available: bool = True,
    ) -> MenuItem:
        """
        Add a menu item to a restaurant.

        The restaurant is not looked up first; an unknown id fails on the
        foreign key and is reported as an InternalError.
        """
        if not name or price is None:
            raise ValidationError("Name and price are required")
        if price < 0:
            raise ValidationError("Price must be non-negative")

        menu_item = MenuItem(
            name=name,
            price=price,
            is_available=is_available,
            restaurant_id=restaurant_id,
        )
        self.db.add(menu_item)
        await self.commit("Failed to create menu item")
        await self.db.refresh(menu_item)

        logger.info(f"Menu item #{menu_item.id} added to restaurant #{restaurant_id}")
        return menu_item

    async def revenue(self, restaurant_id: int) -> float:
        """Sum of total_price over the restaurant's COMPLETED orders (0 if none)."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Order.total_price), 0.0)).where(
                Order.restaurant_id == restaurant_id,
                Order.status == OrderStatus.COMPLETED,
            )
        )
        return float(result.scalar_one())

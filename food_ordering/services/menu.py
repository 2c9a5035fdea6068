"""
Menu Service

Partial updates of menu items and the best-selling item ranking.
"""

import logging
from typing import Any, Optional

from sqlalchemy import func, select

from food_ordering.core.errors import NotFoundError, ValidationError
from food_ordering.models import MenuItem, OrderItem
from food_ordering.services.base import BaseService

logger = logging.getLogger(__name__)


class MenuService(BaseService):

    async def update_item(
        self,
        menu_item_id: int,
        price: Optional[float] = None,
        is_available: Optional[bool] = None,
    ) -> MenuItem:
        """
        Update price and/or availability of a menu item.

        Arguments left as None keep their stored value.

        Raises:
            NotFoundError: no menu item with this id
            ValidationError: negative price
        """
        if price is not None and price < 0:
            raise ValidationError("Price must be non-negative")

        menu_item = await self.db.get(MenuItem, menu_item_id)
        if menu_item is None:
            raise NotFoundError("Menu item not found")

        if price is not None:
            menu_item.price = price
        if is_available is not None:
            menu_item.is_available = is_available

        await self.commit("Failed to update menu item")
        await self.db.refresh(menu_item)

        logger.info(f"Menu item #{menu_item.id} updated")
        return menu_item

    async def top_items(self, limit: int = 1) -> list[dict[str, Any]]:
        """
        Rank menu items by total quantity ordered across all orders.

        Returns:
            Up to ``limit`` rows of menu_item_id, name and total_quantity,
            or an empty list when nothing has been ordered yet.
        """
        total_quantity = func.sum(OrderItem.quantity).label("total_quantity")
        query = (
            select(
                MenuItem.id.label("menu_item_id"),
                MenuItem.name,
                total_quantity,
            )
            .join(OrderItem, OrderItem.menu_item_id == MenuItem.id)
            .group_by(MenuItem.id, MenuItem.name)
            .order_by(total_quantity.desc(), MenuItem.id)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

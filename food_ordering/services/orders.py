"""
Order Service

Orders are created together with their order items in a single
transaction, read back with items eagerly loaded, and moved between
``OrderStatus`` values.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from food_ordering.core.errors import NotFoundError, ValidationError
from food_ordering.models import Order, OrderItem, OrderStatus
from food_ordering.schemas import OrderItemCreate
from food_ordering.services.base import BaseService

logger = logging.getLogger(__name__)


class OrderService(BaseService):

    async def create(
        self,
        customer_id: Optional[int],
        restaurant_id: Optional[int],
        total_price: Optional[float],
        items: Sequence[OrderItemCreate] = (),
    ) -> Order:
        """
        Create an order and one order item per requested line.

        The order and all of its items are committed together. If any row
        is rejected (unknown customer, restaurant or menu item) the whole
        transaction is rolled back and nothing is stored.

        Args:
            customer_id: Ordering customer
            restaurant_id: Restaurant the order is placed at
            total_price: Order total as supplied by the client
            items: Lines of menu_item_id + quantity

        Returns:
            The stored order with its order items loaded

        Raises:
            ValidationError: missing ids/total or a non-positive quantity
            InternalError: storage failure, no partial order left behind
        """
        if customer_id is None or restaurant_id is None or total_price is None:
            raise ValidationError("customerId, restaurantId and totalPrice are required")
        if total_price < 0:
            raise ValidationError("Total price must be non-negative")
        if any(item.quantity < 1 for item in items):
            raise ValidationError("Item quantity must be at least 1")

        order = Order(
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            total_price=total_price,
            status=OrderStatus.PENDING,
            order_items=[
                OrderItem(menu_item_id=item.menu_item_id, quantity=item.quantity)
                for item in items
            ],
        )
        self.db.add(order)
        await self.commit("Failed to create order")

        logger.info(
            f"Order #{order.id} created for customer #{customer_id} "
            f"with {len(order.order_items)} item(s)"
        )
        return await self.get(order.id)

    async def get(self, order_id: int) -> Order:
        """Fetch an order with its order items."""
        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.order_items))
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise NotFoundError("Order not found")
        return order

    async def update_status(self, order_id: int, status: Optional[str]) -> Order:
        """
        Set the status of an order.

        The value is matched case-insensitively against ``OrderStatus``;
        any member may follow any other.

        Raises:
            ValidationError: status is not an OrderStatus value
            NotFoundError: no order with this id
        """
        try:
            new_status = OrderStatus((status or "").strip().upper())
        except ValueError:
            raise ValidationError(
                f"Invalid status. Options: {[s.value for s in OrderStatus]}"
            )

        order = await self.db.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        previous = order.status
        order.status = new_status
        await self.commit("Failed to update order status")
        await self.db.refresh(order)

        logger.info(f"Order #{order.id} status {previous.value} -> {new_status.value}")
        return order

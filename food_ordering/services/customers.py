"""
Customer Service

Creation with duplicate-email detection, lookups, and the
top-customers ranking.
"""

import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from food_ordering.core.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
    is_unique_violation,
)
from food_ordering.models import Customer, Order
from food_ordering.services.base import BaseService

logger = logging.getLogger(__name__)


class CustomerService(BaseService):

    def classify_integrity_error(self, error: IntegrityError) -> Optional[ServiceError]:
        if is_unique_violation(error, "email"):
            return ConflictError("A customer with this email already exists")
        return None

    async def create(
        self,
        name: Optional[str],
        email: Optional[str],
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Customer:
        """
        Insert a customer row.

        Email uniqueness is left to the database constraint; there is no
        lookup beforehand, so concurrent creates with one email resolve to
        exactly one row.

        Raises:
            ValidationError: name or email missing
            ConflictError: email already registered
            InternalError: any other storage failure
        """
        if not name or not email:
            raise ValidationError("Name and email are required")

        customer = Customer(
            name=name,
            email=email,
            phone_number=phone_number,
            address=address,
        )
        self.db.add(customer)
        try:
            await self.commit("Failed to create customer")
        except ConflictError:
            logger.warning(f"Duplicate customer email rejected: {email}")
            raise

        await self.db.refresh(customer)
        logger.info(f"Customer #{customer.id} created")
        return customer

    async def get(self, customer_id: int) -> Customer:
        customer = await self.db.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    async def list_orders(self, customer_id: int) -> list[Order]:
        """All orders placed by the customer, any status."""
        result = await self.db.execute(
            select(Order).where(Order.customer_id == customer_id)
        )
        return list(result.scalars().all())

    async def top_customers(self, limit: int = 5) -> list[dict[str, Any]]:
        """
        Rank customers by number of orders placed.

        Returns:
            Up to ``limit`` rows of customer_id, name and order_count,
            highest count first; ties ordered by customer id.
        """
        order_count = func.count(Order.id).label("order_count")
        query = (
            select(
                Customer.id.label("customer_id"),
                Customer.name,
                order_count,
            )
            .join(Order, Order.customer_id == Customer.id)
            .group_by(Customer.id, Customer.name)
            .order_by(order_count.desc(), Customer.id)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

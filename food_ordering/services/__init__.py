"""
                        Services Module

Domain operations, one service class per entity. Each service is built
around the request's database session:

    service = OrderService(db)
    order = await service.get(order_id)

Services:
    - customers: customer creation, lookup, top customers
    - restaurants: restaurants, menus, revenue
    - menu: menu item updates, top items
    - orders: order creation, lookup, status updates
"""

from food_ordering.services.base import BaseService
from food_ordering.services.customers import CustomerService
from food_ordering.services.menu import MenuService
from food_ordering.services.orders import OrderService
from food_ordering.services.restaurants import RestaurantService

__all__ = [
    "BaseService",
    "CustomerService",
    "MenuService",
    "OrderService",
    "RestaurantService",
]

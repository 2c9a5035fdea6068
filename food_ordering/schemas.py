"""
Pydantic Schemas for Request/Response Validation

JSON payloads use camelCase keys (``phoneNumber``, ``isAvailable``,
``orderItems``); attributes stay snake_case in Python. Every schema
accepts either spelling on input.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from food_ordering.models import OrderStatus

# Primary keys are 32-bit integer columns
MAX_ID = 2_147_483_647


class CamelModel(BaseModel):
    """Base schema with camelCase aliases and ORM attribute loading."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CustomerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Doe"])
    email: str = Field(..., min_length=1, max_length=255, examples=["jane@example.com"])
    phone_number: Optional[str] = Field(None, examples=["555-123-4567"])
    address: Optional[str] = Field(None, max_length=255, examples=["350 Fifth Avenue"])


class RestaurantCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Pizza Palace"])
    location: str = Field(..., min_length=1, max_length=255, examples=["New York"])


class MenuItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Pizza Margherita"])
    price: float = Field(..., ge=0, examples=[14.99])
    is_available: bool = Field(default=True)


class MenuItemUpdate(CamelModel):
    """Partial update; fields left out (or null) keep their stored value."""
    price: Optional[float] = Field(None, ge=0, examples=[12.5])
    is_available: Optional[bool] = Field(None, examples=[False])


class OrderItemCreate(CamelModel):
    """Single line in an order."""
    menu_item_id: int = Field(..., ge=1, le=MAX_ID, examples=[1])
    quantity: int = Field(..., ge=1, le=MAX_ID, examples=[2])


class OrderCreate(CamelModel):
    customer_id: int = Field(..., ge=1, le=MAX_ID, examples=[1])
    restaurant_id: int = Field(..., ge=1, le=MAX_ID, examples=[1])
    total_price: float = Field(..., ge=0, examples=[29.98])
    items: List[OrderItemCreate] = Field(default_factory=list)


class OrderStatusUpdate(CamelModel):
    status: str = Field(..., min_length=1, examples=["COMPLETED"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class CustomerResponse(CamelModel):
    id: int
    name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


class RestaurantResponse(CamelModel):
    id: int
    name: str
    location: str
    created_at: Optional[datetime] = None


class MenuItemResponse(CamelModel):
    id: int
    name: str
    price: float
    is_available: bool
    restaurant_id: int
    created_at: Optional[datetime] = None


class OrderItemResponse(CamelModel):
    id: int
    order_id: int
    menu_item_id: int
    quantity: int


class OrderResponse(CamelModel):
    """An order row without its items."""
    id: int
    customer_id: int
    restaurant_id: int
    total_price: float
    status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderDetailResponse(OrderResponse):
    """An order together with its order items."""
    order_items: List[OrderItemResponse] = Field(default_factory=list)


class RevenueResponse(CamelModel):
    revenue: float


class TopMenuItemResponse(CamelModel):
    menu_item_id: int
    name: str
    total_quantity: int


class TopCustomerResponse(CamelModel):
    customer_id: int
    name: str
    order_count: int


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime

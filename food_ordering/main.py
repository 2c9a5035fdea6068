"""
FastAPI Application Entry Point

Food Ordering API - customers, restaurants, menus and orders.

Endpoints:
    - POST /customers, GET /customers/{id}, GET /customers/{id}/orders
    - GET /customers/top: Customers ranked by order count
    - POST /restaurants, GET|POST /restaurants/{id}/menu
    - GET /restaurants/{id}/revenue: Revenue from completed orders
    - PATCH /menu/{id}: Update price / availability
    - GET /menu/top-items: Most ordered menu item
    - POST /orders, GET /orders/{id}, PATCH /orders/{id}/status
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import Depends, FastAPI, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from food_ordering.core.config import Settings, get_settings, setup_logging
from food_ordering.core.errors import ServiceError
from food_ordering.database import build_engine, build_session_maker, get_db, init_db
from food_ordering.schemas import (
    MAX_ID,
    CustomerCreate,
    CustomerResponse,
    ErrorResponse,
    HealthResponse,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
    OrderCreate,
    OrderDetailResponse,
    OrderResponse,
    OrderStatusUpdate,
    RestaurantCreate,
    RestaurantResponse,
    RevenueResponse,
    TopCustomerResponse,
    TopMenuItemResponse,
)
from food_ordering.services import (
    CustomerService,
    MenuService,
    OrderService,
    RestaurantService,
)

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await init_db(app.state.engine)
    logger.info("✅ Database initialized")

    yield

    logger.info("Shutting down...")
    await app.state.engine.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# ERROR HANDLERS
# =============================================================================

def _error_response(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render domain errors with their own status code."""
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request fields are a 400, not FastAPI's default 422."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"] if part != "body")
        problems.append(f"{location}: {err['msg']}")
    return _error_response(400, "Invalid request", "; ".join(problems))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    settings: Settings = request.app.state.settings
    return _error_response(
        500,
        "Internal Server Error",
        str(exc) if settings.debug else "An unexpected error occurred",
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings (tests); defaults to the cached
            environment settings

    Returns:
        Configured FastAPI instance with its own engine and session factory
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="CRUD API for customers, restaurants, menu items and orders.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_maker = build_session_maker(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    error_responses = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }

    # =========================================================================
    # ROOT & HEALTH
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root(request: Request) -> dict[str, str]:
        """API root with navigation links."""
        settings: Settings = request.app.state.settings
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.env_mode.value,
            "documentation": "/docs",
            "health": "/health",
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(db: AsyncSession = Depends(get_db)) -> HealthResponse:
        """Verify the database is reachable."""
        db_status = "healthy"
        try:
            await db.execute(select(1))
        except Exception as e:
            db_status = f"unhealthy: {str(e)}"
            logger.error(f"Database health check failed: {e}")

        return HealthResponse(
            status="operational" if db_status == "healthy" else "degraded",
            database=db_status,
            timestamp=datetime.now(),
        )

    # =========================================================================
    # CUSTOMERS
    # =========================================================================

    @app.post(
        "/customers",
        response_model=CustomerResponse,
        responses=error_responses,
        tags=["Customers"],
    )
    async def create_customer(
        payload: CustomerCreate,
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await CustomerService(db).create(
            name=payload.name,
            email=payload.email,
            phone_number=payload.phone_number,
            address=payload.address,
        )

    # Registered before /customers/{customer_id} so "top" is not read as an id
    @app.get(
        "/customers/top",
        response_model=list[TopCustomerResponse],
        tags=["Customers"],
        summary="Customers ranked by order count",
    )
    async def top_customers(request: Request, db: AsyncSession = Depends(get_db)) -> Any:
        limit = request.app.state.settings.top_customers_limit
        return await CustomerService(db).top_customers(limit=limit)

    @app.get(
        "/customers/{customer_id}",
        response_model=CustomerResponse,
        responses=error_responses,
        tags=["Customers"],
    )
    async def get_customer(
        customer_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await CustomerService(db).get(customer_id)

    @app.get(
        "/customers/{customer_id}/orders",
        response_model=list[OrderResponse],
        tags=["Customers"],
    )
    async def list_customer_orders(
        customer_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await CustomerService(db).list_orders(customer_id)

    # =========================================================================
    # RESTAURANTS
    # =========================================================================

    @app.post(
        "/restaurants",
        response_model=RestaurantResponse,
        responses=error_responses,
        tags=["Restaurants"],
    )
    async def create_restaurant(
        payload: RestaurantCreate,
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await RestaurantService(db).create(name=payload.name, location=payload.location)

    @app.get(
        "/restaurants/{restaurant_id}/menu",
        response_model=list[MenuItemResponse],
        tags=["Restaurants"],
    )
    async def get_menu(
        restaurant_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await RestaurantService(db).get_menu(restaurant_id)

    @app.post(
        "/restaurants/{restaurant_id}/menu",
        response_model=MenuItemResponse,
        responses=error_responses,
        tags=["Restaurants"],
    )
    async def add_menu_item(
        payload: MenuItemCreate,
        restaurant_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await RestaurantService(db).add_menu_item(
            restaurant_id=restaurant_id,
            name=payload.name,
            price=payload.price,
            is_available=payload.is_available,
        )

    @app.get(
        "/restaurants/{restaurant_id}/revenue",
        response_model=RevenueResponse,
        tags=["Restaurants"],
        summary="Revenue from completed orders",
    )
    async def restaurant_revenue(
        restaurant_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        revenue = await RestaurantService(db).revenue(restaurant_id)
        return RevenueResponse(revenue=revenue)

    # =========================================================================
    # MENU
    # =========================================================================

    @app.get(
        "/menu/top-items",
        response_model=list[TopMenuItemResponse],
        tags=["Menu"],
        summary="Most ordered menu item",
    )
    async def top_menu_items(request: Request, db: AsyncSession = Depends(get_db)) -> Any:
        limit = request.app.state.settings.top_items_limit
        return await MenuService(db).top_items(limit=limit)

    @app.patch(
        "/menu/{menu_item_id}",
        response_model=MenuItemResponse,
        responses=error_responses,
        tags=["Menu"],
    )
    async def update_menu_item(
        payload: MenuItemUpdate,
        menu_item_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await MenuService(db).update_item(
            menu_item_id,
            price=payload.price,
            is_available=payload.is_available,
        )

    # =========================================================================
    # ORDERS
    # =========================================================================

    @app.post(
        "/orders",
        response_model=OrderDetailResponse,
        responses=error_responses,
        tags=["Orders"],
    )
    async def create_order(payload: OrderCreate, db: AsyncSession = Depends(get_db)) -> Any:
        return await OrderService(db).create(
            customer_id=payload.customer_id,
            restaurant_id=payload.restaurant_id,
            total_price=payload.total_price,
            items=payload.items,
        )

    @app.get(
        "/orders/{order_id}",
        response_model=OrderDetailResponse,
        responses=error_responses,
        tags=["Orders"],
    )
    async def get_order(
        order_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await OrderService(db).get(order_id)

    @app.patch(
        "/orders/{order_id}/status",
        response_model=OrderResponse,
        responses=error_responses,
        tags=["Orders"],
    )
    async def update_order_status(
        payload: OrderStatusUpdate,
        order_id: int = Path(..., ge=1, le=MAX_ID),
        db: AsyncSession = Depends(get_db),
    ) -> Any:
        return await OrderService(db).update_status(order_id, payload.status)


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

def get_application() -> FastAPI:
    """Application factory for ``uvicorn --factory``; configures logging first."""
    setup_logging()
    return create_app()

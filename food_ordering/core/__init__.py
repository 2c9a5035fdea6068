"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from food_ordering.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from food_ordering.core.errors import (
    ServiceError,
    ValidationError,
    NotFoundError,
    ConflictError,
    InternalError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]

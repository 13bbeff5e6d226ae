from .catalog import (
    CategoryBase,
    CategoryCreate,
    CategoryRead,
    ProductBase,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from .common import CamelModel, HealthStatus, PaginatedResult, ProblemDetails, total_pages_for

__all__ = [
    "CamelModel",
    "CategoryBase",
    "CategoryCreate",
    "CategoryRead",
    "HealthStatus",
    "PaginatedResult",
    "ProblemDetails",
    "ProductBase",
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
    "total_pages_for",
]

from .category_service import CategoryService
from .product_query import ProductSearchCriteria
from .product_service import ProductService

__all__ = [
    "CategoryService",
    "ProductSearchCriteria",
    "ProductService",
]

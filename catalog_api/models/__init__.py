from .base import Base
from .category import Category
from .product import Product

__all__ = [
    "Base",
    "Category",
    "Product",
]

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .common import CamelModel


class CategoryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_active: bool = True


class CategoryCreate(CategoryBase):
    pass


class CategoryRead(CategoryBase):
    id: int


class ProductBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)
    category_id: int
    stock_quantity: int = Field(default=0, ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """Full replacement of a product's mutable fields."""


class ProductRead(ProductBase):
    id: int
    created_date: datetime
    is_active: bool
    category: Optional[CategoryRead] = None

"""Field copies between ORM entities and transfer objects.

Nothing here validates or touches the database; relationships that are not
already loaded are left out rather than fetched.
"""

from sqlalchemy import inspect

from catalog_api.models import Category, Product
from catalog_api.schemas import CategoryCreate, CategoryRead, ProductCreate, ProductRead, ProductUpdate


def category_to_read(category: Category) -> CategoryRead:
    return CategoryRead(
        id=category.id,
        name=category.name,
        description=category.description,
        is_active=category.is_active,
    )


def category_from_create(payload: CategoryCreate) -> Category:
    return Category(
        name=payload.name,
        description=payload.description,
        is_active=payload.is_active,
    )


def _loaded_category(product: Product) -> Category | None:
    if "category" in inspect(product).unloaded:
        return None
    return product.category


def product_to_read(product: Product) -> ProductRead:
    category = _loaded_category(product)
    return ProductRead(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category_id=product.category_id,
        category=category_to_read(category) if category is not None else None,
        stock_quantity=product.stock_quantity,
        created_date=product.created_date,
        is_active=product.is_active,
    )


def product_from_create(payload: ProductCreate) -> Product:
    return Product(
        name=payload.name,
        description=payload.description,
        price=payload.price,
        category_id=payload.category_id,
        stock_quantity=payload.stock_quantity,
        is_active=True,
    )


def apply_product_update(product: Product, payload: ProductUpdate) -> None:
    # created_date and is_active are not part of an update
    product.name = payload.name
    product.description = payload.description
    product.price = payload.price
    product.category_id = payload.category_id
    product.stock_quantity = payload.stock_quantity

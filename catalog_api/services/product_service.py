from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from catalog_api.models import Category, Product
from catalog_api.schemas import PaginatedResult, ProductCreate, ProductRead, ProductUpdate

from . import exceptions
from .mapping import apply_product_update, product_from_create, product_to_read
from .product_query import (
    DEFAULT_PAGE_SIZE,
    ProductSearchCriteria,
    active_products,
    fetch_product_page,
)

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def list_active(self, *, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedResult[ProductRead]:
        """Active products, newest first."""

        return self.search(ProductSearchCriteria(page=page, page_size=page_size))

    def search(self, criteria: ProductSearchCriteria) -> PaginatedResult[ProductRead]:
        total, products = fetch_product_page(self.db, criteria)
        logger.debug(
            "Product search matched %s rows, returning page %s (%s items)",
            total,
            criteria.page,
            len(products),
        )
        return PaginatedResult[ProductRead].create(
            [product_to_read(product) for product in products],
            total_count=total,
            page=criteria.page,
            page_size=criteria.page_size,
        )

    def get_product(self, product_id: int) -> Optional[ProductRead]:
        product = self._find_active(product_id, with_category=True)
        if product is None:
            return None
        return product_to_read(product)

    def find_any(self, product_id: int) -> Optional[Product]:
        """Raw lookup by id that ignores the soft-delete flag."""

        return self.db.get(Product, product_id)

    def create_product(self, data: ProductCreate) -> ProductRead:
        self._ensure_category(data.category_id)
        product = product_from_create(data)
        self.db.add(product)
        self.db.commit()
        logger.info("Product created: id=%s category_id=%s", product.id, product.category_id)
        return product_to_read(self._reload(product.id))

    def update_product(self, product_id: int, data: ProductUpdate) -> Optional[ProductRead]:
        product = self._find_active(product_id)
        if product is None:
            return None
        self._ensure_category(data.category_id)
        apply_product_update(product, data)
        self.db.add(product)
        self.db.commit()
        logger.info("Product updated: id=%s", product_id)
        return product_to_read(self._reload(product_id))

    def soft_delete(self, product_id: int) -> bool:
        product = self._find_active(product_id)
        if product is None:
            return False
        product.is_active = False
        self.db.add(product)
        self.db.commit()
        logger.info("Product soft-deleted: id=%s", product_id)
        return True

    def _find_active(self, product_id: int, *, with_category: bool = False) -> Optional[Product]:
        query = active_products(self.db).filter(Product.id == product_id)
        if with_category:
            query = query.options(selectinload(Product.category))
        return query.first()

    def _reload(self, product_id: int) -> Product:
        return (
            self.db.query(Product)
            .options(selectinload(Product.category))
            .populate_existing()
            .filter(Product.id == product_id)
            .one()
        )

    def _ensure_category(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if category is None:
            logger.warning("Rejected product write for missing category_id=%s", category_id)
            raise exceptions.NotFoundError("Category not found")
        return category

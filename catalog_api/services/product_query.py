"""Product search: filter predicates, sort order and pagination.

The query always starts from active products. Each supplied criterion adds
one more AND-ed predicate, then a sort key is looked up, then the page is
sliced off. The total is counted on the filtered set before slicing.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, selectinload

from catalog_api.models import Product


DEFAULT_PAGE_SIZE = 50
# page and page_size are 32-bit ints, so the offset always fits a 64-bit SQL integer
MAX_PAGE_VALUE = 2**31 - 1

# Keys are compared after lower-casing and dropping underscores, so
# "createdDate", "created_date" and "CREATEDDATE" all select the same column.
SORT_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
    "createddate": Product.created_date,
    "stockquantity": Product.stock_quantity,
}


@dataclass(frozen=True)
class ProductSearchCriteria:
    search_term: Optional[str] = None
    category_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    in_stock: Optional[bool] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def search_words(search_term: Optional[str]) -> list[str]:
    if not search_term:
        return []
    return search_term.split()


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str]):
    """Return ``(column, descending)`` for the requested sort."""

    key = (sort_by or "").replace("_", "").lower()
    column = SORT_COLUMNS.get(key)
    if column is None:
        return Product.created_date, True
    return column, (sort_order or "").lower() == "desc"


def active_products(db: Session) -> Query:
    return db.query(Product).filter(Product.is_active.is_(True))


def apply_filters(query: Query, criteria: ProductSearchCriteria) -> Query:
    for word in search_words(criteria.search_term):
        query = query.filter(
            or_(
                Product.name.icontains(word, autoescape=True),
                Product.description.icontains(word, autoescape=True),
            )
        )

    if criteria.category_id is not None:
        query = query.filter(Product.category_id == criteria.category_id)

    if criteria.min_price is not None:
        query = query.filter(Product.price >= criteria.min_price)
    if criteria.max_price is not None:
        query = query.filter(Product.price <= criteria.max_price)

    if criteria.in_stock is True:
        query = query.filter(Product.stock_quantity > 0)
    elif criteria.in_stock is False:
        query = query.filter(Product.stock_quantity == 0)

    return query


def apply_sort(query: Query, criteria: ProductSearchCriteria) -> Query:
    column, descending = resolve_sort(criteria.sort_by, criteria.sort_order)
    # id breaks ties so equal sort keys still come back in a stable order
    if descending:
        return query.order_by(column.desc(), Product.id.desc())
    return query.order_by(column.asc(), Product.id.asc())


def fetch_product_page(db: Session, criteria: ProductSearchCriteria) -> tuple[int, list[Product]]:
    """Run the search and return ``(total_count, products_on_page)``.

    Products on the page have their category loaded.
    """

    query = apply_filters(active_products(db), criteria)
    total = query.count()
    products = (
        apply_sort(query, criteria)
        .options(selectinload(Product.category))
        .offset(criteria.offset)
        .limit(criteria.page_size)
        .all()
    )
    return total, products

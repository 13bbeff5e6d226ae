from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from catalog_api.core.config import Settings
from catalog_api.core.dependencies import get_app_settings, get_db
from catalog_api.schemas import PaginatedResult, ProductCreate, ProductRead, ProductUpdate
from catalog_api.services import ProductSearchCriteria, ProductService
from catalog_api.services import exceptions as service_exceptions
from catalog_api.services.product_query import MAX_PAGE_VALUE

router = APIRouter(prefix="/products", tags=["products"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")


@router.get("", response_model=PaginatedResult[ProductRead])
def list_products(
    page: int = Query(default=1, ge=1, le=MAX_PAGE_VALUE),
    page_size: Optional[int] = Query(default=None, ge=1, le=MAX_PAGE_VALUE, alias="pageSize"),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
):
    service = ProductService(db)
    return service.list_active(page=page, page_size=page_size or settings.DEFAULT_PAGE_SIZE)


@router.get("/search", response_model=PaginatedResult[ProductRead])
def search_products(
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    min_price: Optional[Decimal] = Query(default=None, alias="minPrice"),
    max_price: Optional[Decimal] = Query(default=None, alias="maxPrice"),
    in_stock: Optional[bool] = Query(default=None, alias="inStock"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    sort_order: Optional[str] = Query(default=None, alias="sortOrder"),
    page: int = Query(default=1, ge=1, le=MAX_PAGE_VALUE),
    page_size: Optional[int] = Query(default=None, ge=1, le=MAX_PAGE_VALUE, alias="pageSize"),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
):
    criteria = ProductSearchCriteria(
        search_term=search_term,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
    )
    service = ProductService(db)
    return service.search(criteria)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    service = ProductService(db)
    product = service.get_product(product_id)
    if product is None:
        raise _not_found()
    return product


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    service = ProductService(db)
    try:
        product = service.create_product(payload)
    except service_exceptions.NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
):
    service = ProductService(db)
    try:
        product = service.update_product(product_id, payload)
    except service_exceptions.NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if product is None:
        raise _not_found()
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    service = ProductService(db)
    if not service.soft_delete(product_id):
        raise _not_found()

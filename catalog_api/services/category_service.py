import logging
from typing import Optional

from sqlalchemy.orm import Session

from catalog_api.models import Category
from catalog_api.schemas import CategoryCreate, CategoryRead

from .mapping import category_from_create, category_to_read

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryRead]:
        categories = self.db.query(Category).order_by(Category.id).all()
        return [category_to_read(category) for category in categories]

    def get_category(self, category_id: int) -> Optional[CategoryRead]:
        category = self.db.get(Category, category_id)
        if category is None:
            return None
        return category_to_read(category)

    def create_category(self, data: CategoryCreate) -> CategoryRead:
        category = category_from_create(data)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        logger.info("Category created: id=%s name=%s", category.id, category.name)
        return category_to_read(category)

from typing import List, Optional
from sqlalchemy.orm import Session
from store_api.core.database import unit_of_work
from store_api.core.exceptions import StoreValidationError
from store_api.core.patch import merge_patch
from store_api.models.database import Category
from store_api.models.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from store_api.repositories.category_repository import CategoryRepository
import logging

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.db = db
        self.categories = CategoryRepository(db)

    async def get_all_categories(self) -> List[CategoryResponse]:
        return self.categories.list_responses()

    async def get_category(self, category_id: int) -> Optional[CategoryResponse]:
        return self.categories.get_response(category_id)

    async def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        with unit_of_work(self.db):
            category = self.categories.add(Category(**category_data.model_dump()))

        logger.info(f"Category created with ID: {category.id}")
        return self.categories.get_response(category.id)

    async def update_category(self, category_id: int, category_update: CategoryUpdate) -> Optional[CategoryResponse]:
        category = self.categories.get(category_id)
        if category is None:
            return None

        with unit_of_work(self.db):
            merge_patch(category, category_update)

        return self.categories.get_response(category_id)

    async def delete_category(self, category_id: int) -> bool:
        """Delete an empty category; categories that still hold products are kept"""
        category = self.categories.get(category_id)
        if category is None:
            return False

        product_count = self.categories.product_count(category_id)
        if product_count:
            raise StoreValidationError(
                f"Category with ID {category_id} still has {product_count} product(s) and cannot be deleted."
            )

        with unit_of_work(self.db):
            self.categories.delete(category)

        logger.info(f"Category {category_id} deleted")
        return True

import math
from typing import List, Optional
from sqlalchemy.orm import Session
from store_api.core.database import unit_of_work
from store_api.core.exceptions import StoreValidationError
from store_api.core.patch import merge_patch
from store_api.models.database import Product
from store_api.models.schemas import PagedResult, ProductCreate, ProductResponse, ProductUpdate
from store_api.repositories.category_repository import CategoryRepository
from store_api.repositories.product_repository import ProductRepository
import logging

logger = logging.getLogger(__name__)


def build_page(items: List[ProductResponse], page_number: int, page_size: int, total_count: int) -> PagedResult[ProductResponse]:
    return PagedResult[ProductResponse](
        items=items,
        page_number=page_number,
        page_size=page_size,
        total_count=total_count,
        total_pages=math.ceil(total_count / page_size),
    )


class ProductService:
    """Product catalog operations"""

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.categories = CategoryRepository(db)

    async def get_all_products(self) -> List[ProductResponse]:
        return self.products.list_responses()

    async def get_products_page(self, page_number: int, page_size: int) -> PagedResult[ProductResponse]:
        items, total_count = self.products.list_page(page_number, page_size)
        return build_page(items, page_number, page_size, total_count)

    async def get_product(self, product_id: int) -> Optional[ProductResponse]:
        return self.products.get_response(product_id)

    async def get_products_by_category(self, category_id: int) -> List[ProductResponse]:
        return self.products.list_by_category(category_id)

    async def search_products(self, term: str) -> List[ProductResponse]:
        """Case-insensitive substring match on name; a blank term matches nothing"""
        if not term or not term.strip():
            return []
        return self.products.search_by_name(term)

    async def search_products_page(self, term: str, page_number: int, page_size: int) -> PagedResult[ProductResponse]:
        if not term or not term.strip():
            return build_page([], page_number, page_size, 0)
        items, total_count = self.products.search_page(term, page_number, page_size)
        return build_page(items, page_number, page_size, total_count)

    def _require_category(self, category_id: int) -> None:
        if not self.categories.exists(category_id):
            raise StoreValidationError(f"Category with ID {category_id} does not exist.")

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        self._require_category(product_data.category_id)

        with unit_of_work(self.db):
            product = self.products.add(Product(**product_data.model_dump()))

        logger.info(f"Product created with ID: {product.id}")
        return self.products.get_response(product.id)

    async def update_product(self, product_id: int, product_update: ProductUpdate) -> Optional[ProductResponse]:
        product = self.products.get(product_id)
        if product is None:
            return None

        if product_update.category_id is not None:
            self._require_category(product_update.category_id)

        with unit_of_work(self.db):
            merge_patch(product, product_update)

        return self.products.get_response(product_id)

    async def delete_product(self, product_id: int) -> bool:
        product = self.products.get(product_id)
        if product is None:
            return False

        if self.products.is_ordered(product_id):
            raise StoreValidationError(
                f"Product with ID {product_id} is referenced by existing orders and cannot be deleted."
            )

        with unit_of_work(self.db):
            self.products.delete(product)

        logger.info(f"Product {product_id} deleted")
        return True

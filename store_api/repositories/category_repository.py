from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from store_api.models.database import Category, Product
from store_api.models.schemas import CategoryResponse


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def _read_query(self):
        return (
            self.db.query(Category, func.count(Product.id))
            .outerjoin(Product, Product.category_id == Category.id)
            .group_by(Category.id)
        )

    @staticmethod
    def _to_response(row) -> CategoryResponse:
        category, product_count = row
        return CategoryResponse(
            id=category.id,
            name=category.name,
            description=category.description,
            created_at=category.created_at,
            product_count=product_count,
        )

    def list_responses(self) -> List[CategoryResponse]:
        return [self._to_response(row) for row in self._read_query().order_by(Category.id).all()]

    def get_response(self, category_id: int) -> Optional[CategoryResponse]:
        row = self._read_query().filter(Category.id == category_id).first()
        return self._to_response(row) if row else None

    def get(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def exists(self, category_id: int) -> bool:
        return self.db.query(Category.id).filter(Category.id == category_id).first() is not None

    def product_count(self, category_id: int) -> int:
        return self.db.query(func.count(Product.id)).filter(Product.category_id == category_id).scalar()

    def add(self, category: Category) -> Category:
        self.db.add(category)
        self.db.flush()
        return category

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        self.db.flush()

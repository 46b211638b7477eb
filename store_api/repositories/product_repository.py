from typing import List, Optional, Tuple
from datetime import datetime
from sqlalchemy import update
from sqlalchemy.orm import Session
from store_api.models.database import Category, OrderItem, Product
from store_api.models.schemas import ProductResponse


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductRepository:
    """Product persistence plus the read-side join with categories"""

    def __init__(self, db: Session):
        self.db = db

    def _read_query(self):
        return (
            self.db.query(Product, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .order_by(Product.id)
        )

    def _name_filter(self, term: str):
        return Product.name.ilike(_like_pattern(term.strip()), escape="\\")

    @staticmethod
    def _to_response(row) -> ProductResponse:
        product, category_name = row
        return ProductResponse(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            category_id=product.category_id,
            category_name=category_name or "",
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def _page(self, query, page_number: int, page_size: int) -> Tuple[List[ProductResponse], int]:
        total_count = query.order_by(None).count()
        rows = query.offset((page_number - 1) * page_size).limit(page_size).all()
        return [self._to_response(row) for row in rows], total_count

    # Reads

    def list_responses(self) -> List[ProductResponse]:
        return [self._to_response(row) for row in self._read_query().all()]

    def list_page(self, page_number: int, page_size: int) -> Tuple[List[ProductResponse], int]:
        return self._page(self._read_query(), page_number, page_size)

    def list_by_category(self, category_id: int) -> List[ProductResponse]:
        rows = self._read_query().filter(Product.category_id == category_id).all()
        return [self._to_response(row) for row in rows]

    def search_by_name(self, term: str) -> List[ProductResponse]:
        rows = self._read_query().filter(self._name_filter(term)).all()
        return [self._to_response(row) for row in rows]

    def search_page(self, term: str, page_number: int, page_size: int) -> Tuple[List[ProductResponse], int]:
        return self._page(self._read_query().filter(self._name_filter(term)), page_number, page_size)

    def get_response(self, product_id: int) -> Optional[ProductResponse]:
        row = self._read_query().filter(Product.id == product_id).first()
        return self._to_response(row) if row else None

    # Writes

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_for_update(self, product_id: int) -> Optional[Product]:
        """Locking read; FOR UPDATE is dropped on backends without row locks"""
        return (
            self.db.query(Product)
            .filter(Product.id == product_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Take quantity units off a product only if that many are in stock.

        Returns False when no row was updated, i.e. stock ran short since it
        was read.
        """
        update_count = self.db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        ).rowcount
        return update_count == 1

    def current_stock(self, product_id: int) -> int:
        return self.db.query(Product.stock).filter(Product.id == product_id).scalar() or 0

    def is_ordered(self, product_id: int) -> bool:
        return self.db.query(OrderItem.id).filter(OrderItem.product_id == product_id).first() is not None

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()

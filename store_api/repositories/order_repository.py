from collections import defaultdict
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from store_api.models.database import Order, OrderItem, Product, User
from store_api.models.schemas import OrderItemResponse, OrderResponse


class OrderRepository:
    """Order persistence.

    Reads go through explicit joins (orders -> users, order_items -> products)
    and come back as flat response records, so serialization never walks ORM
    relationships.
    """

    def __init__(self, db: Session):
        self.db = db

    def _load_items(self, order_ids: List[int]) -> Dict[int, List[OrderItemResponse]]:
        items_by_order = defaultdict(list)
        if not order_ids:
            return items_by_order

        rows = (
            self.db.query(OrderItem, Product.name)
            .outerjoin(Product, OrderItem.product_id == Product.id)
            .filter(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.id)
            .all()
        )
        for item, product_name in rows:
            items_by_order[item.order_id].append(
                OrderItemResponse(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=product_name or "",
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                )
            )
        return items_by_order

    def _load_responses(self, *criteria) -> List[OrderResponse]:
        rows = (
            self.db.query(Order, User.first_name, User.last_name)
            .outerjoin(User, Order.user_id == User.id)
            .filter(*criteria)
            .order_by(Order.id)
            .all()
        )
        items_by_order = self._load_items([order.id for order, _, _ in rows])

        responses = []
        for order, first_name, last_name in rows:
            user_name = f"{first_name} {last_name}" if first_name is not None else ""
            responses.append(
                OrderResponse(
                    id=order.id,
                    user_id=order.user_id,
                    user_name=user_name,
                    total_amount=order.total_amount,
                    status=order.status,
                    shipping_address=order.shipping_address,
                    order_date=order.order_date,
                    shipped_date=order.shipped_date,
                    delivered_date=order.delivered_date,
                    order_items=items_by_order.get(order.id, []),
                )
            )
        return responses

    def list_responses(self) -> List[OrderResponse]:
        return self._load_responses()

    def list_responses_by_user(self, user_id: int) -> List[OrderResponse]:
        return self._load_responses(Order.user_id == user_id)

    def get_response(self, order_id: int) -> Optional[OrderResponse]:
        responses = self._load_responses(Order.id == order_id)
        return responses[0] if responses else None

    def get(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def add(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order

    def delete(self, order: Order) -> None:
        # order_items go with it through the relationship cascade
        self.db.delete(order)
        self.db.flush()

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from store_api.core.database import unit_of_work
from store_api.core.exceptions import InsufficientStockError, StoreValidationError
from store_api.core.patch import merge_patch
from store_api.models.database import Order, OrderItem
from store_api.models.schemas import OrderCreate, OrderResponse, OrderUpdate
from store_api.models.status import OrderStatus, VALID_STATUSES, check_transition, parse_status
from store_api.repositories.order_repository import OrderRepository
from store_api.repositories.product_repository import ProductRepository
from store_api.repositories.user_repository import UserRepository
import logging

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order workflow: placing orders against the catalog and moving them
    through their status lifecycle.

    Order creation runs in a single transaction. Each line item's stock is
    taken with a conditional UPDATE (``stock >= quantity``), so concurrent
    orders for the same product can never oversell it, and any failure rolls
    back every decrement made so far together with the order insert.
    """

    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepository(db)
        self.products = ProductRepository(db)
        self.users = UserRepository(db)

    async def get_all_orders(self) -> List[OrderResponse]:
        return self.orders.list_responses()

    async def get_order(self, order_id: int) -> Optional[OrderResponse]:
        return self.orders.get_response(order_id)

    async def get_orders_by_user(self, user_id: int) -> List[OrderResponse]:
        return self.orders.list_responses_by_user(user_id)

    async def create_order(self, order_data: OrderCreate) -> OrderResponse:
        """
        Place a new order.

        Raises StoreValidationError when the user or a product does not
        exist, and InsufficientStockError when a line item asks for more
        than is in stock. Nothing is persisted in either case.
        """
        logger.info(
            f"Processing order for user {order_data.user_id} "
            f"with {len(order_data.order_items)} line item(s)"
        )

        try:
            if not self.users.exists(order_data.user_id):
                raise StoreValidationError(f"User with ID {order_data.user_id} does not exist.")

            total_amount = Decimal("0.00")
            order_items = []

            for item_request in order_data.order_items:
                product = self.products.get_for_update(item_request.product_id)
                if product is None:
                    raise StoreValidationError(f"Product with ID {item_request.product_id} does not exist.")

                if product.stock < item_request.quantity:
                    raise InsufficientStockError(product.name, product.stock)

                unit_price = product.price
                subtotal = unit_price * item_request.quantity
                total_amount += subtotal

                # Another transaction may have taken the stock since the read
                if not self.products.decrement_stock(product.id, item_request.quantity):
                    raise InsufficientStockError(product.name, self.products.current_stock(product.id))

                order_items.append(
                    OrderItem(
                        product_id=product.id,
                        quantity=item_request.quantity,
                        unit_price=unit_price,
                        subtotal=subtotal,
                    )
                )
                logger.debug(f"Reserved {item_request.quantity} x {product.name} at {unit_price}")

            order = self.orders.add(
                Order(
                    user_id=order_data.user_id,
                    shipping_address=order_data.shipping_address,
                    total_amount=total_amount,
                    status=OrderStatus.PENDING.value,
                    order_date=datetime.utcnow(),
                    order_items=order_items,
                )
            )
            order_id = order.id
            self.db.commit()

        except StoreValidationError as e:
            self.db.rollback()
            logger.info(f"Order for user {order_data.user_id} rejected: {e.message}")
            raise
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Order created with ID: {order_id} (total {total_amount})")
        return self.orders.get_response(order_id)

    async def update_order(self, order_id: int, order_update: OrderUpdate) -> Optional[OrderResponse]:
        """Apply a shipping address and/or status change; None if the order is absent"""
        order = self.orders.get(order_id)
        if order is None:
            return None

        # Validate everything before touching the order
        new_status = None
        if order_update.status is not None:
            new_status = parse_status(order_update.status)
            current = OrderStatus(order.status) if order.status in VALID_STATUSES else None
            check_transition(current, new_status)

        with unit_of_work(self.db):
            merge_patch(order, order_update, skip=("status",))
            if new_status is not None:
                self._apply_status(order, new_status)

        return self.orders.get_response(order_id)

    @staticmethod
    def _apply_status(order: Order, new_status: OrderStatus) -> None:
        previous = order.status
        order.status = new_status.value

        # Shipped/delivered dates are stamped once and never overwritten
        if new_status == OrderStatus.SHIPPED and order.shipped_date is None:
            order.shipped_date = datetime.utcnow()
        if new_status == OrderStatus.DELIVERED and order.delivered_date is None:
            order.delivered_date = datetime.utcnow()

        if previous != order.status:
            logger.info(f"Order {order.id} status changed: {previous} -> {order.status}")

    async def delete_order(self, order_id: int) -> bool:
        """Hard-delete an order and its items. Stock is not restored."""
        order = self.orders.get(order_id)
        if order is None:
            return False

        with unit_of_work(self.db):
            self.orders.delete(order)

        logger.info(f"Order {order_id} deleted")
        return True

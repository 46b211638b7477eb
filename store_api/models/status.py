import enum
from typing import Optional
from store_api.core.exceptions import StoreValidationError


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


VALID_STATUSES = [status.value for status in OrderStatus]


def parse_status(value: str) -> OrderStatus:
    """Map a status string from the wire onto OrderStatus (exact, case-sensitive)"""
    try:
        return OrderStatus(value)
    except ValueError:
        raise StoreValidationError(f"Invalid status. Valid values are: {', '.join(VALID_STATUSES)}") from None


def is_transition_allowed(current: Optional[OrderStatus], new: OrderStatus) -> bool:
    """Order status transition policy.

    Every status may currently follow every other one, including moving a
    Delivered order back to Pending. Tighten the rules here only.
    """
    return True


def check_transition(current: Optional[OrderStatus], new: OrderStatus) -> None:
    if not is_transition_allowed(current, new):
        raise StoreValidationError(
            f"Cannot change order status from {current.value if current else 'none'} to {new.value}"
        )

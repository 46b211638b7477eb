class StoreValidationError(ValueError):
    """Raised when caller input refers to missing or invalid state.

    Surfaced to HTTP clients as 400 with the message as body.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InsufficientStockError(StoreValidationError):
    """Raised when a line item asks for more units than a product has"""

    def __init__(self, product_name: str, available: int):
        super().__init__(f"Insufficient stock for product {product_name}. Available: {available}")
        self.product_name = product_name
        self.available = available

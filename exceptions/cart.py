"""
Cart-related exceptions.
"""

from .base import StorefrontException


class CartException(StorefrontException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self, session_id: str | None = None):
        super().__init__(
            "Cart is empty" if session_id is None else f"Cart is empty for session {session_id}",
            details={'session_id': session_id} if session_id is not None else {}
        )
        self.session_id = session_id


class InvalidQuantityException(CartException):
    """Raised when a non-positive quantity is added to the cart."""

    def __init__(self, product_id: int, quantity: int):
        super().__init__(
            f"Invalid quantity {quantity} for product {product_id}: must be at least 1",
            details={'product_id': product_id, 'quantity': quantity}
        )
        self.product_id = product_id
        self.quantity = quantity


class OutOfStockException(CartException):
    """Raised when adding a product that has no stock left."""

    def __init__(self, product_id: int, product_name: str | None = None):
        label = f"'{product_name}' ({product_id})" if product_name else str(product_id)
        super().__init__(
            f"Product {label} is out of stock",
            details={'product_id': product_id}
        )
        self.product_id = product_id
        self.product_name = product_name

"""
Order-related exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for order-related errors."""
    pass


class InvalidOrderStatusException(OrderException):
    """Raised when an admin sets a status that does not exist."""

    def __init__(self, order_id: str, status: str):
        super().__init__(
            f"Invalid status '{status}' for order {order_id}",
            details={'order_id': order_id, 'status': status}
        )
        self.order_id = order_id
        self.status = status

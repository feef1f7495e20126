from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"          # Submitted at checkout, not yet handled
    PROCESSING = "processing"    # Accepted by admin, being prepared
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def from_string(cls, value: str) -> 'OrderStatus':
        """
        Convert string to OrderStatus enum (case-insensitive, whitespace tolerant).

        Raises:
            ValueError: If value is not a valid status
        """
        if not value:
            raise ValueError("Order status cannot be empty")

        normalized = value.strip().lower()
        for status in cls:
            if status.value == normalized:
                return status

        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Invalid order status '{value}'. Valid statuses: {valid}")

"""
Checkout-related exceptions.
"""

from .base import StorefrontException


class CheckoutException(StorefrontException):
    """Base exception for checkout errors."""
    pass


class InvalidCustomerInfoException(CheckoutException):
    """
    Raised when the customer form does not validate.

    Attributes:
        errors: Mapping field name -> error message (one entry per invalid field)
    """

    def __init__(self, errors: dict[str, str]):
        fields = ', '.join(sorted(errors))
        super().__init__(
            f"Invalid customer information: {fields}",
            details={'fields': fields}
        )
        self.errors = errors

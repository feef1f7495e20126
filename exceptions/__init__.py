"""
Custom exceptions for the storefront.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
StorefrontException (base)
├── CatalogException
│   └── CatalogLoadException
├── CartException
│   ├── EmptyCartException
│   ├── InvalidQuantityException
│   └── OutOfStockException
├── CheckoutException
│   └── InvalidCustomerInfoException
└── OrderException
    └── InvalidOrderStatusException

Absence is not an error: lookups by id return None, and a missing or corrupt
persisted cart/favorites record reads as empty.

Usage:
------
Stores raise specific exceptions:
    raise OutOfStockException(product_id=10, product_name="Tênis X")

Callers catch and display user-friendly messages:
    try:
        await cart.add_to_cart(product, 2)
    except CartException as e:
        print(str(e))
"""

from .base import StorefrontException
from .cart import CartException, EmptyCartException, InvalidQuantityException, OutOfStockException
from .catalog import CatalogException, CatalogLoadException
from .checkout import CheckoutException, InvalidCustomerInfoException
from .order import OrderException, InvalidOrderStatusException

__all__ = [
    # Base
    'StorefrontException',

    # Cart
    'CartException',
    'EmptyCartException',
    'InvalidQuantityException',
    'OutOfStockException',

    # Catalog
    'CatalogException',
    'CatalogLoadException',

    # Checkout
    'CheckoutException',
    'InvalidCustomerInfoException',

    # Order
    'OrderException',
    'InvalidOrderStatusException',
]

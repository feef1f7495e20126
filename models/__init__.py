"""
Models Package

Pydantic DTOs shared by the mock API, the stores and the persistence layer.
"""

from models.base import CamelModel
from models.product import ProductDTO
from models.category import CategoryDTO
from models.cartItem import CartItemDTO
from models.order import OrderDTO, CustomerInfoDTO, OrderSubmissionDTO
from models.user import UserDTO
from models.catalog import CatalogDataDTO

__all__ = [
    "CamelModel",
    "ProductDTO",
    "CategoryDTO",
    "CartItemDTO",
    "OrderDTO",
    "CustomerInfoDTO",
    "OrderSubmissionDTO",
    "UserDTO",
    "CatalogDataDTO",
]

from pydantic import Field

from models.base import CamelModel
from models.product import ProductDTO


class CartItemDTO(CamelModel):
    """
    One cart line: a frozen product snapshot plus quantity.

    The snapshot is taken when the product is first added, so later price or
    stock changes in the catalog do not affect lines already in the cart.
    """
    product: ProductDTO
    quantity: int = Field(ge=1)

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

from pydantic import ConfigDict, Field

from models.base import CamelModel

UNCATEGORIZED = "Uncategorized"


class ProductDTO(CamelModel):
    # Snapshots are shared between catalog, cart and favorites; never mutate in place
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str
    description: str = ""
    brand: str = ""
    price: float = Field(ge=0)
    # Shown struck-through next to price; expected >= price but not enforced
    old_price: float | None = None
    category: int
    category_name: str | None = None
    images: list[str] = Field(default_factory=list)
    featured: bool = False
    on_sale: bool = False
    best_seller: bool = False
    stock: int = Field(default=0, ge=0)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

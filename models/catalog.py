from pydantic import Field

from models.base import CamelModel
from models.category import CategoryDTO
from models.product import ProductDTO
from models.user import UserDTO


class CatalogDataDTO(CamelModel):
    """Seed data file layout (data/catalog.json)."""
    products: list[ProductDTO] = Field(default_factory=list)
    categories: list[CategoryDTO] = Field(default_factory=list)
    users: list[UserDTO] = Field(default_factory=list)

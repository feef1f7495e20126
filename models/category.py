from pydantic import ConfigDict

from models.base import CamelModel


class CategoryDTO(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    image: str = ""
    description: str = ""
    featured: bool = False

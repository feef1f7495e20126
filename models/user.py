from datetime import datetime

from pydantic import Field

from enums.user_role import UserRole
from models.base import CamelModel


class UserDTO(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole = UserRole.CUSTOMER
    created_at: datetime = Field(default_factory=datetime.now)
    phone: str | None = None
    address: str | None = None
    cpf: str | None = None

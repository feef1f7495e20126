import re
from datetime import datetime

from pydantic import Field, ValidationError, field_validator

from enums.order_status import OrderStatus
from exceptions.checkout import InvalidCustomerInfoException
from models.base import CamelModel
from models.cartItem import CartItemDTO

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


class CustomerInfoDTO(CamelModel):
    name: str
    email: str
    phone: str
    address: str

    @field_validator('name', 'email', 'phone', 'address', mode='before')
    @classmethod
    def require_text(cls, v, info):
        if v is None or not str(v).strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return str(v).strip()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError("Email is invalid")
        return v

    @classmethod
    def from_form(cls, data: dict) -> 'CustomerInfoDTO':
        """
        Validate checkout form data.

        Raises:
            InvalidCustomerInfoException: with one message per invalid field
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = {}
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "form"
                if field in errors:
                    continue
                if error["type"] == "missing":
                    errors[field] = f"{field.capitalize()} is required"
                else:
                    # pydantic prefixes ValueError messages with "Value error, "
                    errors[field] = error["msg"].removeprefix("Value error, ")
            raise InvalidCustomerInfoException(errors) from e


class OrderDTO(CamelModel):
    id: str
    user_id: str = "guest"
    items: list[CartItemDTO] = Field(default_factory=list)
    total: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    shipping_address: str = ""


class OrderSubmissionDTO(CamelModel):
    success: bool
    order_id: str

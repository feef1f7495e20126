import logging

import config
from api.mock_remote import MockRemoteAPI
from exceptions.cart import EmptyCartException
from models.order import CustomerInfoDTO, OrderSubmissionDTO
from services.cart import CartStore

logger = logging.getLogger(__name__)


class CheckoutService:
    """Turns the session cart into a submitted order."""

    def __init__(self, cart: CartStore, api: MockRemoteAPI, shipping_fee: float | None = None):
        self.cart = cart
        self.api = api
        self.shipping_fee = config.SHIPPING_FEE if shipping_fee is None else shipping_fee

    def get_subtotal(self) -> float:
        return self.cart.get_cart_total()

    def get_shipping(self) -> float:
        return self.shipping_fee if not self.cart.is_empty() else 0.0

    def get_total(self) -> float:
        return self.get_subtotal() + self.get_shipping()

    async def checkout(self, customer_info: CustomerInfoDTO | dict) -> OrderSubmissionDTO:
        """
        Validate the customer form, submit the cart and empty it.

        The cart is cleared only after the API accepted the order; if the
        submission fails the error propagates and the cart is left as it was.

        Raises:
            InvalidCustomerInfoException: Form data missing or invalid
            EmptyCartException: Nothing to order
        """
        if not isinstance(customer_info, CustomerInfoDTO):
            customer_info = CustomerInfoDTO.from_form(customer_info)

        if self.cart.is_empty():
            raise EmptyCartException(self.cart.state.session_id)

        items = self.cart.items
        total = sum(item.line_total for item in items)
        result = await self.api.submit_order(customer_info, items)
        if result.success:
            await self.cart.clear_cart()
            logger.info(f"✅ Checkout complete for session {self.cart.state.session_id}: "
                        f"order {result.order_id}, {len(items)} line(s), total {total:.2f}")
        else:
            logger.warning(f"Order submission rejected for session {self.cart.state.session_id}")
        return result

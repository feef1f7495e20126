import logging

from api.mock_remote import MockRemoteAPI
from enums.order_status import OrderStatus
from exceptions.order import InvalidOrderStatusException
from models.order import OrderDTO
from models.product import ProductDTO
from models.user import UserDTO
from services.catalog import CatalogStore

logger = logging.getLogger(__name__)


class AdminService:
    """
    Admin dashboard operations (product, order and customer management).

    Product writes go to the API and are followed by an explicit catalog
    refresh, so the session catalog reflects them. Carts are not touched:
    their lines keep the snapshot taken at add time.
    """

    def __init__(self, api: MockRemoteAPI, catalog: CatalogStore):
        self.api = api
        self.catalog = catalog

    async def create_product(self, product: ProductDTO | dict) -> ProductDTO:
        created = await self.api.create_product(product)
        await self.catalog.refresh()
        return created

    async def update_product(self, product_id: int, updates: dict) -> ProductDTO | None:
        updated = await self.api.update_product(product_id, updates)
        if updated is not None:
            await self.catalog.refresh()
        return updated

    async def delete_product(self, product_id: int) -> bool:
        deleted = await self.api.delete_product(product_id)
        if deleted:
            await self.catalog.refresh()
        return deleted

    async def get_orders(self) -> list[OrderDTO]:
        return await self.api.get_orders()

    async def update_order_status(self, order_id: str, status: OrderStatus | str) -> OrderDTO | None:
        """
        Raises:
            InvalidOrderStatusException: status is not one of OrderStatus
        """
        if not isinstance(status, OrderStatus):
            try:
                status = OrderStatus.from_string(status)
            except ValueError as e:
                raise InvalidOrderStatusException(order_id, str(status)) from e
        return await self.api.update_order_status(order_id, status)

    async def delete_order(self, order_id: str) -> bool:
        return await self.api.delete_order(order_id)

    async def get_users(self) -> list[UserDTO]:
        return await self.api.get_users()

    async def delete_user(self, user_id: str) -> bool:
        return await self.api.delete_user(user_id)

    async def get_dashboard_stats(self) -> dict:
        """
        Returns:
            dict with keys:
            - product_count: int
            - order_count: int
            - pending_orders: int
            - revenue: float - sum of totals of all orders that are not cancelled
        """
        orders = await self.api.get_orders()
        products = await self.api.get_products()
        return {
            "product_count": len(products),
            "order_count": len(orders),
            "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING),
            "revenue": sum(o.total for o in orders if o.status != OrderStatus.CANCELLED),
        }

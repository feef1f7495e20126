"""
In-process stand-in for the storefront backend.

Every call sleeps for a simulated network latency before answering so that
loading states get exercised; the latency is scaled by
config.MOCK_API_LATENCY_FACTOR (0 disables it). Admin writes mutate
process-local lists, nothing is written to disk.

All returned DTOs are copies: mutating them never changes what the API holds.
"""

import asyncio
import logging
import random
from datetime import datetime, timedelta
from json import load

import config
from enums.order_status import OrderStatus
from exceptions.catalog import CatalogLoadException
from models.cartItem import CartItemDTO
from models.catalog import CatalogDataDTO
from models.category import CategoryDTO
from models.order import CustomerInfoDTO, OrderDTO, OrderSubmissionDTO
from models.product import ProductDTO, UNCATEGORIZED
from models.user import UserDTO

logger = logging.getLogger(__name__)

# Base latency per call in milliseconds (before latency_factor is applied)
READ_DELAY_MS = 300
LOOKUP_DELAY_MS = 200
WRITE_DELAY_MS = 500
ADMIN_LIST_DELAY_MS = 400
SUBMIT_ORDER_DELAY_MS = 1000


def load_catalog_data(path: str | None = None) -> CatalogDataDTO:
    """
    Read the seed catalog (products, categories, users) from a JSON file.

    Raises:
        CatalogLoadException: If the file is missing, not JSON or does not validate
    """
    path = path or config.CATALOG_DATA_PATH
    try:
        with open(path, 'r', encoding='utf-8') as file:
            data = load(file)
        catalog_data = CatalogDataDTO.model_validate(data)
    except OSError as e:
        raise CatalogLoadException(path, str(e)) from e
    except ValueError as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        raise CatalogLoadException(path, str(e).splitlines()[0]) from e

    logger.info(f"📦 Catalog seed loaded: {len(catalog_data.products)} products, "
                f"{len(catalog_data.categories)} categories, {len(catalog_data.users)} users")
    return catalog_data


class MockRemoteAPI:

    def __init__(self,
                 catalog_data: CatalogDataDTO | None = None,
                 latency_factor: float | None = None,
                 rng: random.Random | None = None):
        """
        Args:
            catalog_data: Seed data; read from config.CATALOG_DATA_PATH when omitted
            latency_factor: Multiplier for simulated latency (default: config value)
            rng: Random source for order ids (inject a seeded one in tests)
        """
        if catalog_data is None:
            catalog_data = load_catalog_data()
        self.latency_factor = config.MOCK_API_LATENCY_FACTOR if latency_factor is None else latency_factor
        self._rng = rng or random.Random()

        self._products: list[ProductDTO] = [p.model_copy(deep=True) for p in catalog_data.products]
        self._categories: list[CategoryDTO] = [c.model_copy(deep=True) for c in catalog_data.categories]
        self._users: list[UserDTO] = [u.model_copy(deep=True) for u in catalog_data.users]
        self._orders: list[OrderDTO] = self._seed_orders()

    async def _delay(self, ms: int) -> None:
        if self.latency_factor > 0:
            await asyncio.sleep(ms * self.latency_factor / 1000)

    def _category_name(self, category_id: int) -> str:
        for category in self._categories:
            if category.id == category_id:
                return category.name
        return UNCATEGORIZED

    def _present(self, product: ProductDTO) -> ProductDTO:
        return product.model_copy(
            update={"category_name": self._category_name(product.category)},
            deep=True
        )

    def _seed_orders(self) -> list[OrderDTO]:
        if len(self._products) < 3:
            return []

        first, second, third = (self._present(p) for p in self._products[:3])
        return [
            OrderDTO(
                id="ORD001",
                user_id="user123",
                items=[CartItemDTO(product=first, quantity=1), CartItemDTO(product=second, quantity=2)],
                total=first.price * 1 + second.price * 2,
                status=OrderStatus.PROCESSING,
                created_at=datetime.now(),
                shipping_address="Rua Exemplo, 123, Cidade, Estado"
            ),
            OrderDTO(
                id="ORD002",
                user_id="admin456",
                items=[CartItemDTO(product=third, quantity=1)],
                total=third.price,
                status=OrderStatus.PENDING,
                created_at=datetime.now() - timedelta(days=1),
                shipping_address="Av. Teste, 456, Outra Cidade, Outro Estado"
            ),
        ]

    # Products

    async def get_products(self) -> list[ProductDTO]:
        await self._delay(READ_DELAY_MS)
        return [self._present(p) for p in self._products]

    async def get_product_by_id(self, product_id: int) -> ProductDTO | None:
        await self._delay(LOOKUP_DELAY_MS)
        for product in self._products:
            if product.id == product_id:
                return self._present(product)
        return None

    async def get_products_by_category(self, category_id: int) -> list[ProductDTO]:
        await self._delay(READ_DELAY_MS)
        return [self._present(p) for p in self._products if p.category == category_id]

    async def get_featured_products(self) -> list[ProductDTO]:
        await self._delay(READ_DELAY_MS)
        return [p for p in await self.get_products() if p.featured]

    async def get_on_sale_products(self) -> list[ProductDTO]:
        await self._delay(READ_DELAY_MS)
        return [p for p in await self.get_products() if p.on_sale]

    async def get_best_seller_products(self) -> list[ProductDTO]:
        await self._delay(READ_DELAY_MS)
        return [p for p in await self.get_products() if p.best_seller]

    # Categories

    async def get_categories(self) -> list[CategoryDTO]:
        await self._delay(READ_DELAY_MS)
        return [c.model_copy(deep=True) for c in self._categories]

    async def get_category_by_id(self, category_id: int) -> CategoryDTO | None:
        await self._delay(LOOKUP_DELAY_MS)
        for category in self._categories:
            if category.id == category_id:
                return category.model_copy(deep=True)
        return None

    async def get_featured_categories(self) -> list[CategoryDTO]:
        await self._delay(READ_DELAY_MS)
        return [c.model_copy(deep=True) for c in self._categories if c.featured]

    # Admin: products

    async def create_product(self, product: ProductDTO | dict) -> ProductDTO:
        """
        Add a product. Any id in the input is ignored; the new id is
        max(existing ids) + 1, or 1 for an empty catalog.
        """
        await self._delay(WRITE_DELAY_MS)
        data = product.model_dump() if isinstance(product, ProductDTO) else _normalize_keys(product)
        new_id = max((p.id for p in self._products), default=0) + 1

        data["id"] = new_id
        data["category_name"] = None
        # Unrated products start at 4.0 stars
        data["rating"] = data.get("rating") or 4.0
        data["review_count"] = data.get("review_count") or 0

        new_product = ProductDTO.model_validate(data)
        self._products.append(new_product)
        logger.info(f"Product created: id={new_id} name='{new_product.name}'")
        return self._present(new_product)

    async def update_product(self, product_id: int, updates: dict) -> ProductDTO | None:
        """Apply a partial update. The id cannot change. Returns None if the id does not exist."""
        await self._delay(WRITE_DELAY_MS)
        for index, product in enumerate(self._products):
            if product.id == product_id:
                data = {**product.model_dump(), **_normalize_keys(updates), "id": product_id}
                data["category_name"] = None
                updated = ProductDTO.model_validate(data)
                self._products[index] = updated
                logger.info(f"Product updated: id={product_id} fields={sorted(_normalize_keys(updates))}")
                return self._present(updated)
        return None

    async def delete_product(self, product_id: int) -> bool:
        await self._delay(WRITE_DELAY_MS)
        initial_length = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        deleted = len(self._products) < initial_length
        if deleted:
            logger.info(f"Product deleted: id={product_id}")
        return deleted

    # Orders

    async def get_orders(self) -> list[OrderDTO]:
        """All orders, newest first."""
        await self._delay(ADMIN_LIST_DELAY_MS)
        orders = sorted(self._orders, key=lambda o: o.created_at, reverse=True)
        return [o.model_copy(deep=True) for o in orders]

    async def update_order_status(self, order_id: str, status: OrderStatus) -> OrderDTO | None:
        await self._delay(WRITE_DELAY_MS)
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                self._orders[index] = order.model_copy(update={"status": status})
                logger.info(f"Order {order_id} status: {order.status.value} → {status.value}")
                return self._orders[index].model_copy(deep=True)
        return None

    async def delete_order(self, order_id: str) -> bool:
        await self._delay(WRITE_DELAY_MS)
        initial_length = len(self._orders)
        self._orders = [o for o in self._orders if o.id != order_id]
        return len(self._orders) < initial_length

    async def submit_order(self, customer_info: CustomerInfoDTO,
                           cart_items: list[CartItemDTO]) -> OrderSubmissionDTO:
        """
        Record a checkout. Always succeeds in the mock; a real backend would
        validate stock and prices here and could fail.
        """
        await self._delay(SUBMIT_ORDER_DELAY_MS)
        order_id = self._new_order_id()
        items = [item.model_copy(deep=True) for item in cart_items]

        self._orders.append(OrderDTO(
            id=order_id,
            user_id="guest",
            items=items,
            total=sum(item.line_total for item in items),
            status=OrderStatus.PENDING,
            created_at=datetime.now(),
            shipping_address=customer_info.address
        ))
        logger.info(f"Order submitted: {order_id} ({len(items)} line(s))")
        return OrderSubmissionDTO(success=True, order_id=order_id)

    def _new_order_id(self) -> str:
        existing = {o.id for o in self._orders}
        while True:
            order_id = f"ORD-{self._rng.randrange(1_000_000):06d}"
            if order_id not in existing:
                return order_id

    # Users

    async def get_users(self) -> list[UserDTO]:
        await self._delay(ADMIN_LIST_DELAY_MS)
        return [u.model_copy(deep=True) for u in self._users]

    async def get_user_by_id(self, user_id: str) -> UserDTO | None:
        await self._delay(READ_DELAY_MS)
        for user in self._users:
            if user.id == user_id:
                return user.model_copy(deep=True)
        return None

    async def delete_user(self, user_id: str) -> bool:
        await self._delay(WRITE_DELAY_MS)
        initial_length = len(self._users)
        self._users = [u for u in self._users if u.id != user_id]
        return len(self._users) < initial_length


def _normalize_keys(data: dict) -> dict:
    """Map camelCase wire keys (oldPrice, onSale, ...) to ProductDTO field names."""
    aliases = {field.alias: name for name, field in ProductDTO.model_fields.items() if field.alias}
    return {aliases.get(key, key): value for key, value in data.items()}

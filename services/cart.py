import asyncio
import logging

import config
from exceptions.cart import InvalidQuantityException, OutOfStockException
from models.cartItem import CartItemDTO
from models.product import ProductDTO
from repositories.session_state import SessionStateRepository

logger = logging.getLogger(__name__)


class CartStore:
    """
    Shopping cart of one browsing session.

    Invariants:
    - at most one line per product id (adding again increments the quantity)
    - every line has quantity >= 1
    - with enforce_stock_limit, quantity <= the stock of the line's product snapshot

    Every mutation is written through SessionStateRepository before it returns.
    Mutations are serialized by a lock, so two concurrent add_to_cart calls for
    the same product both count.
    """

    def __init__(self, state: SessionStateRepository, enforce_stock_limit: bool | None = None):
        self.state = state
        self.enforce_stock_limit = (config.CART_ENFORCE_STOCK_LIMIT
                                    if enforce_stock_limit is None else enforce_stock_limit)
        self._items: list[CartItemDTO] = []
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Restore the persisted cart (a missing or corrupt record gives an empty cart)."""
        async with self._lock:
            self._items = await self.state.load_cart()
        logger.debug(f"Cart restored for session {self.state.session_id}: {len(self._items)} line(s)")

    @property
    def items(self) -> list[CartItemDTO]:
        return [item.model_copy() for item in self._items]

    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, product_id: int) -> CartItemDTO | None:
        index = self._index_of(product_id)
        return None if index is None else self._items[index].model_copy()

    async def add_to_cart(self, product: ProductDTO, quantity: int = 1) -> CartItemDTO:
        """
        Add a product or increase the quantity of its existing line.

        The product is stored as a snapshot on first add; later adds only
        change the quantity. With enforce_stock_limit the resulting quantity is
        clamped to the snapshot's stock.

        Raises:
            InvalidQuantityException: quantity < 1
            OutOfStockException: stock limit enforced and the product has no stock
        """
        if quantity < 1:
            raise InvalidQuantityException(product.id, quantity)

        async with self._lock:
            index = self._index_of(product.id)
            if index is not None:
                existing = self._items[index]
                new_quantity = self._bounded(existing.product, existing.quantity + quantity)
                line = existing.model_copy(update={"quantity": new_quantity})
                self._items[index] = line
            else:
                line = CartItemDTO(product=product, quantity=self._bounded(product, quantity))
                self._items.append(line)

            await self._persist()

        logger.debug(f"Cart {self.state.session_id}: product {product.id} → qty {line.quantity}")
        return line.model_copy()

    async def remove_from_cart(self, product_id: int) -> None:
        async with self._lock:
            await self._remove(product_id)

    async def update_quantity(self, product_id: int, quantity: int) -> CartItemDTO | None:
        """
        Set the quantity of a line. quantity <= 0 removes the line, exactly like
        remove_from_cart. Unknown product ids are ignored.

        Returns:
            The updated line, or None if the line was removed or never existed
        """
        async with self._lock:
            if quantity <= 0:
                await self._remove(product_id)
                return None

            index = self._index_of(product_id)
            if index is None:
                return None

            line = self._items[index]
            if self.enforce_stock_limit and quantity > line.product.stock:
                logger.warning(f"Cart {self.state.session_id}: quantity {quantity} for product "
                               f"{product_id} clamped to stock {line.product.stock}")
                quantity = line.product.stock
                # Restored line whose snapshot has no stock left
                if quantity <= 0:
                    await self._remove(product_id)
                    return None

            line = line.model_copy(update={"quantity": quantity})
            self._items[index] = line
            await self._persist()
            return line.model_copy()

    async def clear_cart(self) -> None:
        async with self._lock:
            self._items = []
            await self._persist()

    def get_cart_total(self) -> float:
        return sum(item.product.price * item.quantity for item in self._items)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_line_count(self) -> int:
        return len(self._items)

    def _index_of(self, product_id: int) -> int | None:
        for index, item in enumerate(self._items):
            if item.product.id == product_id:
                return index
        return None

    def _bounded(self, product: ProductDTO, quantity: int) -> int:
        if not self.enforce_stock_limit:
            return quantity
        if product.stock <= 0:
            raise OutOfStockException(product.id, product.name)
        if quantity > product.stock:
            logger.warning(f"Cart {self.state.session_id}: quantity {quantity} for product "
                           f"{product.id} clamped to stock {product.stock}")
            return product.stock
        return quantity

    async def _remove(self, product_id: int) -> None:
        index = self._index_of(product_id)
        if index is None:
            return
        del self._items[index]
        await self._persist()

    async def _persist(self) -> None:
        await self.state.save_cart(self._items)

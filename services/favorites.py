import asyncio
import logging

from models.product import ProductDTO
from repositories.session_state import SessionStateRepository
from services.catalog import CatalogStore

logger = logging.getLogger(__name__)


class FavoritesStore:
    """
    Favorited products of one browsing session.

    Only product ids are persisted. On initialize() the ids are resolved
    against the catalog again, so favorites show current prices and stock
    (unlike cart lines, which keep the snapshot taken at add time).

    Two-phase start:
    1. rehydrate: read ids, resolve each one, drop ids whose product is gone
    2. enable persistence: from here on every change is written through

    Nothing is written before phase 1 completes, so a slow or failed load can
    never overwrite the stored ids with an empty list. Changes made while the
    load is in flight are kept in memory and merged into the result.
    """

    def __init__(self, state: SessionStateRepository, catalog: CatalogStore):
        self.state = state
        self.catalog = catalog
        self._favorites: dict[int, ProductDTO] = {}
        self._removed_while_loading: set[int] = set()
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def favorites(self) -> list[ProductDTO]:
        return list(self._favorites.values())

    @property
    def favorite_ids(self) -> list[int]:
        return list(self._favorites)

    async def initialize(self) -> None:
        """
        Rehydrate persisted favorites, then start persisting changes.

        If resolving an id fails (API error) the error propagates and the store
        stays uninitialized: it keeps working in memory, writes nothing, and
        initialize() can be called again.
        """
        if self._initialized:
            return

        stored_ids = await self.state.load_favorite_ids()
        resolved: dict[int, ProductDTO] = {}
        for product_id in stored_ids:
            product = await self.catalog.resolve_product(product_id)
            if product is None:
                logger.debug(f"Favorites {self.state.session_id}: dropping unknown product {product_id}")
                continue
            resolved[product.id] = product
        dropped = len(set(stored_ids)) - len(resolved)

        async with self._lock:
            # An overlapping initialize() finished first; its result stands
            if self._initialized:
                return
            for product_id in self._removed_while_loading:
                resolved.pop(product_id, None)
            for product_id, product in self._favorites.items():
                resolved.setdefault(product_id, product)

            self._favorites = resolved
            self._removed_while_loading.clear()
            self._initialized = True
            await self._persist()

        logger.info(f"Favorites restored for session {self.state.session_id}: "
                    f"{len(self._favorites)} product(s), {dropped} dropped")

    async def add_to_favorites(self, product: ProductDTO) -> None:
        async with self._lock:
            if product.id in self._favorites:
                return
            self._favorites[product.id] = product
            self._removed_while_loading.discard(product.id)
            await self._persist()

    async def remove_from_favorites(self, product_id: int) -> None:
        async with self._lock:
            if not self._initialized:
                self._removed_while_loading.add(product_id)
            if self._favorites.pop(product_id, None) is None:
                return
            await self._persist()

    def is_favorite(self, product_id: int) -> bool:
        return product_id in self._favorites

    async def toggle_favorite(self, product: ProductDTO) -> bool:
        """
        Remove the product if it is a favorite, add it otherwise.

        Returns:
            True if the product is a favorite afterwards
        """
        async with self._lock:
            if product.id in self._favorites:
                del self._favorites[product.id]
                if not self._initialized:
                    self._removed_while_loading.add(product.id)
                is_favorite = False
            else:
                self._favorites[product.id] = product
                self._removed_while_loading.discard(product.id)
                is_favorite = True
            await self._persist()
        return is_favorite

    async def _persist(self) -> None:
        if not self._initialized:
            return
        await self.state.save_favorite_ids(list(self._favorites))

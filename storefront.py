"""
Storefront session: owns the stores of one browsing session.

Data flow: MockRemoteAPI -> CatalogStore -> {CartStore, FavoritesStore}.
Nothing here is a module-level singleton; build one Storefront per session.
"""

import logging

from api.mock_remote import MockRemoteAPI
from repositories.session_state import SessionStateRepository
from repositories.storage import KeyValueStorage, create_storage
from services.admin import AdminService
from services.cart import CartStore
from services.catalog import CatalogStore
from services.checkout import CheckoutService
from services.favorites import FavoritesStore

logger = logging.getLogger(__name__)


class Storefront:

    def __init__(self, api: MockRemoteAPI, storage: KeyValueStorage, session_id: str,
                 enforce_stock_limit: bool | None = None):
        self.api = api
        self.storage = storage
        self.session_id = session_id
        self.state = SessionStateRepository(storage, session_id)
        self.catalog = CatalogStore(api)
        self.cart = CartStore(self.state, enforce_stock_limit=enforce_stock_limit)
        self.favorites = FavoritesStore(self.state, self.catalog)
        self.checkout = CheckoutService(self.cart, api)
        self.admin = AdminService(api, self.catalog)

    async def start(self) -> None:
        """
        Load the catalog, restore the cart, then rehydrate favorites.

        Catalog errors propagate; the session is unusable without products.
        """
        logger.info(f"Starting storefront session {self.session_id}")
        await self.catalog.load()
        await self.cart.initialize()
        await self.favorites.initialize()

    async def close(self) -> None:
        await self.storage.close()

    async def __aenter__(self) -> 'Storefront':
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def create_storefront(session_id: str,
                      api: MockRemoteAPI | None = None,
                      storage: KeyValueStorage | None = None) -> Storefront:
    """Build a storefront with the configured storage backend and a fresh mock API."""
    return Storefront(
        api=api or MockRemoteAPI(),
        storage=storage or create_storage(),
        session_id=session_id
    )

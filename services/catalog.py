import asyncio
import logging

from api.mock_remote import MockRemoteAPI
from models.category import CategoryDTO
from models.product import ProductDTO, UNCATEGORIZED

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Products and categories of one storefront session.

    Loaded once from the API; every view returns a fresh list in the order
    the API delivered the products. Cart and favorites read from it but never
    mutate it. Only refresh() (after an admin write) replaces its content.
    """

    def __init__(self, api: MockRemoteAPI):
        self.api = api
        self._products: list[ProductDTO] = []
        self._categories: list[CategoryDTO] = []
        self._products_by_id: dict[int, ProductDTO] = {}
        self._loading = False
        self._loaded = False
        self._fetch_lock = asyncio.Lock()

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def products(self) -> list[ProductDTO]:
        return list(self._products)

    @property
    def categories(self) -> list[CategoryDTO]:
        return list(self._categories)

    async def load(self) -> None:
        """
        Fetch products and categories. No-op once the catalog has loaded.

        On failure the catalog stays empty and the API error propagates to the
        caller; there is no retry. Concurrent callers wait for the fetch in
        flight instead of starting their own.
        """
        async with self._fetch_lock:
            if self._loaded:
                return
            await self._fetch()

    async def refresh(self) -> None:
        """Re-fetch unconditionally, e.g. after an admin created or edited a product."""
        async with self._fetch_lock:
            await self._fetch()

    async def _fetch(self) -> None:
        self._loading = True
        try:
            products = await self.api.get_products()
            categories = await self.api.get_categories()
        except Exception as e:
            logger.error(f"Catalog load failed: {e}")
            raise
        finally:
            self._loading = False

        self._products = products
        self._categories = categories
        self._products_by_id = {p.id: p for p in products}
        self._loaded = True
        logger.info(f"Catalog loaded: {len(products)} products, {len(categories)} categories")

    def get_product_by_id(self, product_id: int) -> ProductDTO | None:
        return self._products_by_id.get(product_id)

    async def resolve_product(self, product_id: int) -> ProductDTO | None:
        """
        Look up a product for favorites rehydration.

        Uses the loaded catalog when available, otherwise asks the API.
        """
        if self._loaded:
            return self.get_product_by_id(product_id)
        return await self.api.get_product_by_id(product_id)

    def get_products_by_category(self, category_id: int) -> list[ProductDTO]:
        return [p for p in self._products if p.category == category_id]

    def get_products_by_brand(self, brand: str) -> list[ProductDTO]:
        brand = brand.lower()
        return [p for p in self._products if p.brand.lower() == brand]

    def get_featured_products(self) -> list[ProductDTO]:
        return [p for p in self._products if p.featured]

    def get_best_sellers(self) -> list[ProductDTO]:
        return [p for p in self._products if p.best_seller]

    def get_on_sale_products(self) -> list[ProductDTO]:
        return [p for p in self._products if p.on_sale]

    def get_all_brands(self) -> list[str]:
        return sorted({p.brand for p in self._products})

    def get_category_by_id(self, category_id: int) -> CategoryDTO | None:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def get_featured_categories(self) -> list[CategoryDTO]:
        return [c for c in self._categories if c.featured]

    def search_products(self, query: str) -> list[ProductDTO]:
        """
        Case-insensitive substring search over name, description, brand and
        category name.

        An empty or whitespace-only query matches nothing (not everything).
        """
        query = (query or "").strip().lower()
        if not query:
            return []

        return [
            p for p in self._products
            if query in p.name.lower()
            or query in p.description.lower()
            or query in p.brand.lower()
            or query in self._category_name(p).lower()
        ]

    def _category_name(self, product: ProductDTO) -> str:
        if product.category_name:
            return product.category_name
        category = self.get_category_by_id(product.category)
        return category.name if category else UNCATEGORIZED

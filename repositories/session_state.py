import json
import logging

from pydantic import TypeAdapter, ValidationError

import config
from models.cartItem import CartItemDTO
from repositories.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_cart_adapter = TypeAdapter(list[CartItemDTO])
_ids_adapter = TypeAdapter(list[int])


class SessionStateRepository:
    """
    Persists the cart and the favorite ids of one browsing session.

    Two independent records per session:
    - cart: JSON array of {"product": {...}, "quantity": n} (full product snapshots)
    - favorites: JSON array of product ids

    Storage is best-effort: a missing record reads as empty, a corrupt record
    is logged, deleted and read as empty. Neither case raises.
    """

    def __init__(self, storage: KeyValueStorage, session_id: str, namespace: str | None = None):
        self.storage = storage
        self.session_id = session_id
        self.namespace = namespace or config.STORAGE_NAMESPACE

    @property
    def cart_key(self) -> str:
        return f"{self.namespace}:{self.session_id}:{config.CART_STORAGE_KEY}"

    @property
    def favorites_key(self) -> str:
        return f"{self.namespace}:{self.session_id}:{config.FAVORITES_STORAGE_KEY}"

    async def save_cart(self, items: list[CartItemDTO]) -> None:
        payload = json.dumps([item.to_wire() for item in items], ensure_ascii=False)
        await self.storage.set(self.cart_key, payload)

    async def load_cart(self) -> list[CartItemDTO]:
        return await self._load(self.cart_key, _cart_adapter)

    async def save_favorite_ids(self, ids: list[int]) -> None:
        await self.storage.set(self.favorites_key, json.dumps(list(ids)))

    async def load_favorite_ids(self) -> list[int]:
        return await self._load(self.favorites_key, _ids_adapter)

    async def clear(self) -> None:
        await self.storage.delete(self.cart_key)
        await self.storage.delete(self.favorites_key)

    async def _load(self, key: str, adapter: TypeAdapter) -> list:
        try:
            raw = await self.storage.get(key)
        except UnicodeDecodeError as e:
            # Redis client decodes responses; a non-UTF-8 record fails in get()
            logger.warning(f"Discarding undecodable session record {key}: {e.reason}")
            await self.storage.delete(key)
            return []
        if raw is None:
            return []

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            # Covers malformed JSON as well as wrong shapes / invalid values
            logger.warning(f"Discarding corrupt session record {key}: {e.error_count()} error(s)")
            await self.storage.delete(key)
            return []

"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import os
import random
import sys

# Must be set before config is imported anywhere
os.environ.setdefault("RUNTIME_ENVIRONMENT", "TEST")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_MASK_SECRETS", "true")

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis

from api.mock_remote import MockRemoteAPI
from models.catalog import CatalogDataDTO
from models.category import CategoryDTO
from models.product import ProductDTO
from models.user import UserDTO
from repositories.session_state import SessionStateRepository
from repositories.storage import InMemoryKeyValueStorage, RedisKeyValueStorage
from services.cart import CartStore
from services.catalog import CatalogStore
from services.favorites import FavoritesStore

SESSION_ID = "test-session"


# ============================================================================
# Catalog Data
# ============================================================================

def make_product(**overrides) -> ProductDTO:
    """Product with sensible defaults; override any field by name."""
    data = {
        "id": 100,
        "name": "Produto Teste",
        "description": "Descrição do produto",
        "brand": "Marca",
        "price": 50.0,
        "category": 1,
        "images": ["/images/test.jpg"],
        "stock": 10,
        "rating": 4.0,
        "review_count": 0,
    }
    data.update(overrides)
    return ProductDTO.model_validate(data)


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def catalog_data() -> CatalogDataDTO:
    return CatalogDataDTO(
        categories=[
            CategoryDTO(id=1, name="Calçados", featured=True),
            CategoryDTO(id=2, name="Roupas", featured=True),
            CategoryDTO(id=3, name="Acessórios", featured=False),
        ],
        products=[
            make_product(id=1, name="Tênis Runner", description="Amortecimento responsivo",
                         brand="Nike", price=500.0, old_price=600.0, category=1,
                         featured=True, on_sale=True, stock=10),
            make_product(id=2, name="Camiseta Dry", description="Secagem rápida",
                         brand="adidas", price=120.0, category=2, best_seller=True, stock=20),
            make_product(id=3, name="Mochila Urban", description="Impermeável 20L",
                         brand="Puma", price=200.0, category=3, stock=0),
            make_product(id=10, name="Tênis X", description="Cano baixo em couro",
                         brand="Adidas", price=100.0, category=1, stock=3),
            make_product(id=4, name="Meia Esportiva", description="Cano alto para corrida",
                         brand="Nike", price=30.0, category=3, best_seller=True, on_sale=True, stock=50),
        ],
        users=[
            UserDTO(id="admin456", name="Admin", email="admin@loja.com", role="admin"),
            UserDTO(id="user123", name="Maria", email="maria@exemplo.com"),
        ],
    )


@pytest.fixture
def api(catalog_data) -> MockRemoteAPI:
    """Mock API without simulated latency and with deterministic order ids."""
    return MockRemoteAPI(catalog_data=catalog_data, latency_factor=0, rng=random.Random(42))


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def memory_storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def redis_storage(redis_client) -> RedisKeyValueStorage:
    return RedisKeyValueStorage(redis_client)


@pytest.fixture
def state(memory_storage) -> SessionStateRepository:
    return SessionStateRepository(memory_storage, SESSION_ID)


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def catalog(api) -> CatalogStore:
    store = CatalogStore(api)
    await store.load()
    return store


@pytest_asyncio.fixture
async def cart(state) -> CartStore:
    store = CartStore(state, enforce_stock_limit=True)
    await store.initialize()
    return store


@pytest_asyncio.fixture
async def permissive_cart(state) -> CartStore:
    store = CartStore(state, enforce_stock_limit=False)
    await store.initialize()
    return store


@pytest_asyncio.fixture
async def favorites(state, catalog) -> FavoritesStore:
    store = FavoritesStore(state, catalog)
    await store.initialize()
    return store

"""
Unit Tests: MockRemoteAPI

Tests for api/mock_remote.py covering:
- product and category reads (category name enrichment, copies)
- admin product writes (id assignment, defaults, partial update, delete)
- seeded orders, order status changes, submission
- users
- seed file loading and simulated latency
"""

import json
import re

import pytest
from unittest.mock import AsyncMock, patch

from api.mock_remote import MockRemoteAPI, load_catalog_data
from enums.order_status import OrderStatus
from exceptions.catalog import CatalogLoadException
from models.cartItem import CartItemDTO
from models.catalog import CatalogDataDTO
from models.order import CustomerInfoDTO


@pytest.fixture
def customer():
    return CustomerInfoDTO(name="Maria Silva", email="maria@exemplo.com",
                           phone="(11) 98888-7777", address="Rua das Flores, 10")


class TestProductReads:

    @pytest.mark.asyncio
    async def test_get_products_in_seed_order(self, api):
        products = await api.get_products()
        assert [p.id for p in products] == [1, 2, 3, 10, 4]

    @pytest.mark.asyncio
    async def test_products_enriched_with_category_name(self, api):
        product = await api.get_product_by_id(3)
        assert product.category_name == "Acessórios"

    @pytest.mark.asyncio
    async def test_unknown_category_falls_back_to_uncategorized(self, api):
        created = await api.create_product({"name": "Avulso", "price": 1.0, "category": 77})
        assert created.category_name == "Uncategorized"

    @pytest.mark.asyncio
    async def test_get_product_by_id_missing(self, api):
        assert await api.get_product_by_id(999) is None

    @pytest.mark.asyncio
    async def test_filtered_reads(self, api):
        assert [p.id for p in await api.get_products_by_category(3)] == [3, 4]
        assert [p.id for p in await api.get_featured_products()] == [1]
        assert [p.id for p in await api.get_on_sale_products()] == [1, 4]
        assert [p.id for p in await api.get_best_seller_products()] == [2, 4]

    @pytest.mark.asyncio
    async def test_categories(self, api):
        assert [c.name for c in await api.get_categories()] == ["Calçados", "Roupas", "Acessórios"]
        assert (await api.get_category_by_id(2)).name == "Roupas"
        assert await api.get_category_by_id(9) is None
        assert [c.id for c in await api.get_featured_categories()] == [1, 2]

    @pytest.mark.asyncio
    async def test_seed_data_is_copied(self, catalog_data):
        api = MockRemoteAPI(catalog_data=catalog_data, latency_factor=0)
        catalog_data.products.clear()

        assert len(await api.get_products()) == 5


class TestProductWrites:

    @pytest.mark.asyncio
    async def test_create_assigns_next_id_and_defaults(self, api):
        created = await api.create_product({"id": 1, "name": "Boné", "price": 45.0, "category": 3,
                                            "onSale": True, "oldPrice": 60.0})

        assert created.id == 11
        assert created.rating == 4.0
        assert created.review_count == 0
        assert created.on_sale is True
        assert created.old_price == 60.0
        assert (await api.get_product_by_id(11)).name == "Boné"

    @pytest.mark.asyncio
    async def test_create_keeps_given_rating(self, api, product_factory):
        created = await api.create_product(product_factory(rating=3.5, review_count=12))

        assert created.rating == 3.5
        assert created.review_count == 12

    @pytest.mark.asyncio
    async def test_create_in_empty_catalog_starts_at_one(self):
        api = MockRemoteAPI(catalog_data=CatalogDataDTO(), latency_factor=0)

        created = await api.create_product({"name": "Primeiro", "price": 1.0, "category": 1})

        assert created.id == 1

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, api):
        updated = await api.update_product(2, {"price": 99.9, "stock": 5, "bestSeller": False})

        assert updated.price == 99.9
        assert updated.stock == 5
        assert updated.best_seller is False
        assert updated.name == "Camiseta Dry"

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, api):
        updated = await api.update_product(2, {"id": 500})

        assert updated.id == 2
        assert await api.get_product_by_id(500) is None

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, api):
        assert await api.update_product(999, {"price": 1.0}) is None

    @pytest.mark.asyncio
    async def test_delete_product(self, api):
        assert await api.delete_product(3) is True
        assert await api.get_product_by_id(3) is None
        assert await api.delete_product(3) is False


class TestOrders:

    @pytest.mark.asyncio
    async def test_seeded_orders_newest_first(self, api):
        orders = await api.get_orders()

        assert [o.id for o in orders] == ["ORD001", "ORD002"]
        assert orders[0].status == OrderStatus.PROCESSING
        assert orders[0].user_id == "user123"
        assert orders[0].total == 500.0 * 1 + 120.0 * 2
        assert orders[1].status == OrderStatus.PENDING
        assert orders[1].user_id == "admin456"

    @pytest.mark.asyncio
    async def test_no_seeded_orders_for_small_catalog(self):
        api = MockRemoteAPI(catalog_data=CatalogDataDTO(), latency_factor=0)
        assert await api.get_orders() == []

    @pytest.mark.asyncio
    async def test_submit_order(self, api, customer, product_factory):
        items = [CartItemDTO(product=product_factory(id=10, price=100.0), quantity=3)]

        result = await api.submit_order(customer, items)

        assert result.success is True
        assert re.fullmatch(r"ORD-\d{6}", result.order_id)

        newest = (await api.get_orders())[0]
        assert newest.id == result.order_id
        assert newest.user_id == "guest"
        assert newest.status == OrderStatus.PENDING
        assert newest.total == 300.0
        assert newest.shipping_address == "Rua das Flores, 10"

    @pytest.mark.asyncio
    async def test_order_ids_unique(self, api, customer, product_factory):
        items = [CartItemDTO(product=product_factory(), quantity=1)]

        ids = {(await api.submit_order(customer, items)).order_id for _ in range(20)}

        assert len(ids) == 20

    @pytest.mark.asyncio
    async def test_update_order_status(self, api):
        updated = await api.update_order_status("ORD002", OrderStatus.SHIPPED)

        assert updated.status == OrderStatus.SHIPPED
        orders = {o.id: o for o in await api.get_orders()}
        assert orders["ORD002"].status == OrderStatus.SHIPPED

    @pytest.mark.asyncio
    async def test_update_status_of_missing_order(self, api):
        assert await api.update_order_status("NOPE", OrderStatus.SHIPPED) is None

    @pytest.mark.asyncio
    async def test_delete_order(self, api):
        assert await api.delete_order("ORD001") is True
        assert [o.id for o in await api.get_orders()] == ["ORD002"]
        assert await api.delete_order("ORD001") is False

    @pytest.mark.asyncio
    async def test_returned_orders_are_copies(self, api):
        orders = await api.get_orders()
        orders[0].items.clear()

        assert len((await api.get_orders())[0].items) == 2


class TestUsers:

    @pytest.mark.asyncio
    async def test_get_users(self, api):
        assert [u.id for u in await api.get_users()] == ["admin456", "user123"]

    @pytest.mark.asyncio
    async def test_get_user_by_id(self, api):
        assert (await api.get_user_by_id("user123")).name == "Maria"
        assert await api.get_user_by_id("ghost") is None

    @pytest.mark.asyncio
    async def test_delete_user(self, api):
        assert await api.delete_user("user123") is True
        assert await api.get_user_by_id("user123") is None
        assert await api.delete_user("user123") is False


class TestLatency:

    @pytest.mark.asyncio
    async def test_latency_scaled_by_factor(self, catalog_data):
        api = MockRemoteAPI(catalog_data=catalog_data, latency_factor=0.5)

        with patch("api.mock_remote.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await api.get_products()
            await api.get_product_by_id(1)

        assert [call.args[0] for call in sleep.await_args_list] == [0.15, 0.1]

    @pytest.mark.asyncio
    async def test_zero_factor_never_sleeps(self, api):
        with patch("api.mock_remote.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await api.get_products()

        sleep.assert_not_awaited()


class TestLoadCatalogData:

    def test_bundled_seed_file(self):
        data = load_catalog_data()

        assert len(data.products) > 0
        assert len(data.categories) > 0
        assert {p.category for p in data.products} <= {c.id for c in data.categories}

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadException) as exc_info:
            load_catalog_data(str(tmp_path / "missing.json"))

        assert exc_info.value.source.endswith("missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{broken", encoding="utf-8")

        with pytest.raises(CatalogLoadException):
            load_catalog_data(str(path))

    def test_invalid_product(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"products": [{"id": 1, "name": "X", "price": -5, "category": 1}]}),
                        encoding="utf-8")

        with pytest.raises(CatalogLoadException):
            load_catalog_data(str(path))

    def test_camel_case_keys(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "categories": [{"id": 1, "name": "Calçados"}],
            "products": [{"id": 1, "name": "Tênis", "price": 10, "oldPrice": 12, "category": 1,
                          "onSale": True, "bestSeller": True, "reviewCount": 3}],
        }), encoding="utf-8")

        product = load_catalog_data(str(path)).products[0]

        assert product.old_price == 12
        assert product.on_sale and product.best_seller
        assert product.review_count == 3

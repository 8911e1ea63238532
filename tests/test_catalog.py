"""Tests for catalog models and CatalogClient"""
from decimal import Decimal

import httpx
import pytest

from storefront.catalog import CatalogClient, Category, Product, find_product
from storefront.errors import FetchError

PRODUCTS_URL = "https://catalog.test/products"
CATEGORIES_URL = "https://catalog.test/categories"


def make_client(handler, retries=3):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    catalog = CatalogClient(
        products_url=PRODUCTS_URL,
        categories_url=CATEGORIES_URL,
        retries=retries,
        backoff=0,
        http_client=http_client,
    )
    return catalog, http_client


class TestModels:

    def test_product_from_endpoint(self, sample_product_data):
        product = Product.model_validate(sample_product_data)

        assert product.id == 1
        assert product.price == Decimal("109.95")
        assert product.rate == 3.9
        assert product.category == "men's clothing"

    def test_flat_rate_wins(self):
        product = Product.model_validate({"id": 1, "price": 1, "rate": 4.0, "rating": {"rate": 2.0}})
        assert product.rate == 4.0

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            Product(id=1, price=-1)

    def test_product_is_immutable(self):
        product = Product(id=1, price=1)
        with pytest.raises(ValueError):
            product.price = Decimal("2")

    def test_category_from_endpoint(self):
        category = Category.model_validate({"id": "c1", "name": "Fruits", "icon": "apple.png"})

        assert category.id == "c1"
        assert category.name == "Fruits"

    def test_find_product_compares_ids_as_strings(self, products):
        assert find_product(products, "2").title == "Banana"
        assert find_product(products, 3).title == "Carrot"
        assert find_product(products, "99") is None


class TestCatalogClient:

    @pytest.mark.asyncio
    async def test_fetch_products(self, sample_product_data):
        def handler(request):
            assert str(request.url) == PRODUCTS_URL
            return httpx.Response(200, json=[sample_product_data])

        catalog, http_client = make_client(handler)
        async with http_client:
            products = await catalog.fetch_products()

        assert len(products) == 1
        assert products[0].title.startswith("Fjallraven")

    @pytest.mark.asyncio
    async def test_fetch_categories(self):
        def handler(request):
            return httpx.Response(200, json=[{"id": 1, "name": "Fruits"}, {"id": 2, "name": "Vegetables"}])

        catalog, http_client = make_client(handler)
        async with http_client:
            categories = await catalog.fetch_categories()

        assert [c.name for c in categories] == ["Fruits", "Vegetables"]

    @pytest.mark.asyncio
    async def test_status_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"error": "boom"})

        catalog, http_client = make_client(handler)
        async with http_client:
            with pytest.raises(FetchError) as exc_info:
                await catalog.fetch_products()

        assert exc_info.value.source == "products"
        assert "HTTP 500" in str(exc_info.value)
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error_is_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        catalog, http_client = make_client(handler, retries=3)
        async with http_client:
            with pytest.raises(FetchError) as exc_info:
                await catalog.fetch_categories()

        assert exc_info.value.source == "categories"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_transport_error_then_success(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, json=[{"id": 1, "name": "Fruits"}])

        catalog, http_client = make_client(handler)
        async with http_client:
            categories = await catalog.fetch_categories()

        assert len(categories) == 1
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_non_array_body(self):
        def handler(request):
            return httpx.Response(200, json={"products": []})

        catalog, http_client = make_client(handler)
        async with http_client:
            with pytest.raises(FetchError, match="expected a JSON array"):
                await catalog.fetch_products()

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        catalog, http_client = make_client(handler)
        async with http_client:
            with pytest.raises(FetchError, match="not JSON"):
                await catalog.fetch_products()

    @pytest.mark.asyncio
    async def test_invalid_product(self):
        def handler(request):
            return httpx.Response(200, json=[{"id": 1, "title": "No price"}])

        catalog, http_client = make_client(handler)
        async with http_client:
            with pytest.raises(FetchError, match="invalid product"):
                await catalog.fetch_products()

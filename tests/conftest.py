"""Pytest configuration and fixtures"""
import asyncio
from typing import List

import pytest
from unittest.mock import AsyncMock, Mock

from storefront.cart import CartManager, reset_cart_manager
from storefront.catalog import Category, Product
from storefront.db import MemoryStore, set_store
from storefront.errors import FetchError
from storefront.screen import reset_screen


class SlowStore(MemoryStore):
    """MemoryStore whose writes take the given delays, in call order."""

    def __init__(self, delays: List[float]):
        super().__init__()
        self.delays = list(delays)
        self.writes: List[str] = []

    async def set(self, key: str, value: str) -> bool:
        delay = self.delays.pop(0) if self.delays else 0
        await asyncio.sleep(delay)
        self.writes.append(value)
        self.data[key] = value
        return True


class FlakyStore(MemoryStore):
    """MemoryStore failing the writes whose 1-based numbers are listed."""

    def __init__(self, failing_writes=(1,)):
        super().__init__()
        self.failing_writes = set(failing_writes)
        self.attempts = 0

    async def set(self, key: str, value: str) -> bool:
        self.attempts += 1
        if self.attempts in self.failing_writes:
            raise ConnectionError("store unavailable")
        return await super().set(key, value)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Keep module singletons from leaking between tests"""
    set_store(None)
    reset_cart_manager()
    reset_screen()
    yield
    set_store(None)
    reset_cart_manager()
    reset_screen()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def cart_manager(memory_store):
    """CartManager on a memory store (not loaded yet)"""
    return CartManager(store=memory_store)


@pytest.fixture
def sample_product_data():
    """Product as returned by the products endpoint"""
    return {
        "id": 1,
        "title": "Fjallraven - Foldsack No. 1 Backpack",
        "price": 109.95,
        "description": "Your perfect pack for everyday use",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "rating": {"rate": 3.9, "count": 120},
    }


@pytest.fixture
def products():
    return [
        Product(id=1, title="Apple", category="Fruits", price=10, rate=4.5),
        Product(id=2, title="Banana", category="Fruits", price=20, rate=4.1),
        Product(id=3, title="Carrot", category="Vegetables", price="2.50", rate=3.8),
    ]


@pytest.fixture
def categories():
    return [
        Category(id=1, name="Fruits"),
        Category(id=2, name="Vegetables"),
    ]


@pytest.fixture
def mock_catalog(products, categories):
    """Mock CatalogClient"""
    catalog = Mock()
    catalog.fetch_products = AsyncMock(return_value=products)
    catalog.fetch_categories = AsyncMock(return_value=categories)
    return catalog


@pytest.fixture
def failing_catalog(categories):
    """Mock CatalogClient whose product fetch fails"""
    catalog = Mock()
    catalog.fetch_products = AsyncMock(side_effect=FetchError("products", "HTTP 503"))
    catalog.fetch_categories = AsyncMock(return_value=categories)
    return catalog


@pytest.fixture
def slow_store():
    """Store where the first write is slower than the second"""
    return SlowStore(delays=[0.05, 0])


@pytest.fixture
def flaky_store():
    """Store whose first write fails"""
    return FlakyStore(failing_writes=(1,))

"""
Catalog Client

Fetches products and categories from their two HTTP endpoints.
Transport errors are retried with exponential backoff (tenacity);
status errors and malformed bodies fail immediately with FetchError.
"""
from typing import Iterable, List, Optional

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from storefront import config
from storefront.errors import ERROR_CATEGORIES_UNAVAILABLE, ERROR_PRODUCTS_UNAVAILABLE, FetchError
from storefront.logging import get_logger
from .models import Category, Product, ProductId

logger = get_logger(__name__)

SOURCE_PRODUCTS = "products"
SOURCE_CATEGORIES = "categories"


class CatalogClient:
    """Read-only client for the product and category endpoints."""

    def __init__(
        self,
        products_url: str = config.PRODUCTS_URL,
        categories_url: str = config.CATEGORIES_URL,
        timeout: float = config.FETCH_TIMEOUT,
        retries: int = config.FETCH_RETRIES,
        backoff: float = 0.5,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            products_url: Endpoint returning a JSON array of products
            categories_url: Endpoint returning a JSON array of categories
            timeout: Per-request timeout in seconds
            retries: Attempts per fetch on transport errors (at least 1)
            backoff: Exponential backoff multiplier in seconds
            http_client: Shared client; a short-lived one is opened per request otherwise
        """
        self.products_url = products_url
        self.categories_url = categories_url
        self.timeout = timeout
        self.retries = max(1, retries)
        self.backoff = backoff
        self._http_client = http_client

    async def fetch_products(self) -> List[Product]:
        """Fetch all products. Raises FetchError."""
        data = await self._get_json(SOURCE_PRODUCTS, self.products_url)
        try:
            return [Product.model_validate(item) for item in data]
        except ValidationError as e:
            raise FetchError(SOURCE_PRODUCTS, f"{ERROR_PRODUCTS_UNAVAILABLE}: invalid product: {e}") from e

    async def fetch_categories(self) -> List[Category]:
        """Fetch all categories. Raises FetchError."""
        data = await self._get_json(SOURCE_CATEGORIES, self.categories_url)
        try:
            return [Category.model_validate(item) for item in data]
        except ValidationError as e:
            raise FetchError(SOURCE_CATEGORIES, f"{ERROR_CATEGORIES_UNAVAILABLE}: invalid category: {e}") from e

    async def _get_json(self, source: str, url: str) -> list:
        try:
            response = await self._get_with_retry(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(source, f"HTTP {e.response.status_code} from {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(source, f"request to {url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(source, f"response from {url} is not JSON") from e

        if not isinstance(data, list):
            raise FetchError(source, f"expected a JSON array from {url}, got {type(data).__name__}")
        return data

    async def _get_with_retry(self, url: str) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=self.backoff, max=4),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"Retrying {url} (attempt {attempt.retry_state.attempt_number}/{self.retries})")
                return await self._get(url)

    async def _get(self, url: str) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url)


def find_product(products: Iterable[Product], product_id: ProductId) -> Optional[Product]:
    """
    Find a product by id.

    Ids from request paths arrive as strings while the catalog may use
    integers, so ids are compared by their string form.
    """
    wanted = str(product_id)
    return next((product for product in products if str(product.id) == wanted), None)


# Singleton instance
_catalog_client: Optional[CatalogClient] = None


def get_catalog_client() -> CatalogClient:
    """Get CatalogClient singleton."""
    global _catalog_client
    if _catalog_client is None:
        _catalog_client = CatalogClient()
    return _catalog_client

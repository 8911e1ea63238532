"""Catalog package: product/category models and the HTTP client."""
from .models import Category, Product, ProductId
from .client import CatalogClient, find_product, get_catalog_client

__all__ = [
    "Category",
    "Product",
    "ProductId",
    "CatalogClient",
    "find_product",
    "get_catalog_client",
]

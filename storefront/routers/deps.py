"""
Shared Dependencies for Routers

Lazy-loaded singletons, overridable in tests through
app.dependency_overrides.
"""
from fastapi import HTTPException

from storefront.catalog import Product, ProductId, find_product
from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.screen import StorefrontScreen, get_screen


def get_storefront_screen() -> StorefrontScreen:
    """Get the StorefrontScreen singleton."""
    return get_screen()


def resolve_product(screen: StorefrontScreen, product_id: ProductId) -> Product:
    """Look up a product on the screen; 404 when it is not in the catalog."""
    product = find_product(screen.products, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return product

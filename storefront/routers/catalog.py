"""
Catalog Router

Categories, products and the whole screen state.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from storefront.logging import get_logger
from storefront.screen import StorefrontScreen
from .deps import get_storefront_screen

logger = get_logger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/categories")
async def get_categories(screen: StorefrontScreen = Depends(get_storefront_screen)):
    """Categories for the side filter column."""
    return [{"id": category.id, "name": category.name} for category in screen.categories]


@router.get("/products")
async def get_products(
    category: Optional[str] = None,
    screen: StorefrontScreen = Depends(get_storefront_screen),
):
    """Products, optionally restricted to one category."""
    return [product.to_snapshot() for product in screen.products_in(category)]


@router.get("/screen")
async def get_screen_state(
    category: Optional[str] = None,
    screen: StorefrontScreen = Depends(get_storefront_screen),
):
    """Full screen state; `category` changes the selected filter."""
    if category is not None:
        screen.select_category(category)
    return screen.render()


@router.post("/refresh")
async def refresh_catalog(screen: StorefrontScreen = Depends(get_storefront_screen)):
    """Re-fetch categories and products."""
    await screen.refresh()
    return {
        "categories": len(screen.categories),
        "products": len(screen.products),
        "errors": [str(error) for error in screen.errors],
    }

"""
Cart Router

Toggle/add/remove endpoints backed by the screen's CartManager.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.errors import CartNotLoadedError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.screen import StorefrontScreen
from .deps import get_storefront_screen, resolve_product
from .models import CartProductRequest

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _cart_response(screen: StorefrontScreen) -> dict:
    manager = screen.cart_manager
    response = manager.summary()
    response["persisted"] = manager.last_persist_error is None
    if manager.last_persist_error is not None:
        response["persist_error"] = str(manager.last_persist_error)
    return response


@router.get("/cart")
async def get_cart(screen: StorefrontScreen = Depends(get_storefront_screen)):
    """Current cart with total."""
    return _cart_response(screen)


@router.post("/cart/toggle")
async def toggle_cart_item(
    request: CartProductRequest,
    screen: StorefrontScreen = Depends(get_storefront_screen),
):
    """Add the product if absent, remove it if present."""
    product = resolve_product(screen, request.product_id)
    try:
        in_cart = await screen.tap(product)
    except CartNotLoadedError as e:
        raise HTTPException(status_code=503, detail=str(e))

    response = _cart_response(screen)
    response["in_cart"] = in_cart
    return response


@router.post("/cart/add")
async def add_to_cart(
    request: CartProductRequest,
    screen: StorefrontScreen = Depends(get_storefront_screen),
):
    """Add product to cart (no-op when already there)."""
    product = resolve_product(screen, request.product_id)
    try:
        await screen.cart_manager.add(product)
    except CartNotLoadedError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _cart_response(screen)


@router.delete("/cart/{product_id}")
async def remove_from_cart(
    product_id: str,
    screen: StorefrontScreen = Depends(get_storefront_screen),
):
    """Remove product from cart (no-op when absent)."""
    manager = screen.cart_manager
    if not manager.loaded:
        raise HTTPException(status_code=503, detail=str(CartNotLoadedError()))

    # Entries may outlive the catalog (persisted from an earlier run)
    entry = next((e for e in manager.entries if str(e.product_id) == product_id), None)
    if entry is None:
        resolve_product(screen, product_id)
        logger.debug(f"Product {sanitize_id_for_logging(product_id)} not in cart, nothing to remove")
        return _cart_response(screen)

    await manager.remove(entry.product_id)
    return _cart_response(screen)

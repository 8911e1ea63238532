"""HTTP routers for the storefront screen."""
from .catalog import router as catalog_router
from .cart import router as cart_router

__all__ = ["catalog_router", "cart_router"]

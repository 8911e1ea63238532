"""Cart package: models, storage, and manager facade."""
from .models import CartEntry, Cart
from .service import CartManager, get_cart_manager, reset_cart_manager

__all__ = [
    "CartEntry",
    "Cart",
    "CartManager",
    "get_cart_manager",
    "reset_cart_manager",
]

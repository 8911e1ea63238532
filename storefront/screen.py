"""
Storefront Screen

Headless view-model of the product list screen: a category column, a
two-column product grid with Add/Remove buttons and a total bar. The
screen holds catalog state only; the cart belongs to the CartManager it
is given.
"""
import asyncio
from typing import List, Optional

from storefront import config
from storefront.cart import CartManager, get_cart_manager
from storefront.catalog import CatalogClient, Category, Product, get_catalog_client
from storefront.errors import FetchError
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.money import format_money, to_float

logger = get_logger(__name__)

LABEL_ADD = "+ Add"
LABEL_REMOVE = "Remove"
GRID_COLUMNS = 2


class StorefrontScreen:
    """Product list screen state and user interactions."""

    def __init__(
        self,
        cart_manager: Optional[CartManager] = None,
        catalog: Optional[CatalogClient] = None,
        title: str = config.SCREEN_TITLE,
    ):
        self.cart_manager = cart_manager or get_cart_manager()
        self.catalog = catalog or get_catalog_client()
        self.title = title
        self.categories: List[Category] = []
        self.products: List[Product] = []
        self.selected_category: Optional[str] = None
        self.loading = True
        self.errors: List[FetchError] = []

    async def mount(self) -> None:
        """
        Load everything the screen needs.

        Categories, products and the persisted cart are requested in
        parallel; a failure in one leaves the others untouched.
        """
        self.errors = []
        await asyncio.gather(
            self._load_categories(),
            self._load_products(),
            self.cart_manager.load(),
        )

    async def refresh(self) -> None:
        """Re-fetch the catalog without reloading the cart."""
        self.errors = []
        await asyncio.gather(self._load_categories(), self._load_products())

    async def _load_categories(self) -> None:
        try:
            self.categories = await self.catalog.fetch_categories()
        except FetchError as e:
            logger.error(f"Error fetching categories: {e}")
            self.errors.append(e)
            self.categories = []

    async def _load_products(self) -> None:
        self.loading = True
        try:
            self.products = await self.catalog.fetch_products()
        except FetchError as e:
            logger.error(f"Error fetching products: {e}")
            self.errors.append(e)
            self.products = []
        finally:
            self.loading = False

    # ==================== CATEGORY FILTER ====================

    def select_category(self, name: Optional[str]) -> None:
        """Filter the grid by category name; None or "" shows everything."""
        self.selected_category = name or None

    def _is_selected(self, category: Category) -> bool:
        if not self.selected_category:
            return False
        return category.name.strip().lower() == self.selected_category.strip().lower()

    def products_in(self, category: Optional[str]) -> List[Product]:
        """Products whose category label matches (case-insensitive); all when None."""
        if not category:
            return list(self.products)
        wanted = category.strip().lower()
        return [product for product in self.products if product.category.strip().lower() == wanted]

    def visible_products(self) -> List[Product]:
        return self.products_in(self.selected_category)

    # ==================== CART INTERACTION ====================

    def in_cart(self, product: Product) -> bool:
        return self.cart_manager.contains(product.id)

    def button_label(self, product: Product) -> str:
        return LABEL_REMOVE if self.in_cart(product) else LABEL_ADD

    async def tap(self, product: Product) -> bool:
        """Add/Remove button pressed. Returns the new membership state."""
        in_cart = await self.cart_manager.toggle(product)
        logger.info(
            f"{'Added' if in_cart else 'Removed'} "
            f"{sanitize_string_for_logging(product.title)} {'to' if in_cart else 'from'} cart"
        )
        return in_cart

    def total_label(self) -> str:
        return f"Total Amount: {format_money(self.cart_manager.total())}"

    # ==================== RENDER ====================

    def product_card(self, product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "category": product.category,
            "price": to_float(product.price),
            "rate": product.rate,
            "in_cart": self.in_cart(product),
            "button_label": self.button_label(product),
        }

    def render(self) -> dict:
        """Full screen state."""
        return {
            "title": self.title,
            "loading": self.loading,
            "categories": [
                {
                    "id": category.id,
                    "name": category.name,
                    "selected": self._is_selected(category),
                }
                for category in self.categories
            ],
            "selected_category": self.selected_category,
            "columns": GRID_COLUMNS,
            "products": [self.product_card(product) for product in self.visible_products()],
            "cart": self.cart_manager.summary(),
            "total_label": self.total_label(),
            "errors": [str(error) for error in self.errors],
        }


# Singleton instance
_screen: Optional[StorefrontScreen] = None


def get_screen() -> StorefrontScreen:
    """Get StorefrontScreen singleton."""
    global _screen
    if _screen is None:
        _screen = StorefrontScreen()
    return _screen


def reset_screen(screen: Optional[StorefrontScreen] = None) -> None:
    """Replace the StorefrontScreen singleton (None resets it)."""
    global _screen
    _screen = screen

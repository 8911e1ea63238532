"""Cart manager service: in-memory cart synchronized with a key/value store."""
import asyncio
import json
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from storefront.catalog.models import Product, ProductId
from storefront.errors import (
    ERROR_CART_READ_FAILED,
    ERROR_CART_WRITE_FAILED,
    CartNotLoadedError,
    StorageReadError,
    StorageWriteError,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.money import format_money, to_float
from .models import Cart, CartEntry
from .storage import KeyValueStore, StorageKeys, get_store

logger = get_logger(__name__)


class CartManager:
    """
    Owns the shopping cart and keeps the store eventually consistent with it.

    Features:
    - Mutations are applied synchronously, so concurrent tasks on the
      event loop never interleave inside one
    - Every mutation is persisted with the snapshot taken right after it,
      tagged with a monotonically increasing version
    - Writes are serialized by a lock; a snapshot older than the last
      written one is never stored
    - Storage failures are logged once per attempt and never roll back
      the in-memory state
    """

    def __init__(self, store: Optional[KeyValueStore] = None, key: str = StorageKeys.CART):
        self._store = store  # Lazy initialization
        self.key = key
        self._cart: Optional[Cart] = None
        self._version = 0
        self._written_version = 0
        self._write_lock = asyncio.Lock()
        self.last_load_error: Optional[StorageReadError] = None
        self.last_persist_error: Optional[StorageWriteError] = None

    @property
    def store(self) -> KeyValueStore:
        """Get the key/value store (lazy initialization)."""
        if self._store is None:
            self._store = get_store()
        return self._store

    @property
    def loaded(self) -> bool:
        return self._cart is not None

    @property
    def cart(self) -> Cart:
        """The loaded cart. Raises CartNotLoadedError before load()."""
        if self._cart is None:
            raise CartNotLoadedError()
        return self._cart

    @property
    def version(self) -> int:
        """Version of the newest snapshot taken."""
        return self._version

    @property
    def written_version(self) -> int:
        """Version of the newest snapshot successfully written."""
        return self._written_version

    # ==================== LOAD ====================

    async def load(self) -> Cart:
        """
        Hydrate the cart from the store.

        A missing key gives an empty cart. An unreadable store or a
        corrupt payload also gives an empty cart, with one log line and
        the error kept in last_load_error.
        """
        self.last_load_error = None

        try:
            data = await self.store.get(self.key)
        except Exception as e:
            self.last_load_error = StorageReadError(f"{ERROR_CART_READ_FAILED}: {e}")
            logger.error(f"Failed to read cart from storage: {e}")
            self._cart = Cart()
            return self._cart

        if not data:
            self._cart = Cart()
            return self._cart

        try:
            self._cart = Cart.from_payload(json.loads(data))
        except (ValueError, TypeError) as e:
            # Covers json.JSONDecodeError and pydantic ValidationError
            self.last_load_error = StorageReadError(f"Corrupted cart data under key {self.key!r}: {e}")
            logger.warning(f"Corrupted cart data under key {self.key!r}, starting with an empty cart: {e}")
            self._cart = Cart()
            return self._cart

        logger.info(f"Cart loaded with {len(self._cart)} item(s)")
        return self._cart

    # ==================== READ ====================

    def _current(self) -> Cart:
        # Reads before load() see an empty cart
        return self._cart if self._cart is not None else Cart()

    def contains(self, product_id: ProductId) -> bool:
        return product_id in self._current()

    def total(self) -> Decimal:
        """Sum of prices of all products in the cart (0 when empty)."""
        return self._current().total

    @property
    def entries(self) -> List[CartEntry]:
        return list(self._current().entries.values())

    @property
    def count(self) -> int:
        return len(self._current())

    def summary(self) -> dict:
        """Cart summary for API responses."""
        cart = self._current()
        total = cart.total
        return {
            "is_empty": not cart.entries,
            "count": len(cart),
            "items": [entry.to_dict() for entry in cart.entries.values()],
            "total": to_float(total),
            "total_display": format_money(total),
        }

    # ==================== MUTATIONS ====================

    async def toggle(self, product: Product) -> bool:
        """
        Add the product if absent, remove it if present.

        Returns:
            True if the product is in the cart after the call
        """
        cart = self.cart
        if product.id in cart:
            cart.remove(product.id)
            in_cart = False
        else:
            cart.add(product)
            in_cart = True

        logger.debug(
            f"Cart toggle {sanitize_id_for_logging(product.id)}: {'added' if in_cart else 'removed'}"
        )
        await self._write(*self._snapshot())
        return in_cart

    async def add(self, product: Product) -> bool:
        """Add product if absent. Returns True if the cart changed."""
        if not self.cart.add(product):
            return False
        await self._write(*self._snapshot())
        return True

    async def remove(self, product: Union[Product, ProductId]) -> bool:
        """Remove product (or product id) if present. Returns True if the cart changed."""
        product_id = product.id if isinstance(product, Product) else product
        if not self.cart.remove(product_id):
            return False
        await self._write(*self._snapshot())
        return True

    # ==================== PERSISTENCE ====================

    async def persist(self) -> bool:
        """
        Write the current cart to the store.

        Returns:
            True if the snapshot was stored (or a newer one already was)
        """
        return await self._write(*self._snapshot())

    def _snapshot(self) -> Tuple[int, str]:
        self._version += 1
        return self._version, json.dumps(self.cart.to_payload())

    async def _write(self, version: int, payload: str) -> bool:
        async with self._write_lock:
            if version <= self._written_version:
                logger.debug(f"Skipping stale cart snapshot v{version} (stored v{self._written_version})")
                return True

            try:
                stored = await self.store.set(self.key, payload)
            except Exception as e:
                return self._write_failed(version, f"{ERROR_CART_WRITE_FAILED}: {e}")

            if not stored:
                return self._write_failed(version, f"{ERROR_CART_WRITE_FAILED}: store rejected the write")

            self._written_version = version
            self.last_persist_error = None
            return True

    def _write_failed(self, version: int, message: str) -> bool:
        self.last_persist_error = StorageWriteError(message)
        logger.error(f"Cart snapshot v{version} not persisted: {message}")
        return False


# Singleton instance
_cart_manager: Optional[CartManager] = None


def get_cart_manager() -> CartManager:
    """Get CartManager singleton."""
    global _cart_manager
    if _cart_manager is None:
        _cart_manager = CartManager()
    return _cart_manager


def reset_cart_manager(manager: Optional[CartManager] = None) -> None:
    """Replace the CartManager singleton (None resets it)."""
    global _cart_manager
    _cart_manager = manager

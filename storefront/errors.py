"""
Common Errors

Centralized error messages and the exception taxonomy of the storefront.
None of these are fatal: callers log them and fall back to an empty or
previous-known-good state.
"""

# Catalog errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCTS_UNAVAILABLE = "Products unavailable"
ERROR_CATEGORIES_UNAVAILABLE = "Categories unavailable"

# Cart errors
ERROR_CART_NOT_LOADED = "Cart is not loaded yet"
ERROR_CART_READ_FAILED = "Failed to read cart from storage"
ERROR_CART_WRITE_FAILED = "Failed to save cart to storage"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class FetchError(StorefrontError):
    """A catalog endpoint could not be fetched or returned an unusable body."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class StorageReadError(StorefrontError):
    """The persisted cart is corrupt or the store could not be read."""


class StorageWriteError(StorefrontError):
    """The cart snapshot could not be written to the store."""


class CartNotLoadedError(StorefrontError):
    """A cart mutation was attempted before the cart was loaded."""

    def __init__(self):
        super().__init__(ERROR_CART_NOT_LOADED)

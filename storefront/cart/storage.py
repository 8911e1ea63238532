"""Key/value store access for the cart."""
from storefront.db import KeyValueStore, StorageKeys, get_store

__all__ = ["KeyValueStore", "StorageKeys", "get_store"]

"""
Storefront configuration.

All settings come from environment variables with working defaults, so
the screen runs against the public demo endpoints and an in-memory store
when nothing is configured.
"""
import os

# Catalog endpoints
PRODUCTS_URL = os.environ.get("PRODUCTS_URL", "https://fakestoreapi.com/products")
CATEGORIES_URL = os.environ.get(
    "CATEGORIES_URL",
    "https://8s8yxba6g8.execute-api.ap-south-1.amazonaws.com/api/categories",
)

# HTTP client behaviour for catalog fetches
FETCH_TIMEOUT = float(os.environ.get("FETCH_TIMEOUT", "10.0"))
FETCH_RETRIES = int(os.environ.get("FETCH_RETRIES", "3"))

# Cart persistence
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Screen
SCREEN_TITLE = "Vegetables and fruits"


def redis_configured() -> bool:
    """True when both Upstash credentials are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)

"""Storefront: catalog browsing and a persisted shopping cart."""

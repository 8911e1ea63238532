"""
Storefront - Main FastAPI Application

Serves the product list screen: catalog, category filter and cart.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.logging import get_logger
from storefront.routers import cart_router, catalog_router
from storefront.screen import get_screen

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup: fetch catalog and hydrate the cart
    screen = get_screen()
    await screen.mount()
    logger.info(
        f"Screen mounted: {len(screen.categories)} categories, "
        f"{len(screen.products)} products, {screen.cart_manager.count} item(s) in cart"
    )
    yield


app = FastAPI(
    title="Storefront",
    description="Product list screen with a persisted shopping cart",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router, prefix="/api")
app.include_router(cart_router, prefix="/api")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

"""
rocketcart - FastAPI Application

Usage:
    uvicorn rocketcart.app:app
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from rocketcart import __version__
from rocketcart.cart import CartStore, create_cart_store
from rocketcart.db import close_redis
from rocketcart.logging import get_logger
from rocketcart.routers.cart import router as cart_router
from rocketcart.services.inventory import InventoryClient
from rocketcart.services.notifications import TelegramNotificationSink

logger = get_logger(__name__)


@asynccontextmanager
async def _configured_store(app: FastAPI):
    """Build the cart store from configuration and close its clients on shutdown."""
    inventory = InventoryClient()
    store = await create_cart_store(inventory=inventory)
    app.state.cart_store = store
    logger.info(f"Cart store ready, inventory at {inventory.base_url}")
    try:
        yield
    finally:
        if isinstance(store.notifications, TelegramNotificationSink):
            await store.notifications.aclose()
        await inventory.aclose()
        await close_redis()


def create_app(cart_store: Optional[CartStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        cart_store: Pre-built store to serve. When omitted, one is created
            from configuration on startup.
    """
    app = FastAPI(
        title="rocketcart",
        version=__version__,
        lifespan=None if cart_store is not None else _configured_store,
    )
    if cart_store is not None:
        app.state.cart_store = cart_store

    app.include_router(cart_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()

# storefront/api/__init__.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from storefront.api.error_handlers import setup_error_handlers
from storefront.api.routers import carts, categories, health, products, purchases, users
from storefront.data.database import Database
from storefront.services.lock_service import LockService
from storefront.utils.logging import get_logger
from storefront.utils.settings import CHECKOUT_LOCK_ENABLED

logger = get_logger(__name__)


def create_app(database: Database, lock_service: Optional[LockService] = None) -> FastAPI:
    if lock_service is None and CHECKOUT_LOCK_ENABLED:
        lock_service = LockService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.connect()
        database.create_all()
        app.state.database = database
        app.state.lock_service = lock_service
        logger.info(f"Storefront started (checkout lock {'on' if lock_service else 'off'})")
        yield
        database.dispose()

    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )
    setup_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(carts.router)
    app.include_router(purchases.router)

    return app

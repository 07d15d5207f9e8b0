# storefront_cart/api/__init__.py
from fastapi import FastAPI

from storefront_cart.api.errors import register_exception_handlers
from storefront_cart.api.routers import carts, health


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router)
    app.include_router(carts.router)
    register_exception_handlers(app)

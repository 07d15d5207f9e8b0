# storefront_cart/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront_cart.api import include_routers
from storefront_cart.data.database import init_db
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    init_db()
    yield


def create_app(init_database: bool = True) -> FastAPI:
    app = FastAPI(
        title="Storefront Cart Service",
        version="1.0.0",
        lifespan=lifespan if init_database else None,
    )
    include_routers(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

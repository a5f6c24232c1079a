# shopfront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from shopfront.api import register_error_handlers
from shopfront.api.routers import health, users, items, carts, orders
from shopfront.data.database import Base, engine
from shopfront.utils.logging import configure_logging, get_logger

# import wszystkich modeli przed create_all
import shopfront.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Shopfront",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(items.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

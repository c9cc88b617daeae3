from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, errors, schema
from core.config import Settings, load_settings
from core.log import configure_logging
from products import router as products_router
from products.repository import ProductRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting server...")
    database = app.state.database

    # Without a reachable store the server must not come up.
    if not await database.check_connection():
        logger.error("Cannot start server - database connection failed")
        await database.close()
        raise RuntimeError("Database connection failed.")

    # A failed table bootstrap is reported but does not stop startup.
    if not await schema.initialize_schema(database):
        logger.warning("Continuing without confirmed products table")

    settings: Settings = app.state.settings
    logger.info("Server running on http://localhost:%s", settings.port)
    try:
        yield
    finally:
        await database.close()


def create_app(
    settings: Settings | None = None,
    *,
    database: db.Database | None = None,
    repository: ProductRepository | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    database = database or db.Database(settings)

    app = FastAPI(title="product-service", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.products = repository or ProductRepository(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    errors.install_exception_handlers(app)

    app.include_router(products_router.router, tags=["products"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "product-service api"}

    return app


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

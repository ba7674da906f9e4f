import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api import health, products
from catalog.api.middleware import RequestLoggingMiddleware
from catalog.config import Settings, get_settings
from catalog.container import build_container
from catalog.store.base import ProductStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        store: Product store to use instead of the one STORE_BACKEND selects
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup and shutdown events.
        """
        # Startup
        logger.info("Starting up application...")
        app.state.container = build_container(settings, store=store)

        yield

        # Shutdown
        logger.info("Shutting down application...")
        app.state.container.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description="""
    A small API for managing a product catalog:

    - **Product Management**: create, read, replace, update and delete products
    - **Price Search**: find products priced above a threshold
    - **Consumer Price**: price a list of products with tiered multipliers

    ## Storage
    Products live either in a JSON file or in a relational database,
    selected with the `STORE_BACKEND` setting.

    ## Authentication
    When a `TOKEN` is configured, every `/products` request must send it
    in the `TOKEN` header.
    """,
        version=settings.VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Include API routers
    app.include_router(health.router)
    app.include_router(products.router)

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.VERSION,
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()

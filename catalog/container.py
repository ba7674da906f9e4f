import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from catalog.config import Settings
from catalog.database import Base, create_db_engine, create_session_factory
from catalog.repositories.product_repository import ProductRepository
from catalog.services.product_service import ProductService
from catalog.store.base import ProductStore
from catalog.store.json_store import JsonProductStore
from catalog.store.sql_store import SqlProductStore

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Objects built once at startup and shared by every request."""
    store: ProductStore
    repository: ProductRepository
    service: ProductService
    engine: Optional[Engine] = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def build_store(settings: Settings) -> tuple[ProductStore, Optional[Engine]]:
    """Create the product store selected by STORE_BACKEND."""
    if settings.STORE_BACKEND == "sql":
        engine = create_db_engine(settings.DATABASE_URL)
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        store = SqlProductStore(
            create_session_factory(engine),
            expiration_format=settings.EXPIRATION_FORMAT,
        )
        return store, engine

    store = JsonProductStore(settings.PRODUCTS_FILE)
    store.ensure_file()
    return store, None


def build_container(settings: Settings, store: Optional[ProductStore] = None) -> Container:
    """
    Wire store, repository and service together.

    An already built `store` can be passed in to skip backend creation.
    """
    engine = None
    if store is None:
        store, engine = build_store(settings)
    repository = ProductRepository(store)
    service = ProductService(repository)
    logger.info(f"Using {type(store).__name__} for products")
    return Container(store=store, repository=repository, service=service, engine=engine)

import logging
from datetime import date, datetime
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from catalog.exceptions import InvalidProductError, ProductNotFoundError, StorageError
from catalog.models.product import ProductRecord
from catalog.schemas.product import EXPIRATION_FORMAT, Product, ProductCreate, ProductUpdate
from catalog.store.base import ProductStore

logger = logging.getLogger(__name__)


class SqlProductStore(ProductStore):
    """
    Product store backed by the `products` table.

    Each call opens its own session and issues a single statement (plus
    a lookup for updates). Nothing spans calls, so concurrency is whatever
    the database engine provides for single statements.
    """

    def __init__(self, session_factory: sessionmaker, expiration_format: str = EXPIRATION_FORMAT):
        self.session_factory = session_factory
        self.expiration_format = expiration_format

    def _parse_expiration(self, value: str) -> date:
        try:
            return datetime.strptime(value, self.expiration_format).date()
        except ValueError as e:
            raise InvalidProductError(
                f"invalid expiration date {value!r}, expected format {self.expiration_format}"
            ) from e

    def _to_product(self, record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            quantity=record.quantity,
            code_value=record.code_value,
            is_published=record.is_published,
            expiration=record.expiration.strftime(self.expiration_format),
            price=record.price,
        )

    def get_all(self) -> List[Product]:
        try:
            with self.session_factory() as db:
                records = db.query(ProductRecord).order_by(ProductRecord.id).all()
                return [self._to_product(r) for r in records]
        except SQLAlchemyError as e:
            logger.error(f"Error listing products: {e}")
            raise StorageError("could not list products") from e

    def get_one(self, product_id: int) -> Product:
        try:
            with self.session_factory() as db:
                record = db.get(ProductRecord, product_id)
                if record is None:
                    raise ProductNotFoundError.for_id(product_id)
                return self._to_product(record)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product #{product_id}: {e}")
            raise StorageError("could not fetch product", product_id=product_id) from e

    def add_one(self, product: ProductCreate) -> Product:
        record = ProductRecord(
            name=product.name,
            quantity=product.quantity,
            code_value=product.code_value,
            is_published=product.is_published,
            expiration=self._parse_expiration(product.expiration),
            price=product.price,
        )
        try:
            with self.session_factory() as db:
                db.add(record)
                db.commit()
                db.refresh(record)
                return self._to_product(record)
        except SQLAlchemyError as e:
            logger.error(f"Error creating product: {e}")
            raise StorageError("could not create product") from e

    def update_one(self, product_id: int, changes: ProductUpdate) -> Product:
        changed = changes.changes()

        try:
            with self.session_factory() as db:
                record = db.get(ProductRecord, product_id)
                if record is None:
                    raise ProductNotFoundError.for_id(product_id)
                if "expiration" in changed:
                    changed["expiration"] = self._parse_expiration(changed["expiration"])
                for field, value in changed.items():
                    setattr(record, field, value)
                db.commit()
                db.refresh(record)
                return self._to_product(record)
        except SQLAlchemyError as e:
            logger.error(f"Error updating product #{product_id}: {e}")
            raise StorageError("could not update product", product_id=product_id) from e

    def delete_one(self, product_id: int) -> None:
        try:
            with self.session_factory() as db:
                deleted = (
                    db.query(ProductRecord)
                    .filter(ProductRecord.id == product_id)
                    .delete(synchronize_session=False)
                )
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error deleting product #{product_id}: {e}")
            raise StorageError("could not delete product", product_id=product_id) from e

        if deleted == 0:
            raise ProductNotFoundError.for_id(product_id)

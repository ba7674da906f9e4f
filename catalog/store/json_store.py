import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from catalog.exceptions import ProductNotFoundError, StorageError
from catalog.schemas.product import Product, ProductCreate, ProductUpdate
from catalog.store.base import ProductStore

logger = logging.getLogger(__name__)

_products_adapter = TypeAdapter(List[Product])


class JsonProductStore(ProductStore):
    """
    Product store backed by a single JSON array on disk.

    Every operation loads the whole file, changes the list in memory and
    writes the whole file back. There is no locking: two writers running
    at the same time can overwrite each other's changes.
    """

    def __init__(self, path):
        self.path = Path(path)

    def ensure_file(self) -> None:
        """Create the file with an empty array if it does not exist yet."""
        if not self.path.exists():
            logger.info(f"Creating empty product file at {self.path}")
            self._save_products([])

    def _load_products(self) -> List[Product]:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.error(f"Error reading product file {self.path}: {e}")
            raise StorageError(f"could not read {self.path}") from e

        try:
            return _products_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Product file {self.path} is corrupt: {e}")
            raise StorageError(f"could not decode {self.path}") from e

    def _save_products(self, products: List[Product], product_id: Optional[int] = None) -> None:
        try:
            self.path.write_bytes(_products_adapter.dump_json(products, indent=2))
        except OSError as e:
            logger.error(f"Error writing product file {self.path}: {e}")
            raise StorageError(f"could not write {self.path}", product_id=product_id) from e

    def get_all(self) -> List[Product]:
        return self._load_products()

    def get_one(self, product_id: int) -> Product:
        for product in self._load_products():
            if product.id == product_id:
                return product
        raise ProductNotFoundError.for_id(product_id)

    def add_one(self, product: ProductCreate) -> Product:
        products = self._load_products()
        next_id = max((p.id for p in products), default=0) + 1
        created = Product(id=next_id, **product.model_dump())
        products.append(created)
        self._save_products(products, product_id=next_id)
        return created

    def update_one(self, product_id: int, changes: ProductUpdate) -> Product:
        products = self._load_products()
        for i, product in enumerate(products):
            if product.id == product_id:
                products[i] = changes.apply_to(product)
                self._save_products(products, product_id=product_id)
                return products[i]
        raise ProductNotFoundError.for_id(product_id)

    def delete_one(self, product_id: int) -> None:
        products = self._load_products()
        for i, product in enumerate(products):
            if product.id == product_id:
                del products[i]
                self._save_products(products, product_id=product_id)
                return
        raise ProductNotFoundError.for_id(product_id)

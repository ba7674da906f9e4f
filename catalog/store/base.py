"""Storage contract shared by every product backend.

The repository only talks to this interface, so the JSON file store and
the relational store are interchangeable. Both must raise the same
exceptions and apply the same merge rule on update.
"""

from abc import ABC, abstractmethod
from typing import List

from catalog.schemas.product import Product, ProductCreate, ProductUpdate


class ProductStore(ABC):

    @abstractmethod
    def get_all(self) -> List[Product]:
        """Return every product in store order.

        Raises:
            StorageError: If the backing medium cannot be read
        """

    @abstractmethod
    def get_one(self, product_id: int) -> Product:
        """Return the product with `product_id`.

        Raises:
            ProductNotFoundError: If no product has that id
        """

    @abstractmethod
    def add_one(self, product: ProductCreate) -> Product:
        """Persist a new product and return it with its assigned id."""

    @abstractmethod
    def update_one(self, product_id: int, changes: ProductUpdate) -> Product:
        """Merge the provided fields onto the stored product and persist it.

        Raises:
            ProductNotFoundError: If no product has that id
        """

    @abstractmethod
    def delete_one(self, product_id: int) -> None:
        """Remove the product with `product_id`.

        Raises:
            ProductNotFoundError: If no product has that id
        """

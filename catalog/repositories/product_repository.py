from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from catalog.exceptions import (
    DuplicateCodeError,
    ProductNotPublishedError,
    StockUnavailableError,
)
from catalog.schemas.product import Product, ProductCreate, ProductUpdate
from catalog.store.base import ProductStore


def tier_multiplier(count: int) -> float:
    """
    Price multiplier for the number of units consumed in one call.

    - up to 10 units: 1.21
    - 11 to 19 units: 1.17
    - 20 units or more: 1.15
    """
    if count <= 10:
        return 1.21
    if count < 20:
        return 1.17
    return 1.15


@dataclass
class ConsumerPrice:
    """Snapshot of the products touched by a consumer price call."""
    products: List[Product] = field(default_factory=list)
    total_price: float = 0.0


class ProductRepository:
    """
    Business rules on top of a product store.

    This repository handles:
    - Code value uniqueness on create and update
    - Price threshold search
    - Consumer price computation with stock checks
    """

    def __init__(self, store: ProductStore):
        self.store = store

    def get_all(self) -> List[Product]:
        return self.store.get_all()

    def get_by_id(self, product_id: int) -> Product:
        return self.store.get_one(product_id)

    def search_price_gt(self, price: float) -> List[Product]:
        """Return products whose price is strictly greater than `price`."""
        return [p for p in self.store.get_all() if p.price > price]

    def consumer_price(self, product_ids: Iterable[int]) -> ConsumerPrice:
        """
        Price a list of product ids, repeats consuming one more unit each.

        Quantities in the returned snapshot are decremented once per unit
        consumed. Nothing is written back to the store, so a rejected
        request leaves stored stock untouched.

        Args:
            product_ids: Ids to consume, in order; duplicates allowed

        Returns:
            The touched products and the total after the tier multiplier

        Raises:
            ProductNotFoundError: If an id does not exist
            StockUnavailableError: If a product runs out of stock
            ProductNotPublishedError: If a product is not published
        """
        touched: dict = {}
        total = 0.0
        count = 0

        for product_id in product_ids:
            product = touched.get(product_id)
            if product is None:
                product = self.store.get_one(product_id)
                self._check_purchasable(product)
                touched[product_id] = product
            elif product.quantity <= 0:
                raise StockUnavailableError(product.id)

            product.quantity -= 1
            total += product.price
            count += 1

        return ConsumerPrice(
            products=list(touched.values()),
            total_price=total * tier_multiplier(count),
        )

    def create(self, product: ProductCreate) -> Product:
        self._check_code_value(product.code_value)
        return self.store.add_one(product)

    def update_product(self, product_id: int, changes: ProductUpdate) -> Product:
        """Apply the non-empty fields of `changes` to the product."""
        if changes.code_value:
            self._check_code_value(changes.code_value, exclude_id=product_id)
        return self.store.update_one(product_id, changes)

    def replace_product(self, product_id: int, product: ProductCreate) -> Product:
        """Overwrite every field of the product, keeping its id."""
        self._check_code_value(product.code_value, exclude_id=product_id)
        return self.store.update_one(product_id, ProductUpdate.from_create(product))

    def delete(self, product_id: int) -> None:
        self.store.delete_one(product_id)

    def _check_code_value(self, code_value: str, exclude_id: Optional[int] = None) -> None:
        for product in self.store.get_all():
            if product.code_value == code_value and product.id != exclude_id:
                raise DuplicateCodeError(code_value)

    @staticmethod
    def _check_purchasable(product: Product) -> None:
        if product.quantity <= 0:
            raise StockUnavailableError(product.id)
        if not product.is_published:
            raise ProductNotPublishedError(product.id)

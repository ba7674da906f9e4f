import logging
from typing import List

from catalog.exceptions import ProductNotFoundError
from catalog.repositories.product_repository import ConsumerPrice, ProductRepository
from catalog.schemas.product import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Service class for Product operations.

    Passes calls through to the repository, turning an empty price
    search into a not-found error. Every other result or error is
    returned unchanged.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def get_all(self) -> List[Product]:
        return self.repository.get_all()

    def get_by_id(self, product_id: int) -> Product:
        return self.repository.get_by_id(product_id)

    def search_price_gt(self, price: float) -> List[Product]:
        """
        Get products priced above a threshold.

        Raises:
            ProductNotFoundError: If no product is priced above `price`
        """
        products = self.repository.search_price_gt(price)
        if not products:
            raise ProductNotFoundError("no products found")
        return products

    def consumer_price(self, product_ids: List[int]) -> ConsumerPrice:
        result = self.repository.consumer_price(product_ids)
        logger.info(
            f"Consumer price for {len(product_ids)} unit(s) "
            f"across {len(result.products)} product(s): {result.total_price:.2f}"
        )
        return result

    def create(self, product_data: ProductCreate) -> Product:
        product = self.repository.create(product_data)
        logger.info(f"Product #{product.id} created with code '{product.code_value}'")
        return product

    def update_product(self, product_id: int, product_data: ProductUpdate) -> Product:
        product = self.repository.update_product(product_id, product_data)
        logger.info(f"Product #{product_id} updated")
        return product

    def replace_product(self, product_id: int, product_data: ProductCreate) -> Product:
        product = self.repository.replace_product(product_id, product_data)
        logger.info(f"Product #{product_id} replaced")
        return product

    def delete(self, product_id: int) -> None:
        self.repository.delete(product_id)
        logger.info(f"Product #{product_id} deleted")

from typing import Optional


class CatalogError(Exception):
    """Base class for every failure raised by the catalog core."""
    pass


class ProductNotFoundError(CatalogError):
    """Exception raised when no product matches the requested id."""

    def __init__(self, message: str = "product not found", product_id: Optional[int] = None):
        super().__init__(message)
        self.product_id = product_id

    @classmethod
    def for_id(cls, product_id: int) -> "ProductNotFoundError":
        return cls(f"product {product_id} not found", product_id=product_id)


class InvalidProductError(CatalogError):
    """Exception raised when a product breaks a validation rule."""
    pass


class DuplicateCodeError(InvalidProductError):
    """Exception raised when a code value is already used by another product."""

    def __init__(self, code_value: str):
        super().__init__("code value already exists")
        self.code_value = code_value


class StockUnavailableError(CatalogError):
    """Exception raised when a product cannot be consumed."""

    def __init__(self, product_id: int, message: Optional[str] = None):
        super().__init__(message or f"product({product_id}) stock not available")
        self.product_id = product_id


class ProductNotPublishedError(StockUnavailableError, InvalidProductError):
    """
    Exception raised when consuming a product that is not published.

    It is both a stock failure (the item cannot be bought) and a
    validation failure (the request names an unsellable product).
    """

    def __init__(self, product_id: int):
        super().__init__(product_id, f"product({product_id}) is not published")


class StorageError(CatalogError):
    """Exception raised when the backing store cannot be read or written."""

    def __init__(self, message: str, product_id: Optional[int] = None):
        if product_id is not None:
            message = f"{message} (product {product_id})"
        super().__init__(message)
        self.product_id = product_id

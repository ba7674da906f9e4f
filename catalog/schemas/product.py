from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Textual date format used at the API boundary and in the JSON file
EXPIRATION_FORMAT = "%d/%m/%Y"


def validate_expiration(value: str) -> str:
    """Check that `value` is a real calendar date written as dd/mm/yyyy."""
    try:
        datetime.strptime(value, EXPIRATION_FORMAT)
    except ValueError:
        raise ValueError("invalid expiration date, must be in format: dd/mm/yyyy")
    return value


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    quantity: int = Field(..., description="Units in stock")
    code_value: str = Field(..., min_length=1, max_length=255, description="Unique product code")
    is_published: bool = Field(default=False, description="Whether the product can be bought")
    expiration: str = Field(..., description="Expiration date as dd/mm/yyyy")
    price: float = Field(..., description="Unit price")


class ProductCreate(ProductBase):
    """Schema for creating a product or fully replacing one."""
    quantity: int = Field(..., gt=0, description="Units in stock (must be positive)")
    price: float = Field(..., gt=0, description="Unit price (must be positive)")

    @field_validator("expiration")
    @classmethod
    def check_expiration(cls, value: str) -> str:
        return validate_expiration(value)


class ProductUpdate(BaseModel):
    """
    Schema for a partial update. All fields are optional.

    Empty strings and zero numbers count as "not provided", so only
    non-empty, non-zero values overwrite the stored product.
    """
    name: Optional[str] = Field(None, max_length=255)
    quantity: Optional[int] = None
    code_value: Optional[str] = Field(None, max_length=255)
    is_published: Optional[bool] = None
    expiration: Optional[str] = None
    price: Optional[float] = None

    @field_validator("expiration")
    @classmethod
    def check_expiration(cls, value: Optional[str]) -> Optional[str]:
        if value:
            return validate_expiration(value)
        return value

    @classmethod
    def from_create(cls, product: ProductCreate) -> "ProductUpdate":
        return cls(**product.model_dump())

    def changes(self) -> dict:
        """Return the fields that win over the stored values."""
        changed = {}
        for field, value in self.model_dump().items():
            if value is None:
                continue
            if field != "is_published" and not value:
                continue
            changed[field] = value
        return changed

    def apply_to(self, product: "Product") -> "Product":
        """Merge the provided fields onto `product`, returning a new record."""
        return product.model_copy(update=self.changes())


class Product(ProductBase):
    """Stored product, as returned by every store and by the API."""
    id: int

    model_config = ConfigDict(from_attributes=True)


class ConsumerPriceResponse(BaseModel):
    """Schema for the consumer price of a list of products."""
    products: list[Product]
    total_price: float

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from catalog.api.security import require_token
from catalog.exceptions import (
    CatalogError,
    InvalidProductError,
    ProductNotFoundError,
    StockUnavailableError,
)
from catalog.schemas.product import (
    ConsumerPriceResponse,
    Product,
    ProductCreate,
    ProductUpdate,
)
from catalog.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"], dependencies=[Depends(require_token)])


def get_product_service(request: Request) -> ProductService:
    """Dependency returning the service built at startup."""
    return request.app.state.container.service


def http_error(error: CatalogError) -> HTTPException:
    """Translate a catalog failure into the matching HTTP error."""
    if isinstance(error, ProductNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (InvalidProductError, StockUnavailableError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="storage failure"
    )


def parse_id_list(raw: str) -> List[int]:
    """Parse `1,2,3` or `[1,2,3]` into a list of ids."""
    items = raw.replace("[", "").replace("]", "").split(",")
    try:
        return [int(item.strip()) for item in items]
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid id")


@router.get(
    "",
    response_model=List[Product],
    summary="List all products",
    description="Get every product in the catalog."
)
def list_products(service: ProductService = Depends(get_product_service)):
    """Get all products."""
    try:
        return service.get_all()
    except CatalogError as e:
        raise http_error(e)


@router.get(
    "/search",
    response_model=List[Product],
    summary="Search products by price",
    description="Get the products whose price is greater than `priceGt`. A non-numeric `priceGt` is rejected with 422."
)
def search_products(
    price_gt: float = Query(..., alias="priceGt", description="Price lower bound (exclusive)"),
    service: ProductService = Depends(get_product_service)
):
    """Returns 404 when no product is priced above the threshold."""
    try:
        return service.search_price_gt(price_gt)
    except CatalogError as e:
        raise http_error(e)


@router.get(
    "/consumer_price",
    response_model=ConsumerPriceResponse,
    summary="Price a list of products",
    description="""
    Compute the consumer price of a list of product ids.

    Repeated ids consume one more unit of the same product. The total is
    multiplied by a tier factor picked by the number of units:
    - up to 10 units: 1.21
    - 11 to 19 units: 1.17
    - 20 units or more: 1.15

    Stock is not modified; the returned quantities show what would be
    left after the purchase.
    """
)
def consumer_price(
    ids: str = Query(..., alias="list", description="Product ids, e.g. [1,2,2]"),
    service: ProductService = Depends(get_product_service)
):
    product_ids = parse_id_list(ids)
    try:
        result = service.consumer_price(product_ids)
    except CatalogError as e:
        raise http_error(e)
    return ConsumerPriceResponse(products=result.products, total_price=result.total_price)


@router.get(
    "/{product_id}",
    response_model=Product,
    summary="Get product by ID",
    description="Get a product by ID. A non-integer `product_id` is rejected with 422."
)
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Get a product by ID."""
    try:
        return service.get_by_id(product_id)
    except CatalogError as e:
        raise http_error(e)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product. The code value must not be used by another product."
)
def create_product(
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product.

    - **name**: Product name (required)
    - **quantity**: Units in stock, must be positive (required)
    - **code_value**: Unique product code (required)
    - **is_published**: Whether the product can be bought
    - **expiration**: Expiration date as dd/mm/yyyy (required)
    - **price**: Unit price, must be positive (required)
    """
    try:
        return service.create(product_data)
    except CatalogError as e:
        raise http_error(e)


@router.put(
    "/{product_id}",
    response_model=Product,
    summary="Replace a product",
    description="Replace every field of a product. The id is kept. A non-integer `product_id` is rejected with 422."
)
def replace_product(
    product_id: int,
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    try:
        return service.replace_product(product_id, product_data)
    except CatalogError as e:
        raise http_error(e)


@router.patch(
    "/{product_id}",
    response_model=Product,
    summary="Update a product",
    description="Update product details. Only non-empty, non-zero fields are applied. A non-integer `product_id` is rejected with 422."
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    try:
        return service.update_product(product_id, product_data)
    except CatalogError as e:
        raise http_error(e)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Delete a product by ID. A non-integer `product_id` is rejected with 422."
)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Delete a product."""
    try:
        service.delete(product_id)
    except CatalogError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

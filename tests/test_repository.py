"""Tests for the product repository business rules."""
import pytest

from catalog.exceptions import (
    DuplicateCodeError,
    InvalidProductError,
    ProductNotFoundError,
    ProductNotPublishedError,
    StockUnavailableError,
)
from catalog.repositories.product_repository import tier_multiplier
from catalog.schemas.product import ProductUpdate
from conftest import make_product


@pytest.fixture
def catalog(repository):
    """Product A (10.0, 5 units) and product B (20.0, 1 unit), both published."""
    a = repository.create(make_product(name="A", code_value="A", price=10.0, quantity=5))
    b = repository.create(make_product(name="B", code_value="B", price=20.0, quantity=1))
    return a, b


def test_create_duplicate_code_fails(repository):
    """Test a code value can only be used once, whatever the other fields."""
    repository.create(make_product(code_value="DUP"))

    with pytest.raises(DuplicateCodeError):
        repository.create(make_product(name="Other", price=1.0, quantity=1, code_value="DUP"))
    assert len(repository.get_all()) == 1


def test_duplicate_code_is_a_validation_error(repository):
    repository.create(make_product(code_value="DUP"))

    with pytest.raises(InvalidProductError, match="code value already exists"):
        repository.create(make_product(code_value="DUP"))


def test_update_keeps_own_code(repository):
    """Test updating a product without changing its code is allowed."""
    product = repository.create(make_product(code_value="OWN"))

    updated = repository.update_product(product.id, ProductUpdate(code_value="OWN", price=5.0))

    assert updated.code_value == "OWN"
    assert updated.price == 5.0


def test_update_to_taken_code_fails(repository):
    """Test a product cannot take another product's code."""
    repository.create(make_product(code_value="A"))
    b = repository.create(make_product(code_value="B"))

    with pytest.raises(DuplicateCodeError):
        repository.update_product(b.id, ProductUpdate(code_value="A"))


def test_replace_product(repository):
    """Test a full replacement overwrites every field and keeps the id."""
    product = repository.create(make_product(code_value="OLD", is_published=True))

    replaced = repository.replace_product(
        product.id,
        make_product(name="New", code_value="NEW", quantity=2, price=3.0,
                     is_published=False, expiration="01/02/2031"),
    )

    assert replaced.id == product.id
    assert replaced.name == "New"
    assert replaced.code_value == "NEW"
    assert replaced.quantity == 2
    assert replaced.price == 3.0
    assert replaced.is_published is False
    assert replaced.expiration == "01/02/2031"


def test_replace_missing_product(repository):
    with pytest.raises(ProductNotFoundError):
        repository.replace_product(9999, make_product())


def test_search_price_gt(repository):
    """Test the search returns exactly the products above the threshold."""
    for code, price in (("A", 5.0), ("B", 15.0), ("C", 10.0), ("D", 30.0)):
        repository.create(make_product(code_value=code, price=price))

    result = repository.search_price_gt(10.0)

    assert [p.code_value for p in result] == ["B", "D"]
    assert repository.search_price_gt(30.0) == []


def test_consumer_price_repeats(repository, catalog):
    """Test repeated ids consume more units and the total gets the tier multiplier."""
    a, b = catalog

    result = repository.consumer_price([a.id, a.id, b.id])

    assert [p.id for p in result.products] == [a.id, b.id]
    assert result.products[0].quantity == 3
    assert result.products[1].quantity == 0
    assert result.total_price == pytest.approx(40 * 1.21)


def test_consumer_price_does_not_persist_stock(repository, catalog):
    """Test computing a price leaves stored quantities untouched."""
    a, b = catalog

    repository.consumer_price([a.id, a.id, b.id])

    assert repository.get_by_id(a.id).quantity == 5
    assert repository.get_by_id(b.id).quantity == 1


def test_consumer_price_stock_exhausted(repository, catalog):
    """Test consuming more units than in stock fails on the first missing unit."""
    a, b = catalog

    with pytest.raises(StockUnavailableError, match=rf"product\({b.id}\) stock not available"):
        repository.consumer_price([a.id, a.id, b.id, b.id])


def test_consumer_price_not_published(repository):
    """Test an unpublished product cannot be priced."""
    hidden = repository.create(make_product(code_value="HIDDEN", is_published=False))

    with pytest.raises(ProductNotPublishedError, match="is not published") as exc_info:
        repository.consumer_price([hidden.id])

    assert isinstance(exc_info.value, InvalidProductError)
    assert isinstance(exc_info.value, StockUnavailableError)


def test_consumer_price_no_stock(repository):
    """Test a product stored with no units cannot be priced."""
    product = repository.create(make_product(code_value="EMPTY", quantity=1))
    repository.update_product(product.id, ProductUpdate(quantity=-1))

    with pytest.raises(StockUnavailableError):
        repository.consumer_price([product.id])


def test_consumer_price_unknown_id(repository, catalog):
    """Test an unknown id aborts the whole computation."""
    a, _ = catalog

    with pytest.raises(ProductNotFoundError):
        repository.consumer_price([a.id, 9999])


def test_consumer_price_empty_list(repository):
    result = repository.consumer_price([])

    assert result.products == []
    assert result.total_price == 0.0


@pytest.mark.parametrize(
    "units, multiplier",
    [(1, 1.21), (10, 1.21), (11, 1.17), (19, 1.17), (20, 1.15), (35, 1.15)],
)
def test_tier_multiplier(units, multiplier):
    assert tier_multiplier(units) == multiplier


@pytest.mark.parametrize("units, multiplier", [(10, 1.21), (19, 1.17), (20, 1.15)])
def test_consumer_price_tier_boundaries(repository, units, multiplier):
    """Test the tier is chosen by the number of units consumed."""
    product = repository.create(make_product(code_value="BULK", price=2.0, quantity=50))

    result = repository.consumer_price([product.id] * units)

    assert result.products[0].quantity == 50 - units
    assert result.total_price == pytest.approx(2.0 * units * multiplier)

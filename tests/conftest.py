import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import Base, create_db_engine, create_session_factory
from catalog.main import create_app
from catalog.repositories.product_repository import ProductRepository
from catalog.schemas.product import ProductCreate
from catalog.store.json_store import JsonProductStore
from catalog.store.sql_store import SqlProductStore

TEST_TOKEN = "test-token"

# Test database (SQLite in-memory for testing)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


def make_product(**overrides) -> ProductCreate:
    """Build a valid product payload, overriding any field."""
    data = {
        "name": "Test Product",
        "quantity": 10,
        "code_value": "CODE-1",
        "is_published": True,
        "expiration": "15/12/2030",
        "price": 99.99,
    }
    data.update(overrides)
    return ProductCreate(**data)


@pytest.fixture(scope="function")
def json_store(tmp_path):
    """JSON file store on an empty array file."""
    store = JsonProductStore(tmp_path / "products.json")
    store.ensure_file()
    return store


@pytest.fixture(scope="function")
def sql_store():
    """Relational store on a fresh in-memory database."""
    engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
    Base.metadata.create_all(bind=engine)

    yield SqlProductStore(create_session_factory(engine))

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function", params=["json", "sql"])
def store(request):
    """Each store backend in turn."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture(scope="function")
def repository(store):
    return ProductRepository(store)


@pytest.fixture(scope="function")
def client(store):
    """Create test client on top of each store backend."""
    settings = Settings(TOKEN=TEST_TOKEN, _env_file=None)
    app = create_app(settings, store=store)

    with TestClient(app) as test_client:
        test_client.headers.update({"TOKEN": TEST_TOKEN})
        yield test_client

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite gets a single shared connection when in-memory so every
    session sees the same database; other backends use a connection pool.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory handed to the SQL product store."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

from collections.abc import AsyncGenerator, Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.engine import URL, Engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import Session

from storefront.database.config.connection_engine import (
    create_schema,
    create_schema_async,
    make_async_engine,
    make_engine,
)
from storefront.database.entities import Order, User
from storefront.database.helpers import transactionManagement

MEMORY_URL = URL.create("sqlite", database=":memory:")
ASYNC_MEMORY_URL = URL.create("sqlite+aiosqlite", database=":memory:")

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_engine() -> Generator[Engine, Any, None]:
    """Fresh in-memory SQLite database with the schema created, one per test."""
    engine = make_engine(MEMORY_URL)
    create_schema(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, Any, None]:
    """Session on the in-memory database; rolled back and closed after the test."""
    session = Session(db_engine)

    yield session

    session.rollback()
    session.close()


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database served through aiosqlite."""
    engine = make_async_engine(ASYNC_MEMORY_URL)
    await create_schema_async(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    session = AsyncSession(async_engine, expire_on_commit=False)

    yield session

    await session.rollback()
    await session.close()


@pytest.fixture
def bound_engine(db_engine) -> Generator[Engine, Any, None]:
    """Point the `@transactional` service layer at the test database."""
    original = transactionManagement.SessionFactory.kw.get("bind")
    transactionManagement.bind_engine(db_engine)

    yield db_engine

    transactionManagement.bind_engine(original)


@pytest_asyncio.fixture
async def bound_async_engine(async_engine) -> AsyncGenerator[AsyncEngine, None]:
    """Point the `@async_transactional` service layer at the async test database."""
    original = transactionManagement.AsyncSessionFactory.kw.get("bind")
    transactionManagement.bind_async_engine(async_engine)

    yield async_engine

    transactionManagement.bind_async_engine(original)


@pytest.fixture
def client(bound_engine) -> Generator[TestClient, Any, None]:
    from storefront.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user():
    def _make(name: str = "ada", email: str | None = None, full_name: str | None = None) -> User:
        return User(user_name=name, email=email or f"{name}@example.com", full_name=full_name)

    return _make


@pytest.fixture
def make_order():
    def _make(user: User, product: str = "pen", quantity: int = 1, unit_price="1.00", minutes: int = 0, status="pending"):
        return Order(
            user_id=user.id,
            product_name=product,
            quantity=quantity,
            unit_price=unit_price,
            status=status,
            created_on=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make

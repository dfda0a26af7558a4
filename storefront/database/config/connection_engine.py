"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Builds the SQLAlchemy connection URL (sync and async) from environment-backed settings.
- Creates the Engine (connection pool + SQL execution entry point) and, lazily, the AsyncEngine.
- Defines shared MetaData, with a constraint naming convention, for table and schema objects.
- Exposes a Declarative Base class for ORM models.
- Creates and drops the schema for both engine flavours.

Notes
-----
- Uses `URL.create(...)` to keep configuration environment-driven.
- `:memory:` SQLite databases are served through a `StaticPool`, so every session of
  an engine talks to the same single connection (and therefore the same database).
  A sync engine and an async engine never share an in-memory database.
- SQLite connections switch on `PRAGMA foreign_keys` so cascades behave as on a server.
- All ORM models must inherit from `declarativeBase` to be part of `metadata`.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import MetaData

from storefront.database.config.config import Settings, settings
from storefront.database.exceptions import UnsupportedDriverError

logger = logging.getLogger(__name__)

ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
    "postgresql": "postgresql+asyncpg",
}
"""Async driver used for each backend when `DB_ASYNC_DRIVER_NAME` is not set."""

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
"""Deterministic constraint names, so autogenerated migrations stay stable."""


def async_driver_for(driver_name: str) -> str:
    """Return the async driver matching a sync driver name (``postgresql+psycopg`` -> ``postgresql+asyncpg``)."""
    backend = driver_name.split("+", 1)[0]
    try:
        return ASYNC_DRIVERS[backend]
    except KeyError:
        raise UnsupportedDriverError(driver_name) from None


def build_connection_url(config: Settings, asynchronous: bool = False) -> URL:
    """
    Construct the SQLAlchemy connection URL from settings.

    Parameters
    ----------
    config : Settings
        Settings to read the `DB_*` values from.
    asynchronous : bool
        Build the URL for the async driver instead of the sync one.

    Returns
    -------
    URL
        The connection URL.

    Raises
    ------
    UnsupportedDriverError
        If an async URL is requested for a driver with no known async counterpart.
    """
    drivername = config.DB_DRIVER_NAME
    if asynchronous:
        drivername = config.DB_ASYNC_DRIVER_NAME or async_driver_for(drivername)
    return URL.create(
        drivername=drivername,
        username=config.DB_USERNAME,
        password=config.DB_PASSWORD,
        host=config.DB_HOST,
        port=config.DB_PORT,
        database=config.DB_DATABASE_NAME,
    )


def is_in_memory(url: URL) -> bool:
    """True for SQLite URLs that point at a private in-memory database."""
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _engine_options(url: URL, echo: bool) -> dict:
    options = {"echo": echo}
    if is_in_memory(url):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    return options


def make_engine(url: URL, echo: bool = False) -> Engine:
    """Create a sync Engine; in-memory SQLite shares a single connection."""
    engine = create_engine(url, **_engine_options(url, echo))
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def make_async_engine(url: URL, echo: bool = False) -> AsyncEngine:
    """Create an AsyncEngine; in-memory SQLite shares a single connection."""
    engine = create_async_engine(url, **_engine_options(url, echo))
    if url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


# --------------------------------------------------------------------
# Engine object: core interface to the database.
# --------------------------------------------------------------------
connection_url = build_connection_url(settings)
"""Sync connection URL built from Settings."""

connection_engine = make_engine(connection_url, echo=settings.DB_ECHO)
"""Engine object: manages connections, executes SQL, and pools."""

_async_engine: Optional[AsyncEngine] = None


def get_async_engine() -> AsyncEngine:
    """Return the process-wide AsyncEngine, creating it on first use."""
    global _async_engine
    if _async_engine is None:
        url = build_connection_url(settings, asynchronous=True)
        logger.debug("Creating async engine for %s", url.render_as_string(hide_password=True))
        _async_engine = make_async_engine(url, echo=settings.DB_ECHO)
    return _async_engine


async def dispose_async_engine() -> None:
    """Dispose the process-wide AsyncEngine if it was ever created."""
    global _async_engine
    if _async_engine is not None:
        await _async_engine.dispose()
        _async_engine = None


# --------------------------------------------------------------------
# Metadata object and Declarative Base shared by all models.
# --------------------------------------------------------------------
metadata = MetaData(naming_convention=NAMING_CONVENTION)
"""Stores schema-level information about tables, constraints and indexes."""

declarativeBase = declarative_base(metadata=metadata)
"""Root class for ORM models."""


def load_models():
    """Import the entity modules so their tables are registered on `metadata`."""
    import storefront.database.entities  # noqa: F401


def create_schema(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    load_models()
    metadata.create_all(engine)
    logger.info("Schema created on %s", engine.url.render_as_string(hide_password=True))


def drop_schema(engine: Engine) -> None:
    """Drop every table known to the models."""
    load_models()
    metadata.drop_all(engine)
    logger.info("Schema dropped on %s", engine.url.render_as_string(hide_password=True))


async def create_schema_async(engine: AsyncEngine) -> None:
    """Async variant of `create_schema`."""
    load_models()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Schema created on %s", engine.url.render_as_string(hide_password=True))


async def drop_schema_async(engine: AsyncEngine) -> None:
    """Async variant of `drop_schema`."""
    load_models()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    logger.info("Schema dropped on %s", engine.url.render_as_string(hide_password=True))

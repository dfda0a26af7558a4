"""
FastAPI application bootstrap with: \n
- Lifespan-managed schema initialization and engine disposal \n
- The users/orders router \n

Environment contract (from `settings`): \n
- INIT_MODE: `create` builds missing tables at startup, `migrate` expects `alembic upgrade head` to have run, `none` does nothing. \n
- LOG_LEVEL: level of the `storefront` logger. \n
- DB_ECHO: echo generated SQL. \n

Run with: ``uvicorn storefront.main:app``
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront import __version__, configure_logging
from storefront.api.fast_api import router
from storefront.database.config.config import settings
from storefront.database.config.connection_engine import create_schema, dispose_async_engine
from storefront.database.helpers.transactionManagement import SessionFactory

logger = logging.getLogger("uvicorn")
"""Logger instance for capturing and emitting Uvicorn server logs."""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup (before yielding):
        * Configure the `storefront` logger.
        * If INIT_MODE == 'create', create missing tables on the engine the
          session factory is bound to.
    - On shutdown (after yielding):
        * Dispose the sync engine and, if it was created, the async engine.
    """
    configure_logging(settings.LOG_LEVEL)
    engine = SessionFactory.kw["bind"]

    if settings.INIT_MODE == "create":
        create_schema(engine)
        logger.info("Schema ready (INIT_MODE=create).")
    else:
        logger.info("Skipping schema creation (INIT_MODE=%s).", settings.INIT_MODE)

    try:
        yield
    finally:
        engine.dispose()
        await dispose_async_engine()
        logger.info("Database engines disposed.")


app = FastAPI(title="storefront", version=__version__, lifespan=lifespan)
"""FastAPI application serving the users/orders API."""

app.include_router(router)

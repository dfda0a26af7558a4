"""
Database Transaction Management
===============================

This module provides utilities for managing SQLAlchemy database sessions
using Python context variables and decorator-based transaction wrappers.

It allows seamless propagation of a database session across function calls
without explicitly threading it through arguments. Functions decorated with
``@transactional`` (or ``@async_transactional`` for coroutines) run inside a
managed transactional context.

Key features
~~~~~~~~~~~~
- Context variables storing the active sync / async session
- Implicit reuse of an existing session (nested service calls share one transaction)
- Automatic flush, commit and rollback handling
- Clean session closure after execution
- Rebindable session factories (``bind_engine`` / ``bind_async_engine``), used to
  point the whole service layer at another database, e.g. an in-memory one in tests
"""

import contextvars
import logging
from functools import wraps

from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlalchemy.orm import sessionmaker

from storefront.database.config.connection_engine import connection_engine, get_async_engine

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Context variables storing the current database sessions.
# --------------------------------------------------------------------
db_session_context = contextvars.ContextVar("db_session_context", default=None)
"""Context variable storing the active SQLAlchemy session."""

async_db_session_context = contextvars.ContextVar("async_db_session_context", default=None)
"""Context variable storing the active SQLAlchemy AsyncSession."""

SessionFactory = sessionmaker(bind=connection_engine, expire_on_commit=False)
"""Factory for sync sessions, bound to the application engine."""

AsyncSessionFactory = async_sessionmaker(expire_on_commit=False)
"""Factory for async sessions; bound to the application async engine on first use."""


def bind_engine(engine: Engine) -> None:
    """Make every new `@transactional` session use `engine`."""
    SessionFactory.configure(bind=engine)


def bind_async_engine(engine: AsyncEngine) -> None:
    """Make every new `@async_transactional` session use `engine`."""
    AsyncSessionFactory.configure(bind=engine)


def _async_factory() -> async_sessionmaker:
    if AsyncSessionFactory.kw.get("bind") is None:
        bind_async_engine(get_async_engine())
    return AsyncSessionFactory


def transactional(func):
    """
    Decorator to wrap functions in a managed SQLAlchemy transaction.

    Ensures that:
    - If a session already exists in context, it is reused.
    - Otherwise, a new session is created, committed, and closed.
    - On errors, the session is rolled back and the error re-raised.

    Parameters
    ----------
    func : callable
        The function to wrap. It must accept a `session` keyword argument.

    Returns
    -------
    callable
        The wrapped function, executed within a database transaction.

    Example
    -------
    >>> @transactional
    ... def create_user(session, user):
    ...     session.add(user)
    ...     return user
    ...
    >>> new_user = create_user(user=User(...))
    """
    @wraps(func)
    def wrap_func(*args, **kwargs):
        session = db_session_context.get()
        if session is not None:
            return func(*args, session=session, **kwargs)

        session = SessionFactory()
        token = db_session_context.set(session)
        try:
            result = func(*args, session=session, **kwargs)
            session.flush()
            session.commit()
        except Exception as e:
            logger.debug("Rolling back transaction of %s: %s", func.__qualname__, e)
            session.rollback()
            raise e
        finally:
            session.close()
            db_session_context.reset(token)

        return result

    return wrap_func


def async_transactional(func):
    """
    Async counterpart of :func:`transactional` for coroutine functions.

    The wrapped coroutine receives an ``AsyncSession`` as its `session`
    keyword argument.
    """
    @wraps(func)
    async def wrap_func(*args, **kwargs):
        session = async_db_session_context.get()
        if session is not None:
            return await func(*args, session=session, **kwargs)

        session = _async_factory()()
        token = async_db_session_context.set(session)
        try:
            result = await func(*args, session=session, **kwargs)
            await session.flush()
            await session.commit()
        except Exception as e:
            logger.debug("Rolling back transaction of %s: %s", func.__qualname__, e)
            await session.rollback()
            raise e
        finally:
            await session.close()
            async_db_session_context.reset(token)

        return result

    return wrap_func

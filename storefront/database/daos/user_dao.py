"""
User DAO

Purpose
-------
Thin data-access layer for the `User` ORM entity. Provides:
- Creation
- Lookup by id, user name or email, and paged listing
- Email and display-name updates through change tracking
- Deletion (cascading to the user's orders) and counting

Every method has an ``...Async`` twin taking an ``AsyncSession`` with the
same semantics.

Design
------
- The DAO expects an active SQLAlchemy `Session` / `AsyncSession` supplied by the
  caller and never commits. Transaction boundaries live in the service layer.
- Statements are built once (module-level helpers) and executed by both the
  sync and async variants.
- Updates load the row, assign attributes and ``flush()``; the ORM notices the
  modified attributes and emits an ``UPDATE`` for those columns only.

Usage
-----
.. code-block:: python

    from sqlalchemy.orm import Session
    from storefront.database.config.connection_engine import connection_engine
    from storefront.database.entities.user import User
    from storefront.database.daos.user_dao import UserDao

    dao = UserDao()
    with Session(connection_engine) as session:
        user = dao.createUser(session, User(user_name="ada", email="ada@example.com"))
        session.commit()  # caller controls commit

        dao.updateUserEmail(session, user.id, "ada@lovelace.dev")
        session.commit()

Error Handling
--------------
- Each method logs the failure with ``logger.exception`` and re-raises.
- `fetchSingleUser` and the update methods raise `NoResultFound` when the row
  is missing; updates may raise `IntegrityError` on unique violations at flush.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from storefront.database.entities.user import User

logger = logging.getLogger(__name__)


def _by_name(username: str):
    return select(User).where(User.user_name == username)


def _by_email(email: str):
    return select(User).where(User.email == email)


def _by_id(user_id: UUID):
    return select(User).where(User.id == user_id)


def _listing(limit: Optional[int], offset: Optional[int]):
    stmt = select(User).order_by(User.user_name)
    if offset is not None:
        stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


_count = select(func.count()).select_from(User)


class UserDao:
    """
    Data Access Object (DAO) for managing User entities.
    Provides CRUD operations on the `app_user` table.
    """

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------
    def createUser(self, session: Session, user: User) -> User:
        """
        Stage a new user for insertion.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user : User
            User entity to add.

        Returns
        -------
        User
            The same entity, now pending in the session.
        """
        try:
            session.add(user)
            return user
        except Exception as e:
            logger.exception("Error in UserDao.createUser")
            raise e

    async def createUserAsync(self, session: AsyncSession, user: User) -> User:
        try:
            session.add(user)
            return user
        except Exception as e:
            logger.exception("Error in UserDao.createUserAsync")
            raise e

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    def fetchUserById(self, session: Session, user_id: UUID) -> Optional[User]:
        """
        Fetch a user by primary key, consulting the identity map first.

        Returns
        -------
        User | None
            The user, or None when no row has this id.
        """
        try:
            return session.get(User, user_id)
        except Exception as e:
            logger.exception("Error in UserDao.fetchUserById")
            raise e

    async def fetchUserByIdAsync(self, session: AsyncSession, user_id: UUID) -> Optional[User]:
        try:
            return await session.get(User, user_id)
        except Exception as e:
            logger.exception("Error in UserDao.fetchUserByIdAsync")
            raise e

    def fetchUser(self, session: Session, username: str) -> List[User]:
        """
        Fetch a user by user name.

        Returns
        -------
        list[User]
            A list containing the matching user (at most one due to limit(1)).
        """
        try:
            return list(session.execute(_by_name(username).limit(1)).scalars().all())
        except Exception as e:
            logger.exception("Error in UserDao.fetchUser")
            raise e

    async def fetchUserAsync(self, session: AsyncSession, username: str) -> List[User]:
        try:
            result = await session.execute(_by_name(username).limit(1))
            return list(result.scalars().all())
        except Exception as e:
            logger.exception("Error in UserDao.fetchUserAsync")
            raise e

    def fetchUserByEmail(self, session: Session, email: str) -> List[User]:
        """
        Fetch a user by email.

        Returns
        -------
        list[User]
            A list containing the matching user (at most one due to limit(1)).
        """
        try:
            return list(session.execute(_by_email(email).limit(1)).scalars().all())
        except Exception as e:
            logger.exception("Error in UserDao.fetchUserByEmail")
            raise e

    async def fetchUserByEmailAsync(self, session: AsyncSession, email: str) -> List[User]:
        try:
            result = await session.execute(_by_email(email).limit(1))
            return list(result.scalars().all())
        except Exception as e:
            logger.exception("Error in UserDao.fetchUserByEmailAsync")
            raise e

    def fetchUsers(self, session: Session, limit: Optional[int] = None, offset: Optional[int] = None) -> List[User]:
        """
        List users ordered by user name.

        Parameters
        ----------
        limit : int, optional
            Maximum number of users to return.
        offset : int, optional
            Number of users to skip.
        """
        try:
            return list(session.execute(_listing(limit, offset)).scalars().all())
        except Exception as e:
            logger.exception("Error in UserDao.fetchUsers")
            raise e

    async def fetchUsersAsync(
        self, session: AsyncSession, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[User]:
        try:
            result = await session.execute(_listing(limit, offset))
            return list(result.scalars().all())
        except Exception as e:
            logger.exception("Error in UserDao.fetchUsersAsync")
            raise e

    def fetchSingleUser(self, session: Session, username: str) -> User:
        """
        Fetch exactly one user by user name.

        Raises
        ------
        NoResultFound
            If no user has this name.
        """
        try:
            return session.execute(_by_name(username)).scalar_one()
        except Exception as e:
            logger.exception("Error in UserDao.fetchSingleUser")
            raise e

    async def fetchSingleUserAsync(self, session: AsyncSession, username: str) -> User:
        try:
            result = await session.execute(_by_name(username))
            return result.scalar_one()
        except Exception as e:
            logger.exception("Error in UserDao.fetchSingleUserAsync")
            raise e

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------
    def updateUserEmail(self, session: Session, user_id: UUID, email: str) -> User:
        """
        Change a user's email.

        Raises
        ------
        NoResultFound
            If the user does not exist.
        IntegrityError
            If the email belongs to another user.
        """
        try:
            user = session.execute(_by_id(user_id)).scalar_one()
            user.email = email
            session.flush()
            return user
        except Exception as e:
            logger.exception("Error in UserDao.updateUserEmail")
            raise e

    async def updateUserEmailAsync(self, session: AsyncSession, user_id: UUID, email: str) -> User:
        try:
            user = (await session.execute(_by_id(user_id))).scalar_one()
            user.email = email
            await session.flush()
            return user
        except Exception as e:
            logger.exception("Error in UserDao.updateUserEmailAsync")
            raise e

    def updateUserFullName(self, session: Session, user_id: UUID, full_name: Optional[str]) -> User:
        """Change a user's display name. Raises `NoResultFound` if the user does not exist."""
        try:
            user = session.execute(_by_id(user_id)).scalar_one()
            user.full_name = full_name
            session.flush()
            return user
        except Exception as e:
            logger.exception("Error in UserDao.updateUserFullName")
            raise e

    async def updateUserFullNameAsync(self, session: AsyncSession, user_id: UUID, full_name: Optional[str]) -> User:
        try:
            user = (await session.execute(_by_id(user_id))).scalar_one()
            user.full_name = full_name
            await session.flush()
            return user
        except Exception as e:
            logger.exception("Error in UserDao.updateUserFullNameAsync")
            raise e

    # ------------------------------------------------------------------
    # Delete / count
    # ------------------------------------------------------------------
    def deleteUser(self, session: Session, user_id: UUID) -> bool:
        """
        Delete a user and, through the cascade, their orders.

        Returns
        -------
        bool
            True if a user was deleted, False if none had this id.
        """
        try:
            user = session.get(User, user_id)
            if user is None:
                return False
            session.delete(user)
            session.flush()
            return True
        except Exception as e:
            logger.exception("Error in UserDao.deleteUser")
            raise e

    async def deleteUserAsync(self, session: AsyncSession, user_id: UUID) -> bool:
        try:
            user = await session.get(User, user_id)
            if user is None:
                return False
            await session.delete(user)
            await session.flush()
            return True
        except Exception as e:
            logger.exception("Error in UserDao.deleteUserAsync")
            raise e

    def countUsers(self, session: Session) -> int:
        try:
            return session.execute(_count).scalar_one()
        except Exception as e:
            logger.exception("Error in UserDao.countUsers")
            raise e

    async def countUsersAsync(self, session: AsyncSession) -> int:
        try:
            return (await session.execute(_count)).scalar_one()
        except Exception as e:
            logger.exception("Error in UserDao.countUsersAsync")
            raise e

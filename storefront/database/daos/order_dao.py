"""
Order DAO

Purpose
-------
Provides a thin data-access layer for the `Order` ORM entity:
- Create orders
- Query by id, by user (newest first), by status
- First / single-result lookups per user
- Update the status through change tracking
- Delete, count, and sum the spending of a user

Every method has an ``...Async`` twin taking an ``AsyncSession``.

Design
------
- Requires an active SQLAlchemy session supplied by the caller; the DAO flushes
  but never commits.
- Single-result lookups follow the ORM's semantics:
    * ``fetchFirstOrder``        → oldest order or ``None``
    * ``fetchSingleOrder``       → exactly one row, else ``NoResultFound`` /
      ``MultipleResultsFound``
    * ``fetchSingleOrderOrNone`` → ``None`` for zero rows, ``MultipleResultsFound``
      for more than one

Usage
-----
.. code-block:: python

    from sqlalchemy.orm import Session
    from storefront.database.entities.order import Order
    from storefront.database.daos.order_dao import OrderDao

    dao = OrderDao()
    with Session(connection_engine) as session:
        dao.createOrder(session, Order(user_id=user.id, product_name="Pen", quantity=2, unit_price="1.50"))
        session.commit()

        orders = dao.fetchOrdersByUserId(session, user.id)
        dao.updateOrderStatus(session, orders[0].id, "paid")
        session.commit()
"""

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from storefront.database.entities.order import Order, OrderStatus

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _by_id(order_id: UUID):
    return select(Order).where(Order.id == order_id)


def _by_user(user_id: UUID):
    return select(Order).where(Order.user_id == user_id)


def _newest_first(user_id: UUID):
    return _by_user(user_id).order_by(desc(Order.created_on))


def _oldest(user_id: UUID):
    return _by_user(user_id).order_by(Order.created_on).limit(1)


def _by_status(status: str):
    return select(Order).where(Order.status == status).order_by(Order.created_on)


def _count(user_id: Optional[UUID]):
    stmt = select(func.count()).select_from(Order)
    if user_id is not None:
        stmt = stmt.where(Order.user_id == user_id)
    return stmt


def _user_total(user_id: UUID):
    return select(func.coalesce(func.sum(Order.quantity * Order.unit_price), 0)).where(
        Order.user_id == user_id,
        Order.status != OrderStatus.CANCELLED.value,
    )


def _to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS)


class OrderDao:
    """
    Data Access Object (DAO) for managing Order entities.
    Provides CRUD operations on the `customer_order` table.
    """

    def createOrder(self, session: Session, order: Order) -> Order:
        """
        Stage a new order for insertion.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        order : Order
            Order entity instance to be added.
        """
        try:
            session.add(order)
            return order
        except Exception as e:
            logger.exception("Error in OrderDao.createOrder")
            raise e

    async def createOrderAsync(self, session: AsyncSession, order: Order) -> Order:
        try:
            session.add(order)
            return order
        except Exception as e:
            logger.exception("Error in OrderDao.createOrderAsync")
            raise e

    def fetchOrderById(self, session: Session, order_id: UUID) -> Optional[Order]:
        try:
            return session.get(Order, order_id)
        except Exception as e:
            logger.exception("Error in OrderDao.fetchOrderById")
            raise e

    async def fetchOrderByIdAsync(self, session: AsyncSession, order_id: UUID) -> Optional[Order]:
        try:
            return await session.get(Order, order_id)
        except Exception as e:
            logger.exception("Error in OrderDao.fetchOrderByIdAsync")
            raise e

    def fetchOrdersByUserId(self, session: Session, user_id: UUID) -> List[Order]:
        """
        Fetch all orders of a user, most recent first.

        Returns
        -------
        list[Order]
            Orders for the given user.
        """
        try:
            return list(session.execute(_newest_first(user_id)).scalars().all())
        except Exception as e:
            logger.exception("Error in OrderDao.fetchOrdersByUserId")
            raise e

    async def fetchOrdersByUserIdAsync(self, session: AsyncSession, user_id: UUID) -> List[Order]:
        try:
            result = await session.execute(_newest_first(user_id))
            return list(result.scalars().all())
        except Exception as e:
            logger.exception("Error in OrderDao.fetchOrdersByUserIdAsync")
            raise e

    def fetchOrdersByStatus(self, session: Session, status: str) -> List[Order]:
        """Fetch every order in the given status, oldest first."""
        try:
            return list(session.execute(_by_status(status)).scalars().all())
        except Exception as e:
            logger.exception("Error in OrderDao.fetchOrdersByStatus")
            raise e

    async def fetchOrdersByStatusAsync(self, session: AsyncSession, status: str) -> List[Order]:
        try:
            result = await session.execute(_by_status(status))
            return list(result.scalars().all())
        except Exception as e:
            logger.exception("Error in OrderDao.fetchOrdersByStatusAsync")
            raise e

    def fetchFirstOrder(self, session: Session, user_id: UUID) -> Optional[Order]:
        """Return the oldest order of a user, or None if they have none."""
        try:
            return session.execute(_oldest(user_id)).scalars().first()
        except Exception as e:
            logger.exception("Error in OrderDao.fetchFirstOrder")
            raise e

    async def fetchFirstOrderAsync(self, session: AsyncSession, user_id: UUID) -> Optional[Order]:
        try:
            result = await session.execute(_oldest(user_id))
            return result.scalars().first()
        except Exception as e:
            logger.exception("Error in OrderDao.fetchFirstOrderAsync")
            raise e

    def fetchSingleOrder(self, session: Session, user_id: UUID) -> Order:
        """
        Return the only order of a user.

        Raises
        ------
        NoResultFound
            If the user has no orders.
        MultipleResultsFound
            If the user has more than one order.
        """
        try:
            return session.execute(_by_user(user_id)).scalar_one()
        except Exception as e:
            logger.exception("Error in OrderDao.fetchSingleOrder")
            raise e

    async def fetchSingleOrderAsync(self, session: AsyncSession, user_id: UUID) -> Order:
        try:
            result = await session.execute(_by_user(user_id))
            return result.scalar_one()
        except Exception as e:
            logger.exception("Error in OrderDao.fetchSingleOrderAsync")
            raise e

    def fetchSingleOrderOrNone(self, session: Session, user_id: UUID) -> Optional[Order]:
        """
        Return the only order of a user, or None if they have none.

        Raises
        ------
        MultipleResultsFound
            If the user has more than one order.
        """
        try:
            return session.execute(_by_user(user_id)).scalar_one_or_none()
        except Exception as e:
            logger.exception("Error in OrderDao.fetchSingleOrderOrNone")
            raise e

    async def fetchSingleOrderOrNoneAsync(self, session: AsyncSession, user_id: UUID) -> Optional[Order]:
        try:
            result = await session.execute(_by_user(user_id))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.exception("Error in OrderDao.fetchSingleOrderOrNoneAsync")
            raise e

    def updateOrderStatus(self, session: Session, order_id: UUID, status: str) -> Order:
        """
        Set the status of an order.

        Raises
        ------
        NoResultFound
            If the order does not exist.
        """
        try:
            order = session.execute(_by_id(order_id)).scalar_one()
            order.status = status
            session.flush()
            return order
        except Exception as e:
            logger.exception("Error in OrderDao.updateOrderStatus")
            raise e

    async def updateOrderStatusAsync(self, session: AsyncSession, order_id: UUID, status: str) -> Order:
        try:
            order = (await session.execute(_by_id(order_id))).scalar_one()
            order.status = status
            await session.flush()
            return order
        except Exception as e:
            logger.exception("Error in OrderDao.updateOrderStatusAsync")
            raise e

    def deleteOrder(self, session: Session, order_id: UUID) -> bool:
        """Delete an order. Returns False if no order had this id."""
        try:
            order = session.get(Order, order_id)
            if order is None:
                return False
            session.delete(order)
            session.flush()
            return True
        except Exception as e:
            logger.exception("Error in OrderDao.deleteOrder")
            raise e

    async def deleteOrderAsync(self, session: AsyncSession, order_id: UUID) -> bool:
        try:
            order = await session.get(Order, order_id)
            if order is None:
                return False
            await session.delete(order)
            await session.flush()
            return True
        except Exception as e:
            logger.exception("Error in OrderDao.deleteOrderAsync")
            raise e

    def countOrders(self, session: Session, user_id: Optional[UUID] = None) -> int:
        """Count all orders, or only those of `user_id` when given."""
        try:
            return session.execute(_count(user_id)).scalar_one()
        except Exception as e:
            logger.exception("Error in OrderDao.countOrders")
            raise e

    async def countOrdersAsync(self, session: AsyncSession, user_id: Optional[UUID] = None) -> int:
        try:
            return (await session.execute(_count(user_id))).scalar_one()
        except Exception as e:
            logger.exception("Error in OrderDao.countOrdersAsync")
            raise e

    def fetchUserTotal(self, session: Session, user_id: UUID) -> Decimal:
        """
        Sum ``quantity * unit_price`` over the user's orders that are not cancelled.

        Returns
        -------
        Decimal
            The total, quantized to cents; ``0.00`` when there is nothing to sum.
        """
        try:
            return _to_money(session.execute(_user_total(user_id)).scalar_one())
        except Exception as e:
            logger.exception("Error in OrderDao.fetchUserTotal")
            raise e

    async def fetchUserTotalAsync(self, session: AsyncSession, user_id: UUID) -> Decimal:
        try:
            return _to_money((await session.execute(_user_total(user_id))).scalar_one())
        except Exception as e:
            logger.exception("Error in OrderDao.fetchUserTotalAsync")
            raise e

"""
Service-layer operations for users and orders.

All functions are wrapped with the `@transactional` decorator (or, for the
``_async`` variants, `@async_transactional`), which manages SQLAlchemy sessions
and transactions automatically. Each function receives the active session as
its `session` argument; callers pass every other argument by keyword.

This module validates input, orchestrates DAO calls, and turns missing rows
and unique-constraint conflicts into the domain errors of
`storefront.database.exceptions`.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from storefront.database.daos.order_dao import CENTS, OrderDao
from storefront.database.daos.user_dao import UserDao
from storefront.database.entities.order import Order, OrderStatus
from storefront.database.entities.user import User
from storefront.database.exceptions import (
    DuplicateUserError,
    InvalidOrderError,
    OrderNotFoundError,
    UserNotFoundError,
)
from storefront.database.helpers.transactionManagement import async_transactional, transactional

logger = logging.getLogger(__name__)

user_dao = UserDao()
order_dao = OrderDao()

# unit_price is NUMERIC(10, 2)
MAX_UNIT_PRICE = Decimal("99999999.99")


# --------------------------------------------------------------------
# Validation shared by the sync and async variants
# --------------------------------------------------------------------
def _validated_order_fields(product_name: str, quantity: int, unit_price):
    if not product_name or not product_name.strip():
        raise InvalidOrderError("Product name must not be empty.")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidOrderError(f"Quantity must be a positive integer, got {quantity!r}.")
    try:
        price = Decimal(str(unit_price))
    except InvalidOperation:
        raise InvalidOrderError(f"Unit price {unit_price!r} is not a number.") from None
    if not price.is_finite() or price < 0:
        raise InvalidOrderError(f"Unit price must be a non-negative amount, got {unit_price!r}.")
    if price > MAX_UNIT_PRICE:
        raise InvalidOrderError(f"Unit price must not exceed {MAX_UNIT_PRICE}, got {unit_price!r}.")
    if price != price.quantize(CENTS):
        raise InvalidOrderError(f"Unit price must not have more than two decimals, got {unit_price!r}.")
    return product_name.strip(), quantity, price.quantize(CENTS)


def _check_transition(order: Order, status: str) -> str:
    if status not in OrderStatus.values():
        raise InvalidOrderError(f"Unknown order status {status!r}.")
    if order.status == OrderStatus.CANCELLED.value and status != order.status:
        raise InvalidOrderError(f"Order {order.id} is cancelled and cannot become {status!r}.")
    return status


def _duplicate_from(username: str, email: str, by_name: list, by_email: list):
    if by_name:
        return DuplicateUserError("user name", username)
    if by_email:
        return DuplicateUserError("email", email)
    return None


# --------------------------------------------------------------------
# Users
# --------------------------------------------------------------------
@transactional
def register_user(session: Session, username: str, email: str, full_name: Optional[str] = None) -> User:
    """
    Create a new user after checking that the user name and email are free.

    Raises
    ------
    DuplicateUserError
        If the user name or the email is already registered.
    """
    duplicate = _duplicate_from(
        username,
        email,
        user_dao.fetchUser(session, username),
        user_dao.fetchUserByEmail(session, email),
    )
    if duplicate is not None:
        raise duplicate

    user = user_dao.createUser(session, User(user_name=username, email=email, full_name=full_name))
    try:
        session.flush()
    except IntegrityError:
        raise DuplicateUserError("user name or email", f"{username}, {email}") from None
    logger.info("Registered user %s", username)
    return user


@transactional
def get_user(session: Session, username: str) -> User:
    """Return the user named `username` or raise `UserNotFoundError`."""
    users = user_dao.fetchUser(session, username)
    if not users:
        raise UserNotFoundError(username)
    return users[0]


@transactional
def list_users(session: Session, limit: Optional[int] = None, offset: Optional[int] = None) -> List[User]:
    return user_dao.fetchUsers(session, limit=limit, offset=offset)


@transactional
def change_email(session: Session, username: str, email: str) -> User:
    """
    Change the email of a user.

    Raises
    ------
    UserNotFoundError
        If the user does not exist.
    DuplicateUserError
        If another user already has this email.
    """
    user = get_user(username=username)
    owners = user_dao.fetchUserByEmail(session, email)
    if owners and owners[0].id != user.id:
        raise DuplicateUserError("email", email)
    return user_dao.updateUserEmail(session, user.id, email)


@transactional
def remove_user(session: Session, username: str) -> None:
    """Delete a user together with their orders. Raises `UserNotFoundError`."""
    user = get_user(username=username)
    user_dao.deleteUser(session, user.id)
    logger.info("Removed user %s", username)


# --------------------------------------------------------------------
# Orders
# --------------------------------------------------------------------
@transactional
def place_order(session: Session, username: str, product_name: str, quantity: int, unit_price) -> Order:
    """
    Place a new pending order for a user.

    Raises
    ------
    InvalidOrderError
        If the product name is empty, the quantity is not a positive integer,
        or the unit price is negative, not a number, has more than two
        decimals or does not fit the column.
    UserNotFoundError
        If the user does not exist.
    """
    product_name, quantity, price = _validated_order_fields(product_name, quantity, unit_price)
    user = get_user(username=username)
    order = order_dao.createOrder(
        session, Order(user_id=user.id, product_name=product_name, quantity=quantity, unit_price=price)
    )
    session.flush()
    logger.info("Placed order %s for %s", order.id, username)
    return order


@transactional
def list_orders(session: Session, username: str) -> List[Order]:
    """Orders of a user, most recent first. Raises `UserNotFoundError`."""
    user = get_user(username=username)
    return order_dao.fetchOrdersByUserId(session, user.id)


@transactional
def set_order_status(session: Session, order_id: UUID, status: str) -> Order:
    """
    Move an order to another status.

    Raises
    ------
    OrderNotFoundError
        If the order does not exist.
    InvalidOrderError
        If the status is unknown or the order is already cancelled.
    """
    order = order_dao.fetchOrderById(session, order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return order_dao.updateOrderStatus(session, order.id, _check_transition(order, status))


@transactional
def user_total(session: Session, username: str) -> Decimal:
    """Amount spent by a user on orders that are not cancelled."""
    user = get_user(username=username)
    return order_dao.fetchUserTotal(session, user.id)


# --------------------------------------------------------------------
# Async variants
# --------------------------------------------------------------------
@async_transactional
async def register_user_async(
    session: AsyncSession, username: str, email: str, full_name: Optional[str] = None
) -> User:
    duplicate = _duplicate_from(
        username,
        email,
        await user_dao.fetchUserAsync(session, username),
        await user_dao.fetchUserByEmailAsync(session, email),
    )
    if duplicate is not None:
        raise duplicate

    user = await user_dao.createUserAsync(session, User(user_name=username, email=email, full_name=full_name))
    try:
        await session.flush()
    except IntegrityError:
        raise DuplicateUserError("user name or email", f"{username}, {email}") from None
    logger.info("Registered user %s", username)
    return user


@async_transactional
async def get_user_async(session: AsyncSession, username: str) -> User:
    users = await user_dao.fetchUserAsync(session, username)
    if not users:
        raise UserNotFoundError(username)
    return users[0]


@async_transactional
async def remove_user_async(session: AsyncSession, username: str) -> None:
    user = await get_user_async(username=username)
    await user_dao.deleteUserAsync(session, user.id)
    logger.info("Removed user %s", username)


@async_transactional
async def place_order_async(session: AsyncSession, username: str, product_name: str, quantity: int, unit_price) -> Order:
    product_name, quantity, price = _validated_order_fields(product_name, quantity, unit_price)
    user = await get_user_async(username=username)
    order = await order_dao.createOrderAsync(
        session, Order(user_id=user.id, product_name=product_name, quantity=quantity, unit_price=price)
    )
    await session.flush()
    logger.info("Placed order %s for %s", order.id, username)
    return order


@async_transactional
async def list_orders_async(session: AsyncSession, username: str) -> List[Order]:
    user = await get_user_async(username=username)
    return await order_dao.fetchOrdersByUserIdAsync(session, user.id)


@async_transactional
async def set_order_status_async(session: AsyncSession, order_id: UUID, status: str) -> Order:
    order = await order_dao.fetchOrderByIdAsync(session, order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return await order_dao.updateOrderStatusAsync(session, order.id, _check_transition(order, status))

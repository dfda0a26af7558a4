"""Service layer over the @transactional / @async_transactional decorators."""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from storefront.database.core import funcs
from storefront.database.daos.user_dao import UserDao
from storefront.database.exceptions import (
    DuplicateUserError,
    InvalidOrderError,
    OrderNotFoundError,
    UserNotFoundError,
)
from storefront.database.helpers.transactionManagement import db_session_context, transactional


@pytest.fixture
def ada(bound_engine):
    return funcs.register_user(username="ada", email="ada@example.com", full_name="Ada Lovelace")


class TestUsers:
    def test_register_commits(self, ada, db_engine):
        with Session(db_engine) as session:
            assert UserDao().countUsers(session) == 1
        assert funcs.get_user(username="ada").full_name == "Ada Lovelace"

    def test_register_duplicate_name(self, ada):
        with pytest.raises(DuplicateUserError) as excinfo:
            funcs.register_user(username="ada", email="other@example.com")
        assert excinfo.value.field == "user name"

    def test_register_duplicate_email(self, ada):
        with pytest.raises(DuplicateUserError) as excinfo:
            funcs.register_user(username="lovelace", email="ada@example.com")
        assert excinfo.value.field == "email"

    def test_conflict_found_on_flush(self, ada, monkeypatch):
        monkeypatch.setattr(funcs, "_duplicate_from", lambda *args: None)

        with pytest.raises(DuplicateUserError) as excinfo:
            funcs.register_user(username="lovelace", email="ada@example.com")
        assert excinfo.value.field == "user name or email"
        assert "ada@example.com" in str(excinfo.value)
        assert [u.user_name for u in funcs.list_users()] == ["ada"]

    def test_get_missing_user(self, bound_engine):
        with pytest.raises(UserNotFoundError):
            funcs.get_user(username="nobody")

    def test_list_users(self, ada):
        funcs.register_user(username="bob", email="bob@example.com")

        assert [u.user_name for u in funcs.list_users()] == ["ada", "bob"]
        assert [u.user_name for u in funcs.list_users(limit=1, offset=1)] == ["bob"]

    def test_change_email(self, ada):
        funcs.change_email(username="ada", email="ada@lovelace.dev")

        assert funcs.get_user(username="ada").email == "ada@lovelace.dev"

    def test_change_email_to_own_address(self, ada):
        assert funcs.change_email(username="ada", email="ada@example.com").email == "ada@example.com"

    def test_change_email_taken(self, ada):
        funcs.register_user(username="bob", email="bob@example.com")

        with pytest.raises(DuplicateUserError):
            funcs.change_email(username="ada", email="bob@example.com")

    def test_remove_user_removes_orders(self, ada):
        funcs.place_order(username="ada", product_name="pen", quantity=1, unit_price="1.00")

        funcs.remove_user(username="ada")

        with pytest.raises(UserNotFoundError):
            funcs.list_orders(username="ada")
        with pytest.raises(UserNotFoundError):
            funcs.remove_user(username="ada")


class TestOrders:
    def test_place_and_list(self, ada):
        first = funcs.place_order(username="ada", product_name=" pen ", quantity=2, unit_price="1.25")
        second = funcs.place_order(username="ada", product_name="ink", quantity=1, unit_price=Decimal("4"))

        assert first.product_name == "pen"
        assert first.status == "pending"
        assert {o.id for o in funcs.list_orders(username="ada")} == {first.id, second.id}
        assert funcs.user_total(username="ada") == Decimal("6.50")

    @pytest.mark.parametrize(
        "product_name, quantity, unit_price",
        [
            ("", 1, "1.00"),
            ("pen", 0, "1.00"),
            ("pen", -2, "1.00"),
            ("pen", True, "1.00"),
            ("pen", 1, "-1"),
            ("pen", 1, "abc"),
            ("pen", 1, "NaN"),
            ("pen", 1, "1.234"),
            ("pen", 1, "100000000"),
        ],
    )
    def test_invalid_orders(self, ada, product_name, quantity, unit_price):
        with pytest.raises(InvalidOrderError):
            funcs.place_order(username="ada", product_name=product_name, quantity=quantity, unit_price=unit_price)

    def test_prices_are_kept_in_cents(self, ada):
        placed = funcs.place_order(username="ada", product_name="pen", quantity=3, unit_price="1.5")

        (listed,) = funcs.list_orders(username="ada")
        assert placed.unit_price == listed.unit_price == Decimal("1.50")
        assert placed.total == listed.total == funcs.user_total(username="ada") == Decimal("4.50")

    def test_largest_price_fits(self, ada):
        order = funcs.place_order(username="ada", product_name="car", quantity=1, unit_price="99999999.990")

        assert order.unit_price == Decimal("99999999.99")

    def test_place_order_for_missing_user(self, bound_engine):
        with pytest.raises(UserNotFoundError):
            funcs.place_order(username="nobody", product_name="pen", quantity=1, unit_price="1")

    def test_status_transitions(self, ada):
        order = funcs.place_order(username="ada", product_name="pen", quantity=1, unit_price="3")

        assert funcs.set_order_status(order_id=order.id, status="paid").status == "paid"
        assert funcs.set_order_status(order_id=order.id, status="cancelled").status == "cancelled"
        assert funcs.user_total(username="ada") == Decimal("0")

        with pytest.raises(InvalidOrderError):
            funcs.set_order_status(order_id=order.id, status="shipped")

    def test_unknown_status(self, ada):
        order = funcs.place_order(username="ada", product_name="pen", quantity=1, unit_price="3")

        with pytest.raises(InvalidOrderError):
            funcs.set_order_status(order_id=order.id, status="lost")

    def test_missing_order(self, bound_engine):
        with pytest.raises(OrderNotFoundError):
            funcs.set_order_status(order_id=uuid.uuid4(), status="paid")


class TestTransactions:
    def test_failure_rolls_back_everything(self, bound_engine):
        @transactional
        def register_then_fail(session):
            funcs.register_user(username="ghost", email="ghost@example.com")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            register_then_fail()

        with pytest.raises(UserNotFoundError):
            funcs.get_user(username="ghost")

    def test_nested_calls_share_one_session(self, bound_engine):
        seen = []

        @transactional
        def outer(session):
            seen.append(session)
            funcs.register_user(username="ada", email="ada@example.com")
            seen.append(db_session_context.get())

        outer()

        assert seen[0] is seen[1]
        assert db_session_context.get() is None


class TestAsync:
    @pytest.mark.asyncio
    async def test_user_lifecycle(self, bound_async_engine):
        user = await funcs.register_user_async(username="ada", email="ada@example.com")

        assert (await funcs.get_user_async(username="ada")).id == user.id
        with pytest.raises(DuplicateUserError):
            await funcs.register_user_async(username="ada", email="x@example.com")

        await funcs.remove_user_async(username="ada")
        with pytest.raises(UserNotFoundError):
            await funcs.get_user_async(username="ada")

    @pytest.mark.asyncio
    async def test_orders(self, bound_async_engine):
        await funcs.register_user_async(username="ada", email="ada@example.com")
        order = await funcs.place_order_async(username="ada", product_name="pen", quantity=2, unit_price="1.10")

        (listed,) = await funcs.list_orders_async(username="ada")
        assert listed.id == order.id
        assert listed.total == Decimal("2.20")

        updated = await funcs.set_order_status_async(order_id=order.id, status="shipped")
        assert updated.status == "shipped"

    @pytest.mark.asyncio
    async def test_errors(self, bound_async_engine):
        with pytest.raises(UserNotFoundError):
            await funcs.place_order_async(username="nobody", product_name="pen", quantity=1, unit_price="1")
        with pytest.raises(InvalidOrderError):
            await funcs.place_order_async(username="nobody", product_name="pen", quantity=0, unit_price="1")
        with pytest.raises(OrderNotFoundError):
            await funcs.set_order_status_async(order_id=uuid.uuid4(), status="paid")

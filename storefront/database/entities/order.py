"""
Order ORM Model
===============

The ``Order`` ORM model represents a single purchase placed by a ``User``. It is
stored in the ``customer_order`` table (``order`` is a SQL keyword).

Key features
~~~~~~~~~~~~
- Client-generated UUID primary key (``id``)
- Foreign key to the owning user (``user_id`` → ``app_user.id``, ``ON DELETE CASCADE``)
- Positive quantity and non-negative unit price, enforced by check constraints
- Status limited to the values of ``OrderStatus``
- Derived ``total`` (quantity × unit price), never persisted
"""

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import VARCHAR, CheckConstraint, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database.config.connection_engine import declarativeBase
from storefront.database.entities.user import User, UTCDateTime, utcnow


class OrderStatus(str, enum.Enum):
    """Lifecycle states of an order."""

    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class Order(declarativeBase):
    """
    ORM model for the `customer_order` table.

    Attributes
    ----------
    id : UUID
        Primary key. Unique identifier for the order.
    user_id : UUID
        Foreign key reference to the `app_user` table (the buyer).
    product_name : str
        Name of the purchased product.
    quantity : int
        Number of units, strictly positive.
    unit_price : Decimal
        Price per unit with two decimals, never negative.
    status : str
        One of ``OrderStatus`` values. Defaults to ``pending``.
    created_on : datetime
        Time the order was placed (UTC).
    """

    __tablename__ = "customer_order"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="quantity_positive"),
        CheckConstraint("unit_price >= 0", name="unit_price_non_negative"),
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{value}'" for value in OrderStatus.values())),
            name="status_known",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    """Primary key. UUID of the order."""

    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    """Foreign key reference to the `app_user` table (owner)."""

    product_name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    """Name of the purchased product."""

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    """Number of units ordered."""

    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    """Price of one unit."""

    status: Mapped[str] = mapped_column(VARCHAR(32), nullable=False, default=OrderStatus.PENDING.value)
    """Current lifecycle state."""

    created_on: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    """Time the order was placed. Defaults to current UTC time."""

    user: Mapped[User] = relationship(back_populates="orders")
    """The user who placed the order."""

    def __init__(
        self,
        user_id: UUID,
        product_name: str,
        quantity: int,
        unit_price,
        status: str = OrderStatus.PENDING.value,
        created_on=None,
    ):
        """
        Initialize a new Order object.

        Parameters
        ----------
        user_id : UUID
            The ID of the user who places the order.
        product_name : str
            Name of the purchased product.
        quantity : int
            Number of units.
        unit_price : Decimal | str | int
            Price per unit; converted to ``Decimal``.
        status : str, optional
            Initial status. Defaults to ``pending``.
        created_on : datetime | str, optional
            Placement timestamp, a datetime or an ISO8601 string. Defaults to now (UTC).
        """
        self.id = uuid.uuid4()
        self.user_id = user_id
        self.product_name = product_name
        self.quantity = quantity
        self.unit_price = Decimal(str(unit_price))
        self.status = OrderStatus(status).value
        if isinstance(created_on, str):
            self.created_on = datetime.fromisoformat(created_on)
        else:
            self.created_on = created_on or utcnow()

    @property
    def total(self) -> Decimal:
        """Quantity times unit price."""
        return Decimal(self.quantity) * Decimal(self.unit_price)

    def __str__(self) -> str:
        return (
            f"Order: id:{self.id}, user: {self.user_id}, product: {self.product_name}, "
            f"quantity: {self.quantity}, status: {self.status}"
        )

"""
User ORM Model
==============

The ``User`` ORM model represents a registered customer. It maps to the
``app_user`` table (``user`` is reserved in PostgreSQL) and owns a collection
of ``Order`` rows.

Key features
~~~~~~~~~~~~
- Client-generated UUID primary key (``id``)
- Unique user name and email
- Timezone-aware ``created_on`` timestamp (UTC)
- One-to-many ``orders`` relationship; deleting a user deletes their orders
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import TEXT, VARCHAR, DateTime, TypeDecorator, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database.config.connection_engine import declarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    ``DateTime(timezone=True)`` that always hands back aware UTC datetimes.

    SQLite keeps no offset, so values are stored in UTC and naive results
    are marked as UTC when loaded. Naive input is taken to be UTC already.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class User(declarativeBase):
    """
    ORM model for the `app_user` table.

    Attributes
    ----------
    id : UUID
        Primary key. Unique identifier for the user.
    user_name : str
        Unique login name (max 64 chars).
    email : str
        Unique email address (max 255 chars).
    full_name : str | None
        Optional display name.
    created_on : datetime
        Registration timestamp.
    orders : list[Order]
        Orders placed by the user, oldest first.
    """

    __tablename__ = "app_user"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    """Primary key. UUID of the user."""

    user_name: Mapped[str] = mapped_column(VARCHAR(64), unique=True, nullable=False)
    """Login name of the user."""

    email: Mapped[str] = mapped_column(VARCHAR(255), unique=True, nullable=False)
    """Email address of the user."""

    full_name: Mapped[Optional[str]] = mapped_column(TEXT, nullable=True)
    """Display name, if given."""

    created_on: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    """Registration time. Defaults to current UTC time."""

    orders: Mapped[List["Order"]] = relationship(  # noqa: F821
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Order.created_on",
    )
    """Orders owned by this user."""

    def __init__(self, user_name: str, email: str, full_name: Optional[str] = None, created_on=None):
        """
        Initialize a new User object.

        Parameters
        ----------
        user_name : str
            Login name of the user.
        email : str
            Email address of the user.
        full_name : str, optional
            Display name.
        created_on : datetime | str, optional
            Registration timestamp, a datetime or an ISO8601 string. Defaults to now (UTC).
        """
        self.id = uuid.uuid4()
        self.user_name = user_name
        self.email = email
        self.full_name = full_name
        if isinstance(created_on, str):
            self.created_on = datetime.fromisoformat(created_on)
        else:
            self.created_on = created_on or utcnow()

    def __str__(self) -> str:
        return f"User: id:{self.id}, username: {self.user_name}, email: {self.email}"

"""
Entities Package — SQLAlchemy 2.0 ORM Models (UUID + UTC)
=========================================================

The `entities` package defines the ORM models of the application, mapping
database tables to Python classes using SQLAlchemy 2.0-typed mappings.
These classes are consumed by DAOs (`daos` package) to perform CRUD and
transactional operations.

Conventions
-----------
- Table names are snake_case singular (`app_user`, `customer_order`)
- Primary key column is `id`, a UUID generated client-side
- Foreign keys are named `<parent>_id`
- Timezone-aware timestamps (UTC)
- Relationships declared on both sides with `back_populates`

Contents
--------
- User
    A registered customer. Owns `orders`; deleting a user deletes them.

- Order
    A purchase belonging to a user.
    * Fields: `id`, `user_id` (FK → app_user.id), `product_name`, `quantity`,
      `unit_price`, `status`, `created_on`
    * `total` is derived, not stored

Importing this package registers both tables on the shared `metadata`.
"""

from storefront.database.entities.order import Order, OrderStatus
from storefront.database.entities.user import User

__all__ = ["Order", "OrderStatus", "User"]

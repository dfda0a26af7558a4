"""
DAOs Package — Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package encapsulates all interactions with the ORM entities,
providing CRUD APIs for the service layer while hiding query details.

Conventions
-----------
- SQLAlchemy 2.0 `select()` statements, shared by sync and async variants
- Every method `name(session, ...)` has a `nameAsync(async_session, ...)` twin
- Session lifecycle (open/commit/rollback) is handled by callers
- DAOs log and re-raise exceptions so upper layers decide error policy

Contents
--------
- UserDao
    * Creates users
    * Fetches users by id, name or email; lists and counts them
    * Updates email / display name
    * Deletes users (orders follow through the cascade)

- OrderDao
    * Creates orders
    * Fetches orders by id, user or status; first / single lookups
    * Updates order status
    * Deletes and counts orders; sums a user's spending
"""

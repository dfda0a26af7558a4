"""
The `helpers` package provides utility functions and decorators
that support database operations and cross-cutting concerns.

Contents
--------
- transactionManagement
    Provides tools for database transaction management:
        - Context variables (`db_session_context`, `async_db_session_context`) for propagating the active session across function calls without explicit passing
        - `@transactional` / `@async_transactional` decorators wrapping functions in a managed transaction:
            - Reuses an existing session if one is active in context
            - Creates, commits, and closes a new session otherwise
            - Rolls back the session on errors
        - `bind_engine` / `bind_async_engine` to retarget the session factories

- change_tracking
    Inspects the session's change tracking: pending inserts, dirty objects and
    per-attribute (old, new) values.

- ddl
    Renders the CREATE / DROP statements generated for the models on a given dialect.
"""

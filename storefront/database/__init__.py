"""
The `database` package is responsible for all interactions with the application's database.
It provides configuration, entity definitions, CRUD operations, and utility functions
that ensure smooth integration between the application and its data layer.

Contents:
    - config:
        Settings and the SQLAlchemy engines, metadata and declarative base.

    - entities:
        SQLAlchemy entity models (`User`, `Order`) and their conventions.

    - daos:
        Data Access Objects providing sync and `...Async` CRUD operations.

    - core:
        Service functions that connect application routers with the database
        and orchestrate higher-level operations.

    - helpers:
        Transaction decorators, change-tracking inspection and DDL rendering.

    - exceptions:
        Domain errors raised by the service layer.
"""

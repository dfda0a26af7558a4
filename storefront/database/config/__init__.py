"""
The `config` package provides the two building blocks for establishing and managing database connections.

Contents:
    - config: Configuration layer - strongly typed settings loaded from environment variables (with .env support), exposed through a singleton Settings object
    - connection_engine: Database layer - SQLAlchemy bootstrap that constructs sync and async connection URLs from those settings, creates the engines, the shared MetaData, and the declarative base for ORM models

Together they provide environment-driven configuration and a clean ORM foundation.
"""

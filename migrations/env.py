"""
Alembic environment.

Target metadata is the models' shared `metadata`; the connection URL is built
from the same settings the application uses, unless `sqlalchemy.url` is set in
``alembic.ini``. SQLite runs in batch mode so ALTER operations work there.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from storefront.database.config.config import settings
from storefront.database.config.connection_engine import build_connection_url, load_models, metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

load_models()
target_metadata = metadata


def _url():
    return config.get_main_option("sqlalchemy.url") or build_connection_url(settings)


def _is_sqlite(url) -> bool:
    return str(url).startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of running it (``alembic upgrade head --sql``)."""
    url = _url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_is_sqlite(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = _url()
    connectable = create_engine(url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=_is_sqlite(url),
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

"""The Alembic revisions build the same schema the models declare."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ALEMBIC_INI = Path(__file__).resolve().parents[1] / "alembic.ini"


@pytest.fixture
def alembic_config(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("sqlalchemy.url", url)
    return config, url


def test_upgrade_creates_tables(alembic_config):
    config, url = alembic_config

    command.upgrade(config, "head")

    engine = create_engine(url)
    inspector = inspect(engine)
    assert {"app_user", "customer_order", "alembic_version"} <= set(inspector.get_table_names())
    assert {ix["name"] for ix in inspector.get_indexes("customer_order")} == {"ix_customer_order_user_id"}
    (fk,) = inspector.get_foreign_keys("customer_order")
    assert fk["name"] == "fk_customer_order_user_id_app_user"
    assert fk["referred_table"] == "app_user"
    engine.dispose()


def test_migrated_columns_match_models(alembic_config):
    from storefront.database.config.connection_engine import load_models, metadata

    config, url = alembic_config
    command.upgrade(config, "head")
    load_models()

    engine = create_engine(url)
    inspector = inspect(engine)
    for table in metadata.sorted_tables:
        migrated = {column["name"] for column in inspector.get_columns(table.name)}
        assert migrated == set(table.columns.keys())
    engine.dispose()


def test_downgrade_removes_tables(alembic_config):
    config, url = alembic_config
    command.upgrade(config, "head")

    command.downgrade(config, "base")

    engine = create_engine(url)
    assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    engine.dispose()

"""
Generated SQL (DDL) rendering.

Compiles the ``CREATE``/``DROP`` statements SQLAlchemy would emit for the
models against a chosen dialect, without connecting to a database. Useful to
review the schema a migration is expected to produce.
"""

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.schema import CreateIndex, CreateTable, DropTable

from storefront.database.config.connection_engine import load_models, metadata
from storefront.database.exceptions import UnsupportedDriverError

DIALECTS = {
    "postgresql": postgresql.dialect,
    "sqlite": sqlite.dialect,
    "mysql": mysql.dialect,
}


def _dialect(dialect_name: str):
    try:
        return DIALECTS[dialect_name.lower()]()
    except KeyError:
        raise UnsupportedDriverError(dialect_name) from None


def _join(statements) -> str:
    return ";\n\n".join(statements) + ";\n"


def render_create_ddl(dialect_name: str = "postgresql") -> str:
    """
    Render the CREATE TABLE / CREATE INDEX statements for all models.

    Tables are emitted in dependency order (parents before children).

    Raises
    ------
    UnsupportedDriverError
        For a dialect outside `DIALECTS`.
    """
    dialect = _dialect(dialect_name)
    load_models()
    statements = []
    for table in metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=dialect)).strip())
        for index in sorted(table.indexes, key=lambda ix: ix.name):
            statements.append(str(CreateIndex(index).compile(dialect=dialect)).strip())
    return _join(statements)


def render_drop_ddl(dialect_name: str = "postgresql") -> str:
    """Render DROP TABLE statements, children before parents."""
    dialect = _dialect(dialect_name)
    load_models()
    statements = [
        str(DropTable(table).compile(dialect=dialect)).strip()
        for table in reversed(metadata.sorted_tables)
    ]
    return _join(statements)

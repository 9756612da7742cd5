"""Schema browsing built on ``execute_query``.

Queries are dialect-specific and chosen from the scheme of the open
connection. Every dialect returns the same column names so callers need
not care which server they talk to.
"""

from dataclasses import dataclass

from sql_bridge.bridge import SqlBridge
from sql_bridge.db.connection import MYSQL_SCHEMES, POSTGRES_SCHEMES, SQLITE_SCHEMES
from sql_bridge.errors import ExecutionError, NotConnectedError
from sql_bridge.models.result import ResultRow

KeyValue = str | int | float | bool | None


@dataclass(frozen=True)
class Dialect:
    """Catalog queries and quoting rules for one server family.

    ``columns`` is formatted with ``{table}`` as a quoted string literal.
    ``use_database`` is None where the server cannot switch databases on
    a live connection.
    """

    name: str
    databases: str
    tables: str
    columns: str
    identifier_quote: str = '"'
    backslash_escapes: bool = False
    use_database: str | None = None

    def literal(self, text: str) -> str:
        """Quote text as a SQL string literal."""
        if self.backslash_escapes:
            text = text.replace("\\", "\\\\")
        return "'" + text.replace("'", "''") + "'"

    def identifier(self, name: str) -> str:
        """Quote a table, column or database name."""
        q = self.identifier_quote
        return q + name.replace(q, q + q) + q


POSTGRES = Dialect(
    name="postgresql",
    databases="SELECT datname AS name FROM pg_database WHERE NOT datistemplate ORDER BY datname",
    tables=(
        "SELECT table_name AS name FROM information_schema.tables"
        " WHERE table_schema = current_schema()"
        " ORDER BY table_name"
    ),
    columns=(
        "SELECT c.column_name AS name, c.data_type AS type,"
        " c.is_nullable = 'YES' AS nullable, c.column_default AS default_value,"
        " c.ordinal_position AS position,"
        " CASE WHEN pk.column_name IS NULL THEN '' ELSE 'PRI' END AS key,"
        " pk.column_name IS NOT NULL AS primary_key,"
        " col_description(format('%I.%I', c.table_schema, c.table_name)::regclass,"
        " c.ordinal_position::int) AS comment,"
        " c.character_maximum_length, c.character_octet_length"
        " FROM information_schema.columns c"
        " LEFT JOIN ("
        "SELECT k.column_name FROM information_schema.table_constraints t"
        " JOIN information_schema.key_column_usage k"
        " ON k.constraint_name = t.constraint_name AND k.table_schema = t.table_schema"
        " AND k.table_name = t.table_name"
        " WHERE t.constraint_type = 'PRIMARY KEY'"
        " AND t.table_schema = current_schema() AND t.table_name = {table}"
        ") pk ON pk.column_name = c.column_name"
        " WHERE c.table_schema = current_schema() AND c.table_name = {table}"
        " ORDER BY c.ordinal_position"
    ),
)

MYSQL = Dialect(
    name="mysql",
    databases="SELECT SCHEMA_NAME AS name FROM information_schema.SCHEMATA ORDER BY SCHEMA_NAME",
    tables=(
        "SELECT TABLE_NAME AS name FROM information_schema.TABLES"
        " WHERE TABLE_SCHEMA = DATABASE() ORDER BY TABLE_NAME"
    ),
    columns=(
        "SELECT COLUMN_NAME AS name, COLUMN_TYPE AS type,"
        " IS_NULLABLE = 'YES' AS nullable, COLUMN_DEFAULT AS default_value,"
        " ORDINAL_POSITION AS position, COLUMN_KEY AS `key`,"
        " COLUMN_KEY = 'PRI' AS primary_key, COLUMN_COMMENT AS comment,"
        " CHARACTER_MAXIMUM_LENGTH AS character_maximum_length,"
        " CHARACTER_OCTET_LENGTH AS character_octet_length"
        " FROM information_schema.COLUMNS"
        " WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = {table}"
        " ORDER BY ORDINAL_POSITION"
    ),
    identifier_quote="`",
    backslash_escapes=True,
    use_database="USE {database}",
)

SQLITE = Dialect(
    name="sqlite",
    databases="SELECT name FROM pragma_database_list ORDER BY seq",
    tables=(
        "SELECT name FROM sqlite_master"
        " WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
    ),
    columns=(
        "SELECT name, type, \"notnull\" = 0 AS nullable, dflt_value AS default_value,"
        " cid + 1 AS position,"
        " CASE WHEN pk > 0 THEN 'PRI' ELSE '' END AS \"key\","
        " pk > 0 AS primary_key, NULL AS comment,"
        " NULL AS character_maximum_length, NULL AS character_octet_length"
        " FROM pragma_table_info({table}) ORDER BY cid"
    ),
)


def quote_literal(text: str) -> str:
    """Quote text as a standard SQL string literal."""
    return SQLITE.literal(text)


def dialect_for(bridge: SqlBridge) -> Dialect:
    """Return the dialect of the open connection."""
    scheme = bridge.manager.scheme
    if scheme is None:
        raise NotConnectedError()
    if scheme in POSTGRES_SCHEMES:
        return POSTGRES
    if scheme in MYSQL_SCHEMES:
        return MYSQL
    if scheme in SQLITE_SCHEMES:
        return SQLITE
    raise ExecutionError(f"No catalog queries for scheme: {scheme}")


def _sql_value(dialect: Dialect, value: KeyValue) -> str:
    match value:
        case bool():
            return "TRUE" if value else "FALSE"
        case int() | float():
            return repr(value)
        case str():
            return dialect.literal(value)
    raise ExecutionError(f"Unsupported key value: {value!r}")


async def list_databases(bridge: SqlBridge) -> list[ResultRow]:
    """Databases visible on the server (attached databases for SQLite)."""
    return await bridge.execute_query(dialect_for(bridge).databases)


async def list_tables(bridge: SqlBridge) -> list[ResultRow]:
    """User tables in the current database (current schema on Postgres)."""
    return await bridge.execute_query(dialect_for(bridge).tables)


async def describe_table(bridge: SqlBridge, table: str) -> list[ResultRow]:
    """Columns of ``table`` in ordinal order.

    Each row has name, type, nullable, default_value, position, key
    (``PRI`` for primary key columns on every dialect; MySQL also reports
    ``UNI``/``MUL``), primary_key, comment, character_maximum_length and
    character_octet_length. An unknown table yields no rows.
    """
    dialect = dialect_for(bridge)
    sql = dialect.columns.format(table=dialect.literal(table))
    return await bridge.execute_query(sql)


async def use_database(bridge: SqlBridge, database: str) -> None:
    """Switch the live connection to another database.

    Only MySQL can do this; other servers need a new connection.
    """
    dialect = dialect_for(bridge)
    if dialect.use_database is None:
        raise ExecutionError(f"Switching databases is not supported for {dialect.name}")
    await bridge.execute_update(dialect.use_database.format(database=dialect.identifier(database)))


async def get_row(bridge: SqlBridge, table: str, keys: dict[str, KeyValue]) -> ResultRow | None:
    """Fetch the row of ``table`` whose key columns equal ``keys``.

    A None key matches SQL NULL. Returns the first matching row, or None.
    """
    if not keys:
        raise ExecutionError("At least one key column is required")
    dialect = dialect_for(bridge)
    conditions = []
    for column, value in keys.items():
        name = dialect.identifier(column)
        if value is None:
            conditions.append(f"{name} IS NULL")
        else:
            conditions.append(f"{name} = {_sql_value(dialect, value)}")
    sql = f"SELECT * FROM {dialect.identifier(table)} WHERE {' AND '.join(conditions)}"
    rows = await bridge.execute_query(sql)
    return rows[0] if rows else None

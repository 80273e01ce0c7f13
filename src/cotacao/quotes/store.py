"""Quote persistence and schema."""

import logging

from cotacao.database import DatabaseService, Row
from cotacao.errors import PersistenceFailure, SchemaFailure, StorageError

logger = logging.getLogger(__name__)

QUOTES_DDL = """
CREATE TABLE IF NOT EXISTS cotacoes (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    valor TEXT,
    data  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

QUOTES_TABLE = "cotacoes"

DEFAULT_INSERT_DEADLINE = 0.010


def ensure_quote_schema(service: DatabaseService) -> None:
    """Create the cotacoes table if it doesn't exist."""
    try:
        service.execute_ddl(QUOTES_DDL)
    except StorageError as e:
        raise SchemaFailure(f"cannot create table {QUOTES_TABLE}: {e}") from e
    logger.info("Schema ready: %s", QUOTES_TABLE)


def insert_quote(
    service: DatabaseService,
    value: str,
    deadline: float | None = DEFAULT_INSERT_DEADLINE,
) -> int:
    """Store one quote and return its row id.

    The insert is abandoned and rolled back once `deadline` seconds pass.
    """
    try:
        with service.transaction(deadline=deadline):
            service.execute(f"INSERT INTO {QUOTES_TABLE} (valor) VALUES (?)", (value,))
            rows = service.execute("SELECT last_insert_rowid() AS id")
    except StorageError as e:
        raise PersistenceFailure(str(e)) from e
    row_id = rows[0]["id"]
    logger.info("Stored quote %s as row %d", value, row_id)
    return row_id


def list_quotes(service: DatabaseService, limit: int | None = None) -> list[Row]:
    """Return stored quotes, newest first."""
    sql = f"SELECT id, valor, data FROM {QUOTES_TABLE} ORDER BY id DESC"
    params: tuple = ()
    if limit is not None:
        sql += " LIMIT ?"
        params = (limit,)
    with service.transaction():
        return service.execute(sql, params)

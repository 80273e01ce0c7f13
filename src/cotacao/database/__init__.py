"""Database layer — factory and public API."""

from cotacao.database.service import DatabaseService
from cotacao.database.sqlite_service import SQLiteDatabaseService
from cotacao.database.types import Params, Row

__all__ = ["DatabaseService", "SQLiteDatabaseService", "Params", "Row", "create_service"]


def create_service(db_url: str) -> DatabaseService:
    """Create a DatabaseService from a connection URL.

    Supported schemes:
    - sqlite:///path/to/db  or  sqlite:///:memory:
    """
    if db_url.startswith("sqlite"):
        # Extract path: sqlite:///foo.db -> foo.db, sqlite:///:memory: -> :memory:
        path = db_url.split(":///", 1)[1] if ":///" in db_url else ":memory:"
        return SQLiteDatabaseService(path)
    raise ValueError(f"Unsupported database URL scheme: {db_url}")

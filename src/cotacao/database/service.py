"""Abstract DatabaseService interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from cotacao.database.types import Params, Row


class DatabaseService(ABC):
    """Database-agnostic interface for the quote store.

    One service instance owns at most one open connection. The request
    handler builds a fresh service per request and closes it when done.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the connection, creating the database if it does not exist."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Safe to call more than once."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    @contextmanager
    def transaction(self, deadline: float | None = None) -> Iterator[None]:
        """Commit on success, roll back on error.

        When `deadline` is given (seconds), lock waits and statement execution
        inside the block are abandoned once it elapses.
        """

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, CREATE INDEX, etc.)."""

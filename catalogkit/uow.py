"""A unit of work running repositories inside one database transaction."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from typing import Any

RepositoryFactory = Callable[[sqlite3.Connection], Any]


class UnitOfWorkError(Exception):
    """Raised when a transaction is used in a state that does not allow it."""


class UnitOfWork:
    """Hands out repositories bound to a shared transaction and finishes it."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self.tx: sqlite3.Connection | None = None
        self.repositories: dict[str, RepositoryFactory] = {}

    @property
    def in_transaction(self) -> bool:
        return self.tx is not None

    def _begin(self) -> None:
        self.connection.execute("BEGIN")
        self.tx = self.connection

    def register(self, name: str, factory: RepositoryFactory) -> None:
        """Make a repository available under a name."""
        self.repositories[name] = factory

    def unregister(self, name: str) -> None:
        """Forget the repository registered under a name."""
        self.repositories.pop(name, None)

    def get_repository(self, name: str) -> Any:
        """Build the named repository on the transaction, starting one if needed."""
        try:
            factory = self.repositories[name]
        except KeyError:
            raise KeyError(f"repository {name!r} is not registered") from None
        if self.tx is None:
            self._begin()
        return factory(self.tx)

    def do(self, fn: Callable[[UnitOfWork], None]) -> None:
        """Run fn in a new transaction, committing on success and rolling back on error."""
        if self.tx is not None:
            raise UnitOfWorkError("transaction already started")
        self._begin()
        try:
            fn(self)
        except Exception as error:
            try:
                self.rollback()
            except Exception as rollback_error:
                raise UnitOfWorkError(
                    f"original error: {error}, rollback error: {rollback_error}"
                ) from error
            raise
        self.commit_or_rollback()

    def rollback(self) -> None:
        """Undo the current transaction."""
        if self.tx is None:
            raise UnitOfWorkError("no transaction to rollback")
        self.tx.rollback()
        self.tx = None

    def commit_or_rollback(self) -> None:
        """Commit the current transaction, rolling it back if the commit fails."""
        if self.tx is None:
            raise UnitOfWorkError("no transaction to commit")
        try:
            self.tx.commit()
        except Exception as error:
            try:
                self.rollback()
            except Exception as rollback_error:
                raise UnitOfWorkError(
                    f"original error: {error}, rollback error: {rollback_error}"
                ) from error
            raise
        self.tx = None
"""Abstract database adapter interface.

This module defines what the migration runner needs from a database: explicit
transaction boundaries, statement execution, and a bulk read of rows.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .types import Row

if TYPE_CHECKING:
    from migrate.migration import Migration


class DatabaseAdapter(ABC):
    """Abstract database adapter interface.

    Implementations run outside of any implicit transaction: statements
    executed without a preceding begin() are committed immediately, and
    begin()/commit()/rollback() delimit explicit transactions.
    """

    @abstractmethod
    def connect(self) -> None:
        """Establish database connection.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close database connection."""
        pass

    @abstractmethod
    def begin(self) -> None:
        """Open a transaction.

        Raises:
            DatabaseError: If the transaction cannot be started
        """
        pass

    @abstractmethod
    def commit(self) -> None:
        """Commit current transaction.

        Raises:
            DatabaseError: If commit fails
        """
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Rollback current transaction.

        Raises:
            DatabaseError: If rollback fails
        """
        pass

    def run_migrations(self, migrations: Sequence["Migration"]) -> list[str]:
        """Bring the database up to date with the given migrations.

        Args:
            migrations: Ordered migrations, excluding the bootstrap migration

        Returns:
            Names of the migrations applied during this run

        Raises:
            MigrationError: If any statement fails
        """
        from migrate.runner import MigrationRunner

        runner = MigrationRunner(self)
        return runner.run_all(migrations)

    @abstractmethod
    def execute(self, query: str, params: tuple | None = None) -> None:
        """Execute a statement, discarding any result.

        Args:
            query: SQL statement to execute, sent verbatim when params is None
            params: Statement parameters (optional)

        Raises:
            DatabaseError: If execution fails
            IntegrityError: If integrity constraint violated
        """
        pass

    @abstractmethod
    def fetchall(self, query: str, params: tuple | None = None) -> list[Row]:
        """Execute query and fetch all results as list of dictionaries.

        Raises:
            DatabaseError: If execution fails
        """
        pass

    @property
    @abstractmethod
    def placeholder(self) -> str:
        """Get database-specific parameter placeholder."""
        pass

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

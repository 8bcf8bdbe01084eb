"""Database collaborator for the migration runner.

This package provides the adapter interface the runner executes against and
its PostgreSQL implementation.

Example:
    >>> from migrate.db import get_adapter
    >>>
    >>> with get_adapter() as adapter:
    ...     adapter.run_migrations(migrations)
"""

from .factory import DatabaseConfig, create_database, get_adapter
from .interface import DatabaseAdapter
from .types import (
    ConnectionError,
    DatabaseError,
    IntegrityError,
    Row,
    SchemaError,
)

__all__ = [
    # Factory
    "DatabaseConfig",
    "create_database",
    "get_adapter",
    # Interface
    "DatabaseAdapter",
    # Types and exceptions
    "DatabaseError",
    "ConnectionError",
    "IntegrityError",
    "SchemaError",
    "Row",
]

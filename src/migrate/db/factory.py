"""Database factory for creating the PostgreSQL adapter.

This module provides a configuration class and factory functions for building
the adapter the migration runner executes against.
"""

from dataclasses import dataclass

from .interface import DatabaseAdapter
from .postgres_adapter import PostgreSQLAdapter


@dataclass
class DatabaseConfig:
    """Database configuration container.

    Attributes:
        host: PostgreSQL host
        port: PostgreSQL port
        database: PostgreSQL database name
        user: PostgreSQL username
        password: PostgreSQL password
        pool_size: Minimum number of pooled connections
        pool_max_overflow: Extra connections allowed beyond pool_size
    """

    host: str | None = None
    port: int | None = None
    database: str | None = None
    user: str | None = None
    password: str | None = None
    pool_size: int = 1
    pool_max_overflow: int = 2

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not all([self.host, self.database, self.user]):
            raise ValueError("host, database, and user are required for PostgreSQL")
        if self.port is None:
            self.port = 5432
        if self.password is None:
            self.password = ""
        if self.pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        if self.pool_max_overflow < 0:
            raise ValueError("pool_max_overflow must not be negative")


def create_database(config: DatabaseConfig) -> DatabaseAdapter:
    """Factory function to create the database adapter.

    Args:
        config: Database configuration

    Returns:
        Database adapter instance (not yet connected)

    Example:
        >>> config = DatabaseConfig(
        ...     host="localhost",
        ...     database="app",
        ...     user="postgres",
        ... )
        >>> adapter = create_database(config)
    """
    return PostgreSQLAdapter(
        host=config.host,
        port=config.port,
        database=config.database,
        user=config.user,
        password=config.password,
        pool_size=config.pool_size,
        pool_max_overflow=config.pool_max_overflow,
    )


def get_adapter() -> DatabaseAdapter:
    """Get database adapter using environment configuration.

    Returns:
        Configured database adapter
    """
    from common.env import env

    config = DatabaseConfig(
        host=env.postgres_host(),
        port=env.postgres_port(),
        database=env.postgres_database(),
        user=env.postgres_user(),
        password=env.postgres_password(),
        pool_size=env.postgres_pool_size(),
        pool_max_overflow=env.postgres_pool_max_overflow(),
    )
    return create_database(config)

"""PostgreSQL database adapter implementation.

This adapter wraps psycopg3 functionality to provide the transactional
statement execution the migration runner relies on.
"""

from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from .interface import DatabaseAdapter
from .types import ConnectionError as DBConnectionError
from .types import DatabaseError, Row, SchemaError
from .types import IntegrityError as DBIntegrityError


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter.

    Wraps psycopg3 functionality to implement the DatabaseAdapter interface.
    Holds one pooled connection in autocommit mode; transactions are opened
    explicitly with begin().
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "ledger_migrate",
        user: str = "postgres",
        password: str = "",
        pool_size: int = 1,
        pool_max_overflow: int = 2,
    ):
        """Initialize PostgreSQL adapter.

        Args:
            host: PostgreSQL server host
            port: PostgreSQL server port
            database: Database name
            user: Database user
            password: Database password
            pool_size: Minimum number of connections in pool
            pool_max_overflow: Maximum overflow connections beyond pool_size
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.pool_size = pool_size
        self.pool_max_overflow = pool_max_overflow

        self._pool: ConnectionPool | None = None
        self._conn: Any = None  # psycopg.Connection

    def connect(self) -> None:
        """Establish database connection and connection pool."""
        try:
            conninfo = (
                f"host={self.host} port={self.port} dbname={self.database} "
                f"user={self.user} password={self.password}"
            )

            self._pool = ConnectionPool(
                conninfo,
                min_size=self.pool_size,
                max_size=self.pool_size + self.pool_max_overflow,
                open=True,
            )
            self._conn = self._pool.getconn()

            # Explicit BEGIN/COMMIT delimit each migration; a failed read
            # outside a transaction must not leave the session aborted.
            self._conn.autocommit = True
            self._conn.row_factory = dict_row

        except psycopg.Error as e:
            raise DBConnectionError(f"Failed to connect to PostgreSQL database: {e}") from e

    def close(self) -> None:
        """Close database connection and connection pool."""
        if self._conn and self._pool:
            self._pool.putconn(self._conn)
            self._conn = None

        if self._pool:
            self._pool.close()
            self._pool = None

    def begin(self) -> None:
        """Open a transaction on the held connection."""
        if not self._conn:
            raise DatabaseError("No active connection")
        try:
            self._conn.execute("BEGIN")
        except psycopg.Error as e:
            raise DatabaseError(f"Failed to begin transaction: {e}") from e

    def commit(self) -> None:
        """Commit current transaction."""
        if not self._conn:
            raise DatabaseError("No active connection")
        try:
            self._conn.commit()
        except psycopg.Error as e:
            raise DatabaseError(f"Failed to commit transaction: {e}") from e

    def rollback(self) -> None:
        """Rollback current transaction."""
        if not self._conn:
            raise DatabaseError("No active connection")
        try:
            self._conn.rollback()
        except psycopg.Error as e:
            raise DatabaseError(f"Failed to rollback transaction: {e}") from e

    def get_tables(self) -> list[str]:
        """Get list of all tables in the public schema."""
        if not self._conn:
            raise DatabaseError("No active connection")

        try:
            query = """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = 'public'
                AND table_type = 'BASE TABLE'
                ORDER BY table_name
            """
            with self._conn.cursor() as cursor:
                cursor.execute(query)
                return [row["table_name"] for row in cursor.fetchall()]
        except psycopg.Error as e:
            raise SchemaError(f"Failed to get table list: {e}") from e

    def get_table_schema(self, table_name: str) -> list[Row]:
        """Get column information for a specific table."""
        if not self._conn:
            raise DatabaseError("No active connection")

        try:
            query = """
                SELECT
                    column_name AS name,
                    data_type AS type,
                    CASE WHEN is_nullable = 'NO' THEN 1 ELSE 0 END AS notnull,
                    column_default AS "default",
                    CASE WHEN column_name IN (
                        SELECT a.attname
                        FROM pg_index i
                        JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
                        WHERE i.indrelid = %s::regclass AND i.indisprimary
                    ) THEN 1 ELSE 0 END AS pk
                FROM information_schema.columns
                WHERE table_schema = 'public' AND table_name = %s
                ORDER BY ordinal_position
            """
            with self._conn.cursor() as cursor:
                cursor.execute(query, (table_name, table_name))
                return cursor.fetchall()
        except psycopg.Error as e:
            raise SchemaError(f"Failed to get table schema: {e}") from e

    def execute(self, query: str, params: tuple | None = None) -> None:
        """Execute a statement, discarding any result.

        Statements without params are sent verbatim, so literal '%' and '?'
        in migration SQL are left alone.
        """
        if not self._conn:
            raise DatabaseError("No active connection")

        try:
            with self._conn.cursor() as cursor:
                cursor.execute(query, params or None)
        except psycopg.errors.IntegrityError as e:
            raise DBIntegrityError(f"Integrity constraint violation: {e}") from e
        except psycopg.Error as e:
            raise DatabaseError(f"Query execution failed: {e}") from e

    def fetchall(self, query: str, params: tuple | None = None) -> list[Row]:
        """Execute query and fetch all results as list of dictionaries."""
        if not self._conn:
            raise DatabaseError("No active connection")

        try:
            with self._conn.cursor() as cursor:
                cursor.execute(query, params or None)
                return [dict(row) for row in cursor.fetchall()]
        except psycopg.Error as e:
            raise DatabaseError(f"Query execution failed: {e}") from e

    @property
    def placeholder(self) -> str:
        """'%s' for PostgreSQL."""
        return "%s"

    def __repr__(self) -> str:
        """String representation."""
        status = "connected" if self._conn else "disconnected"
        return (
            f"PostgreSQLAdapter(host={self.host}, port={self.port}, "
            f"database={self.database}, status={status})"
        )

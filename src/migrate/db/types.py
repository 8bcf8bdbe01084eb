"""Shared types and exceptions for the database collaborator."""

from typing import Any


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class ConnectionError(DatabaseError):
    """Error connecting to database."""

    pass


class IntegrityError(DatabaseError):
    """Database integrity constraint violation."""

    pass


class SchemaError(DatabaseError):
    """Error inspecting database schema."""

    pass


# Type alias for database rows
Row = dict[str, Any]

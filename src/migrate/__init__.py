"""Sequential, ledger-tracked schema migrations for PostgreSQL.

Example:
    >>> from migrate import Migration, run_all
    >>> from migrate.db import get_adapter
    >>>
    >>> books = (
    ...     Migration.create("create_books")
    ...     .add_up("CREATE TABLE books (id BIGSERIAL PRIMARY KEY)")
    ...     .add_down("DROP TABLE IF EXISTS books")
    ... )
    >>> with get_adapter() as adapter:
    ...     run_all(adapter, [books])
"""

from .errors import MigrationError
from .migration import Migration, Mode
from .runner import MigrationRunner, run_all

__all__ = ["Migration", "MigrationError", "MigrationRunner", "Mode", "run_all"]

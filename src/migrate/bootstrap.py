"""Bootstrap migration that creates the ledger table.

Always run first. Its ledger row is never deleted, since rolling it back
drops the ledger itself.
"""

from .migration import Migration

NAME = "initial"
LEDGER_TABLE = "migrations"


def migration() -> Migration:
    """Build the bootstrap migration."""
    return (
        Migration.create(NAME)
        .add_up(
            f"""
            CREATE TABLE {LEDGER_TABLE} (
                name TEXT NOT NULL PRIMARY KEY,
                executed_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """
        )
        .add_down(f"DROP TABLE IF EXISTS {LEDGER_TABLE}")
    )

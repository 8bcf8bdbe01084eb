"""Migration runner for database schema updates.

Applies a caller-supplied, ordered list of migrations after the bootstrap
migration. Each apply or rollback runs in its own transaction together with
its ledger bookkeeping, so a migration and its ledger row land atomically.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from common.logger import get_logger

from . import bootstrap
from .db.types import DatabaseError
from .errors import MigrationError
from .migration import Migration, Mode, require_debug_build

if TYPE_CHECKING:
    from .db.interface import DatabaseAdapter

logger = get_logger(__name__)

BEGIN_STATEMENT = "BEGIN TRANSACTION"
COMMIT_STATEMENT = "COMMIT TRANSACTION"


class MigrationRunner:
    """Runs migrations against one adapter and tracks them in the ledger."""

    def __init__(self, adapter: "DatabaseAdapter"):
        """Initialize migration runner.

        Args:
            adapter: Connected database adapter
        """
        self.adapter = adapter
        self.insert_statement = (
            f"INSERT INTO {bootstrap.LEDGER_TABLE} (name) VALUES ({adapter.placeholder})"
        )
        self.delete_statement = (
            f"DELETE FROM {bootstrap.LEDGER_TABLE} WHERE name = {adapter.placeholder}"
        )

    def get_applied_migrations(self) -> set[str]:
        """Read the names recorded in the ledger.

        A database without the ledger table (or any other read failure) counts
        as having nothing applied yet.

        Returns:
            Set of applied migration names
        """
        try:
            rows = self.adapter.fetchall(f"SELECT name FROM {bootstrap.LEDGER_TABLE}")
        except DatabaseError as e:
            logger.debug(f"Ledger not readable, assuming fresh database: {e}")
            return set()
        return {row["name"] for row in rows}

    def run_all(self, migrations: Sequence[Migration]) -> list[str]:
        """Apply everything needed to reach a fully migrated database.

        Args:
            migrations: Ordered migrations, excluding the bootstrap migration

        Returns:
            Names of the migrations applied during this run, in order

        Raises:
            MigrationError: On the first failing statement; nothing after it runs
        """
        all_migrations = [bootstrap.migration(), *migrations]

        # Checked again here: the build mode may have changed since definition
        for migration in all_migrations:
            require_debug_build(migration.mode, migration.name)

        applied = self.get_applied_migrations()
        performed: list[str] = []

        if any(m.mode is Mode.NUCLEAR_DEBUG for m in all_migrations):
            logger.warning("Nuclear debug migration present, rebuilding every migration")
            for migration in reversed(all_migrations):
                self.undo(migration)
                applied.discard(migration.name)
            for migration in all_migrations:
                self.perform(migration)
                performed.append(migration.name)
            return performed

        for migration in all_migrations:
            if migration.mode is Mode.DEBUG:
                self.undo(migration)
                applied.discard(migration.name)
            elif migration.mode is not Mode.STABLE:
                raise ValueError(f"Unhandled migration mode: {migration.mode}")

            if migration.name not in applied:
                self.perform(migration)
                performed.append(migration.name)

        if performed:
            logger.info(f"✓ Applied {len(performed)} migration(s)")
        else:
            logger.info("No pending migrations")
        return performed

    def perform(self, migration: Migration) -> None:
        """Apply a migration and record it in the ledger.

        Raises:
            MigrationError: If any statement fails; the transaction is rolled back
        """
        logger.info(f"Performing {migration.name}")
        statements = [(statement, None) for statement in migration.up]
        statements.append((self.insert_statement, (migration.name,)))
        self._run_transaction(statements)

    def undo(self, migration: Migration) -> None:
        """Roll back a migration and remove its ledger record.

        The bootstrap migration keeps its ledger record: its down statements
        drop the ledger table itself.

        Raises:
            MigrationError: If any statement fails; the transaction is rolled back
        """
        logger.info(f"Undoing {migration.name}")
        statements = [(statement, None) for statement in migration.down]
        if migration.name != bootstrap.NAME:
            statements.append((self.delete_statement, (migration.name,)))
        self._run_transaction(statements)

    def _run_transaction(self, statements: list[tuple[str, tuple | None]]) -> None:
        """Execute statements in one transaction, all or nothing."""
        try:
            self.adapter.begin()
        except DatabaseError as e:
            logger.error(f"✗ Failed to begin transaction: {e}")
            raise MigrationError(BEGIN_STATEMENT, e) from e

        try:
            for statement, params in statements:
                logger.debug(f"Executing: {statement.strip()}")
                try:
                    self.adapter.execute(statement, params)
                except DatabaseError as e:
                    raise MigrationError(statement, e) from e

            try:
                self.adapter.commit()
            except DatabaseError as e:
                raise MigrationError(COMMIT_STATEMENT, e) from e

        except MigrationError as e:
            logger.error(f"✗ {e}")
            self._abort()
            raise
        except Exception:
            self._abort()
            raise

    def _abort(self) -> None:
        try:
            self.adapter.rollback()
        except DatabaseError as e:
            # The failed statement is what gets reported
            logger.warning(f"Rollback after failure also failed: {e}")


def run_all(adapter: "DatabaseAdapter", migrations: Sequence[Migration]) -> list[str]:
    """Apply pending migrations through adapter.

    Args:
        adapter: Connected database adapter
        migrations: Ordered migrations, excluding the bootstrap migration

    Returns:
        Names of the migrations applied during this run

    Raises:
        MigrationError: On the first failing statement
    """
    return MigrationRunner(adapter).run_all(migrations)

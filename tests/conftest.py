"""Shared test fixtures: an in-memory transactional adapter.

FakeAdapter understands just enough SQL to model what migrations do to a
database: tables created and dropped, and rows in the ledger table. Every
other statement is recorded and otherwise ignored.
"""

import copy
import re

import pytest

from migrate.db.interface import DatabaseAdapter
from migrate.db.types import DatabaseError, IntegrityError, Row

CREATE_TABLE = re.compile(r"^\s*CREATE TABLE\s+(IF NOT EXISTS\s+)?(\w+)", re.IGNORECASE)
DROP_TABLE = re.compile(r"^\s*DROP TABLE\s+(IF EXISTS\s+)?(\w+)", re.IGNORECASE)
INSERT_LEDGER = re.compile(r"^\s*INSERT INTO migrations\b", re.IGNORECASE)
DELETE_LEDGER = re.compile(r"^\s*DELETE FROM migrations\b", re.IGNORECASE)
SELECT_LEDGER = re.compile(r"^\s*SELECT name FROM migrations\s*$", re.IGNORECASE)


class FakeAdapter(DatabaseAdapter):
    """Adapter keeping committed and in-flight state in memory.

    Attributes:
        tables: Committed tables, mapping name to rows (ledger names for
            the migrations table)
        executed: Every statement executed, including rolled back ones
        calls: Executed statements paired with their params
        events: Transaction boundaries and statements, in order
        fail_on: Statements (compared stripped) that raise fail_with
        fail_with: Exception type raised for fail_on statements
    """

    def __init__(self):
        self.tables: dict[str, list[str]] = {}
        self.executed: list[str] = []
        self.calls: list[tuple[str, tuple | None]] = []
        self.events: list[str] = []
        self.fail_on: set[str] = set()
        self.fail_begin = False
        self.fail_commit = False
        self.fail_rollback = False
        self.fail_with: type[Exception] = DatabaseError
        self.fail_ledger_read = False
        self._staged: dict[str, list[str]] | None = None

    def connect(self) -> None:
        pass

    def close(self) -> None:
        pass

    def begin(self) -> None:
        if self.fail_begin:
            raise DatabaseError("could not begin")
        if self._staged is not None:
            raise DatabaseError("transaction already in progress")
        self.events.append("BEGIN")
        self._staged = copy.deepcopy(self.tables)

    def commit(self) -> None:
        if self.fail_commit:
            raise DatabaseError("could not commit")
        self.events.append("COMMIT")
        if self._staged is not None:
            self.tables = self._staged
        self._staged = None

    def rollback(self) -> None:
        self.events.append("ROLLBACK")
        self._staged = None
        if self.fail_rollback:
            raise DatabaseError("server closed the connection unexpectedly")

    def get_tables(self) -> list[str]:
        return sorted(self.tables)

    @property
    def placeholder(self) -> str:
        return "%s"

    @property
    def ledger(self) -> list[str] | None:
        """Committed ledger names, or None if the ledger table is absent."""
        return self.tables.get("migrations")

    def execute(self, query: str, params: tuple | None = None):
        self.executed.append(query.strip())
        self.calls.append((query.strip(), params))
        self.events.append(query.strip())
        if query.strip() in self.fail_on:
            raise self.fail_with(f"syntax error at or near {query.strip()!r}")

        state = self._staged if self._staged is not None else self.tables

        if match := CREATE_TABLE.match(query):
            if_not_exists, table = match.groups()
            if table in state:
                if not if_not_exists:
                    raise DatabaseError(f'relation "{table}" already exists')
            else:
                state[table] = []
        elif match := DROP_TABLE.match(query):
            if_exists, table = match.groups()
            if table not in state and not if_exists:
                raise DatabaseError(f'table "{table}" does not exist')
            state.pop(table, None)
        elif INSERT_LEDGER.match(query):
            ledger = self._ledger_in(state)
            if params[0] in ledger:
                raise IntegrityError(f"duplicate key value violates unique constraint: {params[0]}")
            ledger.append(params[0])
        elif DELETE_LEDGER.match(query):
            ledger = self._ledger_in(state)
            if params[0] in ledger:
                ledger.remove(params[0])
        return None

    def fetchall(self, query: str, params: tuple | None = None) -> list[Row]:
        if not SELECT_LEDGER.match(query):
            raise DatabaseError(f"unsupported query: {query}")
        if self.fail_ledger_read:
            raise DatabaseError("permission denied for table migrations")
        ledger = self._ledger_in(self.tables)
        return [{"name": name} for name in ledger]

    @staticmethod
    def _ledger_in(state: dict[str, list[str]]) -> list[str]:
        if "migrations" not in state:
            raise DatabaseError('relation "migrations" does not exist')
        return state["migrations"]


@pytest.fixture
def fake_db():
    """Fresh in-memory database with nothing applied."""
    return FakeAdapter()


@pytest.fixture
def debug_build(monkeypatch):
    """Allow debug-only migration modes."""
    monkeypatch.setenv("MIGRATE_BUILD_MODE", "debug")


@pytest.fixture
def release_build(monkeypatch):
    """Forbid debug-only migration modes."""
    monkeypatch.setenv("MIGRATE_BUILD_MODE", "release")

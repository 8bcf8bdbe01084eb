"""Migration definitions.

A migration is an immutable, named list of forward ("up") and reverse
("down") statements plus an execution mode. Builders return new instances so
definitions can be chained:

    >>> users = (
    ...     Migration.create("create_users")
    ...     .add_up("CREATE TABLE users (id BIGSERIAL PRIMARY KEY)")
    ...     .add_down("DROP TABLE IF EXISTS users")
    ... )
"""

from dataclasses import dataclass, replace
from enum import Enum

from common.env import env
from common.logger import get_logger

logger = get_logger(__name__)


class Mode(str, Enum):
    """How the runner treats a migration."""

    STABLE = "stable"
    # Rolled back and re-applied on every run
    DEBUG = "debug"
    # Forces a rollback and re-apply of every migration in the run
    NUCLEAR_DEBUG = "nuclear_debug"


def require_debug_build(mode: Mode, name: str) -> None:
    """Abort the process if a debug-only mode is used outside a debug build."""
    if mode is Mode.STABLE:
        return
    if not env.is_debug_build():
        message = (
            f"Migration '{name}' marked {mode.value} in a release build; "
            "set MIGRATE_BUILD_MODE=debug for local iteration"
        )
        logger.critical(message)
        raise SystemExit(message)


@dataclass(frozen=True)
class Migration:
    """A named, ordered unit of schema change.

    Attributes:
        name: Permanent identifier recorded in the ledger
        up: Statements executed in order when applying
        down: Statements executed in order when rolling back
        mode: Execution mode
    """

    name: str
    up: tuple[str, ...] = ()
    down: tuple[str, ...] = ()
    mode: Mode = Mode.STABLE

    def __post_init__(self):
        require_debug_build(self.mode, self.name)

    @classmethod
    def create(cls, name: str) -> "Migration":
        """Create an empty, stable migration.

        Args:
            name: Migration name; uniqueness is checked by the ledger, not here

        Raises:
            ValueError: If name is empty
        """
        if not name or not name.strip():
            raise ValueError("Migration name must not be empty")
        return cls(name=name)

    def add_up(self, statement: str) -> "Migration":
        """Append a forward statement."""
        return replace(self, up=self.up + (statement,))

    def add_down(self, statement: str) -> "Migration":
        """Prepend a reverse statement.

        Reverse statements are written in the same order as their forward
        counterparts; prepending makes rollback run them last-in first-out.
        """
        return replace(self, down=(statement,) + self.down)

    def mark_debug(self) -> "Migration":
        """Re-run this migration (down, then up) on every run.

        Only allowed in a debug build; aborts the process otherwise.
        """
        return replace(self, mode=Mode.DEBUG)

    def mark_nuclear_debug(self) -> "Migration":
        """Roll back and re-apply every migration on every run.

        Only allowed in a debug build; aborts the process otherwise.
        """
        return replace(self, mode=Mode.NUCLEAR_DEBUG)

"""Errors raised by the migration runner."""


class MigrationError(Exception):
    """A statement failed while applying or rolling back a migration.

    Attributes:
        statement: Literal text of the failing statement
        error: Underlying database error
    """

    def __init__(self, statement: str, error: Exception):
        self.statement = statement
        self.error = error
        super().__init__(statement, error)

    def __str__(self) -> str:
        return f'Error executing sql "{self.statement}": {self.error}'

"""Environment configuration interface for ledger-migrate.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

BUILD_MODES = ("debug", "release")


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def build_mode() -> str:
        """Get the build mode gating debug-only migration modes.

        Read on every call so the guard reflects the current configuration.
        Anything other than an explicit 'debug' counts as a release build.

        Returns:
            'debug' or 'release', defaults to 'release'
        """
        mode = os.getenv("MIGRATE_BUILD_MODE", "release").strip().lower()
        return mode if mode in BUILD_MODES else "release"

    @staticmethod
    def is_debug_build() -> bool:
        """Whether debug-only migration modes are allowed."""
        return Environment.build_mode() == "debug"

    @staticmethod
    def postgres_host() -> str:
        """Get PostgreSQL host.

        Returns:
            PostgreSQL host, defaults to 'localhost'
        """
        return os.getenv("POSTGRES_HOST", "localhost")

    @staticmethod
    def postgres_port() -> int:
        """Get PostgreSQL port.

        Returns:
            PostgreSQL port, defaults to 5432
        """
        return int(os.getenv("POSTGRES_PORT", "5432"))

    @staticmethod
    def postgres_database() -> str:
        """Get PostgreSQL database name.

        Returns:
            Database name, defaults to 'ledger_migrate'
        """
        return os.getenv("POSTGRES_DB", "ledger_migrate")

    @staticmethod
    def postgres_user() -> str:
        """Get PostgreSQL user.

        Returns:
            Database user, defaults to 'postgres'
        """
        return os.getenv("POSTGRES_USER", "postgres")

    @staticmethod
    def postgres_password() -> str:
        """Get PostgreSQL password.

        Returns:
            Database password, defaults to empty string
        """
        return os.getenv("POSTGRES_PASSWORD", "")

    @staticmethod
    def postgres_pool_size() -> int:
        """Get PostgreSQL connection pool size.

        A migration run uses a single connection, so the default is small.

        Returns:
            Pool size, defaults to 1
        """
        return int(os.getenv("POSTGRES_POOL_SIZE", "1"))

    @staticmethod
    def postgres_pool_max_overflow() -> int:
        """Get PostgreSQL connection pool max overflow.

        Returns:
            Max overflow, defaults to 2
        """
        return int(os.getenv("POSTGRES_POOL_MAX_OVERFLOW", "2"))


# Singleton instance for convenient access
env = Environment()

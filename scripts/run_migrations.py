#!/usr/bin/env python3
"""Apply invite code schema migrations with Logfire error tracking."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from portal.config import Settings
from portal.util.logging import setup_logging
from portal.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to a revision and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", revision=revision)

        # migrations/env.py reads DATABASE__URL from settings
        command.upgrade(Config("alembic.ini"), revision)

        logfire.info("Database migrations completed", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail loudly so the service never starts on a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))

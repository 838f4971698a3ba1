#!/usr/bin/env python3
"""Start the portal API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from portal.config import Settings
from portal.util.logging import setup_logging
from portal.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire before the app factory instruments FastAPI and httpx
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting portal API",
            environment=settings.environment,
            allowed_origins=settings.allowed_origins,
            token_format=settings.token.format,
        )

        uvicorn.run(
            "portal.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from src.infrastructure.observability import configure_structlog

ENVIRONMENT_ENV = "ENVIRONMENT"


def configure_logging(environment: str | None = None) -> None:
    """Configure structlog for the given environment.

    Args:
        environment: 'production' (JSON) or anything else (console). Read
            from the ENVIRONMENT variable when omitted; defaults to
            production.
    """
    configure_structlog(
        environment=environment or os.environ.get(ENVIRONMENT_ENV, "production")
    )


__all__ = ["configure_logging"]

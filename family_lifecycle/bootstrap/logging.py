"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from family_lifecycle.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)

ENVIRONMENT_ENV = "LIFECYCLE_ENVIRONMENT"


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for the given environment.

    Falls back to LIFECYCLE_ENVIRONMENT, then "production".
    """
    _configure_structlog(
        environment=environment or os.getenv(ENVIRONMENT_ENV, "production")
    )


__all__ = ["configure_structlog"]

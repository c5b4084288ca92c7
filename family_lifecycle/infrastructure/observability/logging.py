"""structlog setup for lifecycle services.

Every line carries level, ISO timestamp and (inside an action scope) the
correlation ID. Production renders one JSON object per line; other
environments use the console renderer. ``LOG_LEVEL`` picks the threshold.

A production line for an initiate looks like:
    {"event": "dissolution_initiated", "service": "FamilyDissolutionService",
     "component": "lifecycle_backend", "family_id": "fam-1",
     "correlation_id": "...", "level": "info", "timestamp": "..."}

Usage:
    from family_lifecycle.infrastructure.observability import configure_structlog

    configure_structlog(environment="development")
"""

import logging
import os
from typing import Any, cast

import structlog
from structlog.typing import EventDict, Processor

from family_lifecycle.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
PRODUCTION = "production"

# Reauth tokens are bearer credentials.
CREDENTIAL_KEYS: frozenset[str] = frozenset({"reauth_token", "token"})


def drop_credentials(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Remove credential fields that slipped into a log call."""
    for key in CREDENTIAL_KEYS & event_dict.keys():
        del event_dict[key]
    return event_dict


def _resolve_level() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def build_processors(environment: str) -> list[Processor]:
    """Processor chain for ``environment``, renderer last."""
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        cast(Processor, correlation_id_processor),
        cast(Processor, drop_credentials),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if environment == PRODUCTION:
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def configure_structlog(environment: str = PRODUCTION) -> None:
    """Configure structlog once at process start."""
    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

"""Observability: structured logging and correlation IDs.

Usage:
    from family_lifecycle.infrastructure.observability import (
        configure_structlog,
        action_scope,
    )

    configure_structlog(environment="production")
    with action_scope():
        ...
"""

from family_lifecycle.infrastructure.observability.correlation import (
    action_scope,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from family_lifecycle.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "action_scope",
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]

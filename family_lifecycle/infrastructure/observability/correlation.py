"""Correlation IDs tying one guardian action to every log line it causes.

An orchestrator call opens an action scope; the orchestrator's log lines and
the backend service's log lines for that call then share one correlation ID.
A caller that already set an ID (e.g. from an inbound request header) keeps
it; nested scopes never replace it.

Usage:
    with action_scope():
        await orchestrator.cancel(family_id, actor_id)

    # In structlog configuration
    processors = [..., correlation_id_processor, ...]
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the current correlation ID, or empty string if none is set."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


@contextmanager
def action_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Run a block under a correlation ID, restoring the previous one after.

    Args:
        correlation_id: ID to use when none is active. Generated if omitted.

    Yields:
        The correlation ID in effect inside the block.
    """
    current = _correlation_id.get()
    if current:
        yield current
        return
    token = _correlation_id.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor filling in correlation_id when one is active.

    An explicitly bound correlation_id wins over the context value.
    """
    correlation_id = get_correlation_id()
    if correlation_id and not event_dict.get("correlation_id"):
        event_dict["correlation_id"] = correlation_id
    return event_dict

"""Structured logging mixin shared by orchestrators and backend services.

Every lifecycle log line carries the emitting class, a component label
("lifecycle" for client-side orchestrators, "lifecycle_backend" for the
services enforcing the protocol), the operation name and the current
correlation ID.

Usage:
    class DissolutionOrchestrator(LoggingMixin):
        def __init__(self, remote: DissolutionRemoteProtocol) -> None:
            self._remote = remote
            self._init_logger()

        async def cancel(self, family_id: str, actor_id: str) -> None:
            log = self._log_operation("cancel", family_id=family_id)
            log.info("cancel_requested")
"""

import structlog

from family_lifecycle.infrastructure.observability.correlation import (
    get_correlation_id,
)
from family_lifecycle.infrastructure.observability.logging import CREDENTIAL_KEYS


class LoggingMixin:
    """Adds ``_init_logger`` and ``_log_operation`` to a service.

    Attributes:
        _log: Logger bound with ``service`` and ``component``.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "lifecycle") -> None:
        """Bind the service logger. Call at the end of ``__init__``.

        Args:
            component: Log category for this service.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Logger scoped to one operation.

        Credential-bearing keys in ``context`` are dropped.

        Args:
            operation: Operation name, e.g. "initiate".
            **context: Identifiers to bind (family_id, actor_id, ...).

        Returns:
            Logger bound with operation, correlation_id and the context.
        """
        safe_context = {
            key: value
            for key, value in context.items()
            if key not in CREDENTIAL_KEYS
        }
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **safe_context,
        )

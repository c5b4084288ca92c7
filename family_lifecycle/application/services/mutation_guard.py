"""Single-in-flight guard for destructive operations.

Wraps destructive remote calls issued from one orchestrator instance so that
a double-click or re-entrant call cannot send two network requests for the
same action.

Scope:
- Per orchestrator instance, not shared across instances or processes.
  Two open sessions can still race; the backend's conditional write is
  what rejects the second initiate in that case.
- A rejected acquisition fails fast. Callers never queue or retry.
- The guard is released in ``finally``, so a raised or timed-out call never
  leaves it stuck.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from structlog import get_logger

from family_lifecycle.domain.errors.operation import OperationAlreadyInProgressError

logger = get_logger()


class MutationGuard:
    """Exclusive in-flight lock for one class of destructive operations.

    Example:
        >>> guard = MutationGuard("dissolution")
        >>> guard.acquire("initiate")
        True
        >>> guard.acquire("cancel")
        False
        >>> guard.release()
    """

    def __init__(self, name: str) -> None:
        """Initialize an unheld guard.

        Args:
            name: Label for the operation class this guard covers (for logs).
        """
        self._name = name
        self._held_by: str | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_held(self) -> bool:
        return self._held_by is not None

    @property
    def held_by(self) -> str | None:
        """The operation currently holding the guard, if any."""
        return self._held_by

    def acquire(self, operation: str) -> bool:
        """Try to take the guard.

        Args:
            operation: The operation requesting the guard.

        Returns:
            True if acquired, False if already held.
        """
        if self._held_by is not None:
            return False
        self._held_by = operation
        return True

    def release(self) -> None:
        """Release the guard. Releasing an unheld guard is a no-op."""
        self._held_by = None

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        """Hold the guard for the duration of a block.

        The rejection happens before the block runs, so no remote call is
        made for a rejected operation.

        Args:
            operation: The operation requesting the guard.

        Raises:
            OperationAlreadyInProgressError: If the guard is already held.

        Example:
            with guard.hold("initiate"):
                record = await remote.initiate_dissolution(...)
        """
        if not self.acquire(operation):
            logger.warning(
                "mutation_rejected_in_flight",
                guard=self._name,
                operation=operation,
                held_by=self._held_by,
            )
            raise OperationAlreadyInProgressError(
                operation=operation, held_by=self._held_by
            )
        try:
            yield
        finally:
            self.release()

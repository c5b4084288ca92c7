"""Shared call discipline for the lifecycle orchestrators.

Both orchestrators follow the same contract:

1. Mutating calls require actor identity; a missing actor is a re-auth failure
   raised before any remote call.
2. Mutating calls hold the instance's MutationGuard; an overlapping call is
   rejected with ALREADY_IN_PROGRESS before any remote call.
3. Every remote call is bounded by ``remote_timeout_seconds``. A timeout is
   converted into the operation's failure kind and releases the guard.
4. Every failure is classified, cached for display and raised. Nothing is
   retried. Only re-auth failures set ``requires_reauth``; every successful
   mutating call clears it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol
from family_lifecycle.application.services.base import LoggingMixin
from family_lifecycle.application.services.mutation_guard import MutationGuard
from family_lifecycle.application.services.time_authority_service import (
    TimeAuthorityService,
)
from family_lifecycle.config.lifecycle_config import (
    DEFAULT_LIFECYCLE_CONFIG,
    LifecycleConfig,
)
from family_lifecycle.domain.errors.lifecycle import get_lifecycle_error_message
from family_lifecycle.domain.errors.operation import (
    LifecycleOperationError,
    ReauthRequiredError,
    error_for_classified,
)
from family_lifecycle.domain.models.error_kind import ClassifiedError
from family_lifecycle.domain.services.error_classifier import (
    LifecycleOperation,
    classify_error,
)
from family_lifecycle.infrastructure.observability.correlation import action_scope

T = TypeVar("T")


class OrchestratorState(Enum):
    """Lifecycle of an orchestrator's cached view.

    States:
        UNINITIALIZED: Nothing has been loaded or returned yet.
        IDLE: A result (possibly None) is cached and no mutation is in flight.
        BUSY: A mutating call is in flight.
    """

    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    BUSY = "busy"


class LifecycleOrchestratorBase(LoggingMixin):
    """Guard, timeout, classification and re-auth bookkeeping."""

    def __init__(
        self,
        guard_name: str,
        time_authority: TimeAuthorityProtocol | None = None,
        config: LifecycleConfig | None = None,
    ) -> None:
        self._guard = MutationGuard(guard_name)
        self._time = time_authority or TimeAuthorityService()
        self._config = config or DEFAULT_LIFECYCLE_CONFIG
        self._loaded = False
        self._pending_reads = 0
        self._error: ClassifiedError | None = None
        self._requires_reauth = False
        self._init_logger()

    @property
    def state(self) -> OrchestratorState:
        if self._guard.is_held:
            return OrchestratorState.BUSY
        if not self._loaded:
            return OrchestratorState.UNINITIALIZED
        return OrchestratorState.IDLE

    @property
    def loading(self) -> bool:
        return self._guard.is_held or self._pending_reads > 0

    @property
    def error(self) -> ClassifiedError | None:
        return self._error

    @property
    def requires_reauth(self) -> bool:
        return self._requires_reauth

    def clear_error(self) -> None:
        self._error = None

    def set_requires_reauth(self, value: bool) -> None:
        """Override the re-auth flag, e.g. after the caller obtained a fresh credential."""
        self._requires_reauth = value

    def _record_failure(self, classified: ClassifiedError) -> LifecycleOperationError:
        self._error = classified
        if classified.requires_reauth:
            self._requires_reauth = True
        return error_for_classified(classified)

    def _require_actor(self, operation: LifecycleOperation, actor_id: str | None) -> None:
        if actor_id:
            return
        error = ReauthRequiredError()
        self._record_failure(error.classified)
        self._log_operation(operation.value).warning("mutation_rejected_no_actor")
        raise error

    async def _call_remote(
        self,
        operation: LifecycleOperation,
        call: Callable[[], Awaitable[T]],
        **log_context: object,
    ) -> T:
        """Run one remote call with timeout and classification.

        Raises:
            LifecycleOperationError: Classified failure (already cached).
        """
        log = self._log_operation(operation.value, **log_context)
        started = self._time.monotonic()
        try:
            result = await asyncio.wait_for(
                call(), timeout=self._config.remote_timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            classified = ClassifiedError(
                kind=operation.failure_kind,
                message=get_lifecycle_error_message("network-error"),
            )
            log.error(
                "remote_call_timed_out",
                timeout_seconds=self._config.remote_timeout_seconds,
            )
            raise self._record_failure(classified) from exc
        except Exception as exc:
            classified = classify_error(exc, operation)
            log.warning(
                "remote_call_failed",
                kind=classified.kind.value,
                code=classified.code,
                error_type=type(exc).__name__,
            )
            raise self._record_failure(classified) from exc

        log.info(
            "remote_call_succeeded",
            duration_ms=round((self._time.monotonic() - started) * 1000, 1),
        )
        return result

    async def _guarded(
        self,
        operation: LifecycleOperation,
        actor_id: str | None,
        call: Callable[[], Awaitable[T]],
        **log_context: object,
    ) -> T:
        """Run a destructive remote call under the in-flight guard."""
        with action_scope():
            self._require_actor(operation, actor_id)
            try:
                with self._guard.hold(operation.value):
                    self._error = None
                    result = await self._call_remote(
                        operation, call, actor_id=actor_id, **log_context
                    )
            except LifecycleOperationError as exc:
                self._error = exc.classified
                raise
        self._loaded = True
        self._requires_reauth = False
        return result

    async def _unguarded(
        self,
        operation: LifecycleOperation,
        call: Callable[[], Awaitable[T]],
        **log_context: object,
    ) -> T:
        """Run a read. Safe while a mutation is in flight."""
        self._pending_reads += 1
        try:
            with action_scope():
                return await self._call_remote(operation, call, **log_context)
        finally:
            self._pending_reads -= 1

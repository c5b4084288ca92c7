"""Client-side orchestrator for family dissolution.

Holds the latest known DissolutionRecord for one client instance and drives
initiate / acknowledge / cancel / read calls against the remote operations.
The cached record is advisory; the authoritative record lives behind
DissolutionRemoteProtocol.

State machine over the cached view:
    uninitialized -> idle(record | None) <-> busy

Ordering:
- Mutations share one guard, so at most one destructive request is in flight
  from this instance. An overlapping call is rejected before any network
  activity.
- Reads are unguarded and unordered with respect to writes. A read that lands
  after a write may briefly replace the cache with an older record.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime

from family_lifecycle.application.ports.dissolution_remote import (
    DissolutionRemoteProtocol,
)
from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol
from family_lifecycle.application.services.orchestrator_base import (
    LifecycleOrchestratorBase,
    OrchestratorState,
)
from family_lifecycle.config.lifecycle_config import LifecycleConfig
from family_lifecycle.domain.models.dissolution import (
    DataHandlingOption,
    DissolutionRecord,
)
from family_lifecycle.domain.models.error_kind import ClassifiedError
from family_lifecycle.domain.services import dissolution_protocol
from family_lifecycle.domain.services.error_classifier import LifecycleOperation


@dataclass(frozen=True)
class DissolutionView:
    """Snapshot of the orchestrator's cached view for rendering."""

    state: OrchestratorState
    record: DissolutionRecord | None
    loading: bool
    error: ClassifiedError | None
    requires_reauth: bool


class DissolutionOrchestrator(LifecycleOrchestratorBase):
    """Drives the dissolution workflow for one client instance.

    Example:
        >>> orchestrator = DissolutionOrchestrator(remote=dissolution_service)
        >>> record = await orchestrator.initiate(
        ...     family_id="fam-1",
        ...     actor_id="guardian-a",
        ...     data_handling_option=DataHandlingOption.DELETE_ALL,
        ...     reauth_token=token,
        ... )
        >>> orchestrator.can_cancel()
        True
    """

    def __init__(
        self,
        remote: DissolutionRemoteProtocol,
        time_authority: TimeAuthorityProtocol | None = None,
        config: LifecycleConfig | None = None,
    ) -> None:
        """Initialize the orchestrator with an empty cache.

        Args:
            remote: The remote dissolution operations.
            time_authority: Clock for days-remaining and call timing.
            config: Lifecycle configuration (remote timeout).
        """
        super().__init__("dissolution", time_authority=time_authority, config=config)
        self._remote = remote
        self._record: DissolutionRecord | None = None

    @property
    def record(self) -> DissolutionRecord | None:
        return self._record

    @property
    def view(self) -> DissolutionView:
        return DissolutionView(
            state=self.state,
            record=self._record,
            loading=self.loading,
            error=self._error,
            requires_reauth=self._requires_reauth,
        )

    async def initiate(
        self,
        family_id: str,
        actor_id: str | None,
        data_handling_option: DataHandlingOption,
        reauth_token: str,
    ) -> DissolutionRecord:
        """Start a dissolution.

        The token is forwarded once and never cached.

        Args:
            family_id: Family to dissolve.
            actor_id: The initiating guardian.
            data_handling_option: How data is handled after the cooling period.
            reauth_token: Fresh reauthentication token.

        Returns:
            The created record (also cached).

        Raises:
            ReauthRequiredError: No actor, or the remote side demands re-auth.
            OperationAlreadyInProgressError: A mutation is already in flight.
            LifecycleOperationError: Any other classified failure.
        """
        record = await self._guarded(
            LifecycleOperation.INITIATE,
            actor_id,
            lambda: self._remote.initiate_dissolution(
                family_id=family_id,
                actor_id=actor_id,
                data_handling_option=data_handling_option,
                reauth_token=reauth_token,
            ),
            family_id=family_id,
            data_handling_option=data_handling_option.value,
        )
        self._record = record
        return record

    async def acknowledge(self, family_id: str, actor_id: str | None) -> DissolutionRecord:
        """Acknowledge a dissolution started by another guardian.

        No local pre-filtering: business-rule rejections ("already
        acknowledged", "not a member") come back from the remote side and are
        surfaced as ACKNOWLEDGMENT_FAILED.

        Raises:
            ReauthRequiredError: No actor, or the remote side demands re-auth.
            OperationAlreadyInProgressError: A mutation is already in flight.
            LifecycleOperationError: Any other classified failure.
        """
        record = await self._guarded(
            LifecycleOperation.ACKNOWLEDGE,
            actor_id,
            lambda: self._remote.acknowledge_dissolution(
                family_id=family_id, actor_id=actor_id
            ),
            family_id=family_id,
        )
        self._record = record
        return record

    async def cancel(self, family_id: str, actor_id: str | None) -> DissolutionRecord:
        """Cancel a pending or cooling dissolution.

        Raises:
            ReauthRequiredError: No actor, or the remote side demands re-auth.
            OperationAlreadyInProgressError: A mutation is already in flight.
            LifecycleOperationError: CANCELLATION_FAILED when the record can
                no longer be cancelled, or any other classified failure.
        """
        record = await self._guarded(
            LifecycleOperation.CANCEL,
            actor_id,
            lambda: self._remote.cancel_dissolution(
                family_id=family_id, actor_id=actor_id
            ),
            family_id=family_id,
        )
        self._record = record
        return record

    async def get_status(self, family_id: str) -> DissolutionRecord | None:
        """Refresh the cached record from the remote side.

        Unguarded: safe to call repeatedly and while a mutation is in flight.

        Raises:
            LifecycleOperationError: Classified read failure.
        """
        record = await self._unguarded(
            LifecycleOperation.GET_STATUS,
            lambda: self._remote.get_dissolution_status(family_id=family_id),
            family_id=family_id,
        )
        self._record = record
        self._loaded = True
        return record

    def get_days_remaining(self, now: datetime | None = None) -> int | None:
        """Days until the cached record's scheduled deletion, or None."""
        return dissolution_protocol.days_remaining(
            self._record, now or self._time.now()
        )

    def user_needs_to_acknowledge(
        self,
        actor_id: str,
        guardian_ids: Collection[str] | None = None,
    ) -> bool:
        """Whether ``actor_id`` still has to acknowledge the cached record.

        Args:
            actor_id: The guardian viewing the dashboard.
            guardian_ids: Current guardian list, when the caller has it. An
                actor missing from the list (e.g. after self-removal) never
                needs to acknowledge.
        """
        if guardian_ids is not None and actor_id not in guardian_ids:
            return False
        return dissolution_protocol.needs_acknowledgment(self._record, actor_id)

    def can_cancel(self) -> bool:
        """Whether the cached record can still be cancelled."""
        return dissolution_protocol.can_cancel(
            self._record.status if self._record is not None else None
        )

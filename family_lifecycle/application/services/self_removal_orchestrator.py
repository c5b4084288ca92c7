"""Client-side orchestrator for guardian self-removal.

The unilateral sibling of dissolution: an eligibility pre-check plus one
guarded destructive call. There are no intermediate states. After a
successful removal the actor is no longer a member, so a repeated call
surfaces a clean REMOVAL_FAILED instead of applying twice.
"""

from __future__ import annotations

from dataclasses import dataclass

from family_lifecycle.application.ports.self_removal_remote import (
    SelfRemovalRemoteProtocol,
)
from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol
from family_lifecycle.application.services.orchestrator_base import (
    LifecycleOrchestratorBase,
    OrchestratorState,
)
from family_lifecycle.config.lifecycle_config import LifecycleConfig
from family_lifecycle.domain.models.error_kind import ClassifiedError
from family_lifecycle.domain.models.self_removal import (
    SelfRemovalEligibility,
    SelfRemovalResult,
)
from family_lifecycle.domain.services.error_classifier import LifecycleOperation


@dataclass(frozen=True)
class SelfRemovalView:
    """Snapshot of the orchestrator's cached view for rendering."""

    state: OrchestratorState
    result: SelfRemovalResult | None
    eligibility: SelfRemovalEligibility | None
    loading: bool
    error: ClassifiedError | None
    requires_reauth: bool


class SelfRemovalOrchestrator(LifecycleOrchestratorBase):
    """Drives guardian self-removal for one client instance."""

    def __init__(
        self,
        remote: SelfRemovalRemoteProtocol,
        time_authority: TimeAuthorityProtocol | None = None,
        config: LifecycleConfig | None = None,
    ) -> None:
        super().__init__("self_removal", time_authority=time_authority, config=config)
        self._remote = remote
        self._result: SelfRemovalResult | None = None
        self._eligibility: SelfRemovalEligibility | None = None

    @property
    def result(self) -> SelfRemovalResult | None:
        return self._result

    @property
    def eligibility(self) -> SelfRemovalEligibility | None:
        return self._eligibility

    @property
    def view(self) -> SelfRemovalView:
        return SelfRemovalView(
            state=self.state,
            result=self._result,
            eligibility=self._eligibility,
            loading=self.loading,
            error=self._error,
            requires_reauth=self._requires_reauth,
        )

    async def check_eligibility(
        self,
        family_id: str,
        actor_id: str,
    ) -> SelfRemovalEligibility:
        """Check whether the actor can leave, and whether they are the only guardian.

        Read-only and unguarded. ``is_single_guardian`` is a warning for the
        confirmation screen, not a block.

        Raises:
            LifecycleOperationError: Classified read failure.
        """
        eligibility = await self._unguarded(
            LifecycleOperation.CHECK_ELIGIBILITY,
            lambda: self._remote.can_remove_self(
                family_id=family_id, actor_id=actor_id
            ),
            family_id=family_id,
            actor_id=actor_id,
        )
        self._eligibility = eligibility
        self._loaded = True
        return eligibility

    async def remove(
        self,
        family_id: str,
        actor_id: str | None,
        reauth_token: str,
    ) -> SelfRemovalResult:
        """Remove the actor from the family. Immediate and irreversible.

        Args:
            family_id: Family to leave.
            actor_id: The leaving guardian.
            reauth_token: Fresh reauthentication token, forwarded once.

        Returns:
            The removal result (also cached).

        Raises:
            ReauthRequiredError: No actor, or the remote side demands re-auth.
            OperationAlreadyInProgressError: A removal is already in flight.
            LifecycleOperationError: REMOVAL_FAILED or another classified failure.
        """
        result = await self._guarded(
            LifecycleOperation.REMOVE,
            actor_id,
            lambda: self._remote.remove_self_from_family(
                family_id=family_id,
                actor_id=actor_id,
                reauth_token=reauth_token,
            ),
            family_id=family_id,
        )
        self._result = result
        return result

"""Backend enforcement of guardian self-removal.

Implements SelfRemovalRemoteProtocol. Removal is unilateral: no co-guardian
is notified or asked. The audit entry is sealed so remaining guardians cannot
see it in their audit view.

A guardian who leaves while a dissolution awaits their acknowledgment stops
blocking it. When nobody left in the family still owes an acknowledgment, the
dissolution enters its cooling period as part of the removal.
"""

from __future__ import annotations

import structlog

from family_lifecycle.application.ports.audit_log import AuditLogProtocol
from family_lifecycle.application.ports.family_repository import (
    FamilyRepositoryProtocol,
)
from family_lifecycle.application.ports.reauth_verifier import ReauthVerifierProtocol
from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol
from family_lifecycle.application.services.base import LoggingMixin
from family_lifecycle.application.services.time_authority_service import (
    TimeAuthorityService,
)
from family_lifecycle.config.lifecycle_config import (
    DEFAULT_LIFECYCLE_CONFIG,
    LifecycleConfig,
)
from family_lifecycle.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from family_lifecycle.domain.errors.lifecycle import (
    FamilyNotFoundError,
    NotAGuardianError,
)
from family_lifecycle.domain.models.audit_entry import (
    SYSTEM_ACTOR_ID,
    AuditAction,
    AuditEntry,
)
from family_lifecycle.domain.models.dissolution import DissolutionStatus
from family_lifecycle.domain.models.self_removal import (
    SelfRemovalEligibility,
    SelfRemovalResult,
)
from family_lifecycle.domain.services.dissolution_protocol import (
    pending_acknowledgments,
)


class SelfRemovalService(LoggingMixin):
    """Server-side self-removal operations."""

    def __init__(
        self,
        family_repository: FamilyRepositoryProtocol,
        audit_log: AuditLogProtocol,
        reauth_verifier: ReauthVerifierProtocol,
        time_authority: TimeAuthorityProtocol | None = None,
        config: LifecycleConfig | None = None,
    ) -> None:
        self._families = family_repository
        self._audit = audit_log
        self._reauth = reauth_verifier
        self._time = time_authority or TimeAuthorityService()
        self._config = config or DEFAULT_LIFECYCLE_CONFIG
        self._init_logger(component="lifecycle_backend")

    async def can_remove_self(
        self,
        family_id: str,
        actor_id: str,
    ) -> SelfRemovalEligibility:
        """Check whether the actor may leave. Never mutates."""
        family = await self._families.get(family_id)
        if family is None:
            return SelfRemovalEligibility(
                can_remove=False,
                is_single_guardian=False,
                reason=FamilyNotFoundError.code,
            )
        if not family.is_guardian(actor_id):
            return SelfRemovalEligibility(
                can_remove=False,
                is_single_guardian=False,
                reason=NotAGuardianError.code,
            )
        return SelfRemovalEligibility(
            can_remove=True,
            is_single_guardian=len(family.guardian_ids) == 1,
        )

    async def remove_self_from_family(
        self,
        family_id: str,
        actor_id: str,
        reauth_token: str,
    ) -> SelfRemovalResult:
        """Remove the actor from the family's guardian list.

        Membership is checked before the token is consumed, so a repeated
        call fails with ``not-a-guardian`` and leaves its token unspent. A
        pending dissolution that no remaining guardian still has to
        acknowledge moves to its cooling period.

        Raises:
            FamilyNotFoundError: Family does not exist.
            NotAGuardianError: Actor is not (or no longer) a guardian.
            ReauthTokenRequiredError: Token missing or not issued to the actor.
            ReauthTokenExpiredError: Token expired or already used.
            ConcurrentModificationError: The guardian list changed underneath.
        """
        log = self._log_operation(
            "remove_self_from_family", family_id=family_id, actor_id=actor_id
        )
        family = await self._families.get(family_id)
        if family is None:
            log.warning("family_not_found")
            raise FamilyNotFoundError(family_id)
        if not family.is_guardian(actor_id):
            log.warning("actor_not_a_guardian")
            raise NotAGuardianError(family_id, actor_id)

        await self._reauth.consume(actor_id, reauth_token)

        is_single_guardian = len(family.guardian_ids) == 1
        try:
            await self._families.compare_and_remove_guardian(
                family_id,
                guardian_id=actor_id,
                expected_guardian_ids=family.guardian_ids,
            )
        except ConcurrentModificationError:
            current = await self._families.get(family_id)
            if current is None or not current.is_guardian(actor_id):
                raise NotAGuardianError(family_id, actor_id) from None
            raise

        now = self._time.now()
        await self._audit.append(
            AuditEntry.create(
                family_id=family_id,
                action=AuditAction.GUARDIAN_SELF_REMOVED,
                performed_by=actor_id,
                performed_at=now,
                was_single_guardian=is_single_guardian,
            )
        )
        log.info("guardian_self_removed", is_single_guardian=is_single_guardian)

        await self._settle_pending_dissolution(family_id, log)
        return SelfRemovalResult(
            success=True,
            is_single_guardian=is_single_guardian,
            family_id=family_id,
            removed_at=now,
        )

    async def _settle_pending_dissolution(
        self,
        family_id: str,
        log: structlog.BoundLogger,
    ) -> None:
        """Start the cooling period if the removal satisfied the quorum.

        The removal itself is already committed; a lost conditional write
        here means another writer moved the record first and is skipped.
        """
        family = await self._families.get(family_id)
        if family is None or family.dissolution is None:
            return
        record = family.dissolution
        if record.status is not DissolutionStatus.PENDING_ACKNOWLEDGMENT:
            return
        if pending_acknowledgments(record, family.guardian_ids):
            return

        now = self._time.now()
        updated = record.with_quorum_met(
            now,
            cooling_period_days=self._config.cooling_period_days,
            extended_retention_days=self._config.extended_retention_days,
        )
        try:
            await self._families.compare_and_set_dissolution(
                family_id, expected=record, new=updated
            )
        except ConcurrentModificationError:
            log.info("dissolution_quorum_settle_skipped")
            return

        await self._audit.append(
            AuditEntry.create(
                family_id=family_id,
                action=AuditAction.DISSOLUTION_QUORUM_REACHED,
                performed_by=SYSTEM_ACTOR_ID,
                performed_at=now,
                all_acknowledged=True,
                scheduled_deletion_at=(
                    updated.scheduled_deletion_at.isoformat()
                    if updated.scheduled_deletion_at is not None
                    else None
                ),
            )
        )
        log.info("dissolution_quorum_reached", status=updated.status.value)

"""Backend enforcement of the family dissolution protocol.

Implements DissolutionRemoteProtocol on top of the family repository. This
is where the invariants actually hold; the client-side orchestrator only
caches what this service returns.

Enforced here:
- Only guardians of the family may initiate, acknowledge or cancel.
- ``initiate`` needs a fresh single-use reauth token.
- At most one non-terminal record per family. Writes are conditional, so
  when two clients race an initiate the loser gets ``already-dissolving``.
- The quorum is every current guardian except the initiator. The moment it
  is met the record enters the cooling period and the deletion date is fixed.
- Completed and cancelled records are never mutated again.
- Every mutation is written to the audit log.
"""

from __future__ import annotations

from datetime import datetime

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
    AlreadyAcknowledgedError,
    AlreadyDissolvingError,
    CannotAcknowledgeOwnError,
    CannotCancelError,
    DissolutionNotPendingError,
    FamilyNotFoundError,
    NotAGuardianError,
)
from family_lifecycle.domain.models.audit_entry import (
    SYSTEM_ACTOR_ID,
    AuditAction,
    AuditEntry,
)
from family_lifecycle.domain.models.dissolution import (
    DataHandlingOption,
    DissolutionRecord,
    DissolutionStatus,
)
from family_lifecycle.domain.models.family import Family
from family_lifecycle.domain.services.dissolution_protocol import (
    can_cancel,
    pending_acknowledgments,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class FamilyDissolutionService(LoggingMixin):
    """Server-side dissolution operations.

    Example:
        >>> service = FamilyDissolutionService(
        ...     family_repository=families,
        ...     audit_log=audit_log,
        ...     reauth_verifier=tokens,
        ... )
        >>> record = await service.initiate_dissolution(
        ...     "fam-1", "guardian-a", DataHandlingOption.DELETE_ALL, token
        ... )
    """

    def __init__(
        self,
        family_repository: FamilyRepositoryProtocol,
        audit_log: AuditLogProtocol,
        reauth_verifier: ReauthVerifierProtocol,
        time_authority: TimeAuthorityProtocol | None = None,
        config: LifecycleConfig | None = None,
    ) -> None:
        """Initialize the dissolution service.

        Args:
            family_repository: Family persistence with conditional writes.
            audit_log: Append-only audit log.
            reauth_verifier: Consumes single-use reauth tokens.
            time_authority: Clock. Defaults to the system clock.
            config: Cooling period and retention windows.
        """
        self._families = family_repository
        self._audit = audit_log
        self._reauth = reauth_verifier
        self._time = time_authority or TimeAuthorityService()
        self._config = config or DEFAULT_LIFECYCLE_CONFIG
        self._init_logger(component="lifecycle_backend")

    async def _get_guardian_family(
        self,
        family_id: str,
        actor_id: str,
        log: structlog.BoundLogger,
    ) -> Family:
        family = await self._families.get(family_id)
        if family is None:
            log.warning("family_not_found")
            raise FamilyNotFoundError(family_id)
        if not family.is_guardian(actor_id):
            log.warning("actor_not_a_guardian")
            raise NotAGuardianError(family_id, actor_id)
        return family

    async def initiate_dissolution(
        self,
        family_id: str,
        actor_id: str,
        data_handling_option: DataHandlingOption,
        reauth_token: str,
    ) -> DissolutionRecord:
        """Start a dissolution.

        Membership and an already active dissolution are checked before the
        token is consumed, so those rejections leave it unspent. The token is
        spent before the conditional write: a caller that loses a concurrent
        initiate to another guardian gets ``already-dissolving`` with its token
        used, and needs a fresh one for anything it does next.

        Raises:
            FamilyNotFoundError: Family does not exist.
            NotAGuardianError: Actor is not a guardian.
            AlreadyDissolvingError: A non-terminal record exists, or a
                concurrent initiate won the race.
            ReauthTokenRequiredError: Token missing or not issued to the actor.
            ReauthTokenExpiredError: Token expired or already used.
        """
        log = self._log_operation(
            "initiate_dissolution", family_id=family_id, actor_id=actor_id
        )
        family = await self._get_guardian_family(family_id, actor_id, log)

        if family.has_active_dissolution:
            log.warning("dissolution_already_active")
            raise AlreadyDissolvingError(family_id)

        await self._reauth.consume(actor_id, reauth_token)

        now = self._time.now()
        co_guardians = family.co_guardians_of(actor_id)
        record = DissolutionRecord.initiate(
            initiated_by=actor_id,
            initiated_at=now,
            data_handling_option=data_handling_option,
            co_guardian_ids=co_guardians,
            cooling_period_days=self._config.cooling_period_days,
            extended_retention_days=self._config.extended_retention_days,
        )

        try:
            await self._families.compare_and_set_dissolution(
                family_id, expected=family.dissolution, new=record
            )
        except ConcurrentModificationError:
            current = await self._families.get(family_id)
            if current is not None and current.has_active_dissolution:
                log.warning("dissolution_initiate_lost_race")
                raise AlreadyDissolvingError(family_id) from None
            raise

        await self._audit.append(
            AuditEntry.create(
                family_id=family_id,
                action=AuditAction.DISSOLUTION_INITIATED,
                performed_by=actor_id,
                performed_at=now,
                data_handling_option=data_handling_option.value,
                is_shared_custody=bool(co_guardians),
                guardian_count=len(family.guardian_ids),
                scheduled_deletion_at=_iso(record.scheduled_deletion_at),
            )
        )
        log.info(
            "dissolution_initiated",
            status=record.status.value,
            guardian_count=len(family.guardian_ids),
        )
        return record

    async def acknowledge_dissolution(
        self,
        family_id: str,
        actor_id: str,
    ) -> DissolutionRecord:
        """Record a co-guardian's acknowledgment.

        Raises:
            FamilyNotFoundError: Family does not exist.
            NotAGuardianError: Actor is not a guardian.
            DissolutionNotPendingError: No record awaiting acknowledgments.
            CannotAcknowledgeOwnError: Actor is the initiator.
            AlreadyAcknowledgedError: Actor already acknowledged.
            ConcurrentModificationError: The record changed underneath.
        """
        log = self._log_operation(
            "acknowledge_dissolution", family_id=family_id, actor_id=actor_id
        )
        family = await self._get_guardian_family(family_id, actor_id, log)

        record = family.dissolution
        if record is None or record.status is not DissolutionStatus.PENDING_ACKNOWLEDGMENT:
            raise DissolutionNotPendingError(
                family_id, record.status.value if record is not None else None
            )
        if record.initiated_by == actor_id:
            raise CannotAcknowledgeOwnError()
        if record.has_acknowledged(actor_id):
            raise AlreadyAcknowledgedError()

        outstanding = pending_acknowledgments(record, family.guardian_ids)
        quorum_met = all(guardian_id == actor_id for guardian_id in outstanding)

        now = self._time.now()
        updated = record.with_acknowledgment(
            guardian_id=actor_id,
            acknowledged_at=now,
            quorum_met=quorum_met,
            cooling_period_days=self._config.cooling_period_days,
            extended_retention_days=self._config.extended_retention_days,
        )
        await self._families.compare_and_set_dissolution(
            family_id, expected=record, new=updated
        )

        await self._audit.append(
            AuditEntry.create(
                family_id=family_id,
                action=AuditAction.DISSOLUTION_ACKNOWLEDGED,
                performed_by=actor_id,
                performed_at=now,
                acknowledged_by=actor_id,
                all_acknowledged=quorum_met,
                scheduled_deletion_at=_iso(updated.scheduled_deletion_at),
            )
        )
        log.info(
            "dissolution_acknowledged",
            status=updated.status.value,
            all_acknowledged=quorum_met,
        )
        return updated

    async def cancel_dissolution(
        self,
        family_id: str,
        actor_id: str,
    ) -> DissolutionRecord:
        """Cancel a pending or cooling dissolution. Any guardian may cancel.

        Raises:
            FamilyNotFoundError: Family does not exist.
            NotAGuardianError: Actor is not a guardian.
            DissolutionNotPendingError: The family has no dissolution record.
            CannotCancelError: The record is completed or already cancelled.
            ConcurrentModificationError: The record changed underneath.
        """
        log = self._log_operation(
            "cancel_dissolution", family_id=family_id, actor_id=actor_id
        )
        family = await self._get_guardian_family(family_id, actor_id, log)

        record = family.dissolution
        if record is None:
            raise DissolutionNotPendingError(family_id)
        if not can_cancel(record.status):
            log.warning("dissolution_not_cancellable", status=record.status.value)
            raise CannotCancelError(family_id, record.status.value)

        now = self._time.now()
        updated = record.cancelled(cancelled_by=actor_id, cancelled_at=now)
        await self._families.compare_and_set_dissolution(
            family_id, expected=record, new=updated
        )

        await self._audit.append(
            AuditEntry.create(
                family_id=family_id,
                action=AuditAction.DISSOLUTION_CANCELLED,
                performed_by=actor_id,
                performed_at=now,
                cancelled_by=actor_id,
                previous_status=record.status.value,
            )
        )
        log.info("dissolution_cancelled", previous_status=record.status.value)
        return updated

    async def get_dissolution_status(self, family_id: str) -> DissolutionRecord | None:
        """Read the family's latest dissolution record, or None."""
        family = await self._families.get(family_id)
        if family is None:
            return None
        return family.dissolution

    async def complete_due_dissolutions(self) -> list[str]:
        """Close out every cooling period whose deletion date has passed.

        Intended to run on a schedule. A record cancelled between the scan and
        the write loses its conditional write and is skipped; cancellation wins.
        Actual data deletion is a downstream concern.

        Returns:
            IDs of families whose dissolution was completed.
        """
        log = self._log_operation("complete_due_dissolutions")
        now = self._time.now()
        completed: list[str] = []

        for family in await self._families.list_by_dissolution_status(
            DissolutionStatus.COOLING_PERIOD
        ):
            record = family.dissolution
            if record is None or record.scheduled_deletion_at is None:
                continue
            if record.scheduled_deletion_at > now:
                continue

            updated = record.completed(completed_at=now)
            try:
                await self._families.compare_and_set_dissolution(
                    family.family_id, expected=record, new=updated
                )
            except ConcurrentModificationError:
                log.info("dissolution_completion_skipped", family_id=family.family_id)
                continue

            await self._audit.append(
                AuditEntry.create(
                    family_id=family.family_id,
                    action=AuditAction.DISSOLUTION_COMPLETED,
                    performed_by=SYSTEM_ACTOR_ID,
                    performed_at=now,
                    data_handling_option=record.data_handling_option.value,
                    scheduled_deletion_at=_iso(record.scheduled_deletion_at),
                )
            )
            completed.append(family.family_id)

        log.info("due_dissolutions_completed", count=len(completed))
        return completed

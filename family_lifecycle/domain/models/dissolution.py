"""Family dissolution domain model.

A DissolutionRecord is the durable fact describing one family's in-progress
or terminal dissolution. Records are frozen; every transition returns a new
record and enforces the state machine.

State Machine:
    pending_acknowledgment -> cooling_period (every remaining co-guardian acknowledged)
    pending_acknowledgment -> cancelled
    cooling_period -> completed (scheduled deletion reached)
    cooling_period -> cancelled

Terminal States:
    completed, cancelled. A terminal record is read-only; a new dissolution
    for the same family may only begin once the previous record is terminal.

Invariants:
- The initiator never appears in ``acknowledgments`` (consent is implicit).
- ``acknowledgments`` is append-only until ``all_acknowledged_at`` is set.
- ``all_acknowledged_at`` and ``scheduled_deletion_at`` are set exactly once
  and never recomputed. Cancellation keeps ``scheduled_deletion_at``; callers
  treat a cancelled record's deletion date as void.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum

from family_lifecycle.domain.errors.transition import (
    DissolutionRecordImmutableError,
    InvalidDissolutionTransitionError,
)

COOLING_PERIOD_DAYS: int = 30
EXTENDED_RETENTION_DAYS: int = 90


class DataHandlingOption(Enum):
    """What happens to family data once the cooling period ends.

    Options:
        DELETE_ALL: Queue everything for deletion after the cooling period.
        EXPORT_FIRST: Trigger a data export, then delete after the cooling period.
        RETAIN_90_DAYS: Keep data reachable for the extended retention window.
    """

    DELETE_ALL = "delete_all"
    EXPORT_FIRST = "export_first"
    RETAIN_90_DAYS = "retain_90_days"


class DissolutionStatus(Enum):
    """Status of a dissolution record."""

    PENDING_ACKNOWLEDGMENT = "pending_acknowledgment"
    COOLING_PERIOD = "cooling_period"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if this status is terminal (completed or cancelled)."""
        return self in TERMINAL_STATUSES

    def valid_transitions(self) -> frozenset[DissolutionStatus]:
        """Get valid target statuses from this status.

        Returns:
            Frozenset of reachable statuses. Empty for terminal statuses.
        """
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


TERMINAL_STATUSES: frozenset[DissolutionStatus] = frozenset(
    {DissolutionStatus.COMPLETED, DissolutionStatus.CANCELLED}
)

CANCELLABLE_STATUSES: frozenset[DissolutionStatus] = frozenset(
    {DissolutionStatus.PENDING_ACKNOWLEDGMENT, DissolutionStatus.COOLING_PERIOD}
)

STATUS_TRANSITION_MATRIX: dict[DissolutionStatus, frozenset[DissolutionStatus]] = {
    DissolutionStatus.PENDING_ACKNOWLEDGMENT: frozenset(
        {DissolutionStatus.COOLING_PERIOD, DissolutionStatus.CANCELLED}
    ),
    DissolutionStatus.COOLING_PERIOD: frozenset(
        {DissolutionStatus.COMPLETED, DissolutionStatus.CANCELLED}
    ),
    DissolutionStatus.COMPLETED: frozenset(),
    DissolutionStatus.CANCELLED: frozenset(),
}


def calculate_scheduled_deletion_date(
    data_handling_option: DataHandlingOption,
    from_date: datetime,
    cooling_period_days: int = COOLING_PERIOD_DAYS,
    extended_retention_days: int = EXTENDED_RETENTION_DAYS,
) -> datetime:
    """Calculate when deletion takes effect.

    Args:
        data_handling_option: Selected data handling option.
        from_date: The moment the quorum was met.
        cooling_period_days: Standard cooling period.
        extended_retention_days: Window used by RETAIN_90_DAYS.

    Returns:
        The scheduled deletion datetime.
    """
    days = (
        extended_retention_days
        if data_handling_option is DataHandlingOption.RETAIN_90_DAYS
        else cooling_period_days
    )
    return from_date + timedelta(days=days)


@dataclass(frozen=True, eq=True)
class DissolutionAcknowledgment:
    """One co-guardian's explicit confirmation.

    Attributes:
        guardian_id: The acknowledging guardian.
        acknowledged_at: When they acknowledged.
    """

    guardian_id: str
    acknowledged_at: datetime

    def __post_init__(self) -> None:
        if not self.guardian_id:
            raise ValueError("guardian_id is required")


@dataclass(frozen=True, eq=True)
class DissolutionRecord:
    """Durable dissolution fact for exactly one family.

    Attributes:
        status: Current status.
        initiated_by: Guardian who started the dissolution.
        initiated_at: When it was started.
        data_handling_option: How data is handled after the cooling period.
        acknowledgments: Co-guardian acknowledgments, in arrival order.
        all_acknowledged_at: When the quorum was met (set once).
        scheduled_deletion_at: When deletion takes effect (set once).
        cancelled_by: Guardian who cancelled, if cancelled.
        cancelled_at: When it was cancelled, if cancelled.
        completed_at: When the cooling period was closed out, if completed.
    """

    status: DissolutionStatus
    initiated_by: str
    initiated_at: datetime
    data_handling_option: DataHandlingOption
    acknowledgments: tuple[DissolutionAcknowledgment, ...] = field(default=())
    all_acknowledged_at: datetime | None = field(default=None)
    scheduled_deletion_at: datetime | None = field(default=None)
    cancelled_by: str | None = field(default=None)
    cancelled_at: datetime | None = field(default=None)
    completed_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate structural invariants."""
        if not self.initiated_by:
            raise ValueError("initiated_by is required")
        if any(a.guardian_id == self.initiated_by for a in self.acknowledgments):
            raise ValueError("Initiator cannot appear in acknowledgments")
        ids = [a.guardian_id for a in self.acknowledgments]
        if len(ids) != len(set(ids)):
            raise ValueError("A guardian can acknowledge only once")
        if self.status is DissolutionStatus.CANCELLED and (
            self.cancelled_by is None or self.cancelled_at is None
        ):
            raise ValueError("Cancelled record requires cancelled_by and cancelled_at")

    @classmethod
    def initiate(
        cls,
        initiated_by: str,
        initiated_at: datetime,
        data_handling_option: DataHandlingOption,
        co_guardian_ids: tuple[str, ...],
        cooling_period_days: int = COOLING_PERIOD_DAYS,
        extended_retention_days: int = EXTENDED_RETENTION_DAYS,
    ) -> DissolutionRecord:
        """Create a new dissolution record.

        With co-guardians the record waits for acknowledgments. When the
        initiator is the only guardian the quorum is already met, so the
        cooling period starts immediately.

        Args:
            initiated_by: The initiating guardian.
            initiated_at: Creation time.
            data_handling_option: Selected data handling option.
            co_guardian_ids: Guardians other than the initiator.
            cooling_period_days: Standard cooling period.
            extended_retention_days: Window used by RETAIN_90_DAYS.

        Returns:
            A pending_acknowledgment or cooling_period record.
        """
        if co_guardian_ids:
            return cls(
                status=DissolutionStatus.PENDING_ACKNOWLEDGMENT,
                initiated_by=initiated_by,
                initiated_at=initiated_at,
                data_handling_option=data_handling_option,
            )
        return cls(
            status=DissolutionStatus.COOLING_PERIOD,
            initiated_by=initiated_by,
            initiated_at=initiated_at,
            data_handling_option=data_handling_option,
            all_acknowledged_at=initiated_at,
            scheduled_deletion_at=calculate_scheduled_deletion_date(
                data_handling_option,
                initiated_at,
                cooling_period_days,
                extended_retention_days,
            ),
        )

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal()

    @property
    def acknowledged_guardian_ids(self) -> frozenset[str]:
        """Guardians whose consent is recorded, including the initiator."""
        return frozenset(
            {self.initiated_by, *(a.guardian_id for a in self.acknowledgments)}
        )

    def has_acknowledged(self, guardian_id: str) -> bool:
        return any(a.guardian_id == guardian_id for a in self.acknowledgments)

    def _check_transition(self, new_status: DissolutionStatus) -> None:
        if new_status not in self.status.valid_transitions():
            raise InvalidDissolutionTransitionError(
                from_status=self.status,
                to_status=new_status,
                allowed_transitions=sorted(
                    self.status.valid_transitions(), key=lambda s: s.value
                ),
            )

    def with_acknowledgment(
        self,
        guardian_id: str,
        acknowledged_at: datetime,
        quorum_met: bool,
        cooling_period_days: int = COOLING_PERIOD_DAYS,
        extended_retention_days: int = EXTENDED_RETENTION_DAYS,
    ) -> DissolutionRecord:
        """Append an acknowledgment, entering the cooling period on quorum.

        Args:
            guardian_id: The acknowledging co-guardian.
            acknowledged_at: Acknowledgment time.
            quorum_met: Whether every required co-guardian has now acknowledged.
            cooling_period_days: Standard cooling period.
            extended_retention_days: Window used by RETAIN_90_DAYS.

        Returns:
            New record with the acknowledgment appended.

        Raises:
            DissolutionRecordImmutableError: Record is not awaiting acknowledgments.
            ValueError: Initiator or duplicate acknowledgment.
        """
        if (
            self.status is not DissolutionStatus.PENDING_ACKNOWLEDGMENT
            or self.all_acknowledged_at is not None
        ):
            raise DissolutionRecordImmutableError(
                self.status, "acknowledgments are closed"
            )

        acknowledgments = self.acknowledgments + (
            DissolutionAcknowledgment(
                guardian_id=guardian_id, acknowledged_at=acknowledged_at
            ),
        )
        acknowledged = replace(self, acknowledgments=acknowledgments)
        if not quorum_met:
            return acknowledged
        return acknowledged.with_quorum_met(
            acknowledged_at, cooling_period_days, extended_retention_days
        )

    def with_quorum_met(
        self,
        met_at: datetime,
        cooling_period_days: int = COOLING_PERIOD_DAYS,
        extended_retention_days: int = EXTENDED_RETENTION_DAYS,
    ) -> DissolutionRecord:
        """Enter the cooling period, fixing the deletion date.

        Reached through the last acknowledgment, or directly when every
        guardian still owing one has left the family.

        Raises:
            DissolutionRecordImmutableError: Record is not awaiting acknowledgments.
        """
        if (
            self.status is not DissolutionStatus.PENDING_ACKNOWLEDGMENT
            or self.all_acknowledged_at is not None
        ):
            raise DissolutionRecordImmutableError(
                self.status, "acknowledgments are closed"
            )
        self._check_transition(DissolutionStatus.COOLING_PERIOD)
        return replace(
            self,
            status=DissolutionStatus.COOLING_PERIOD,
            all_acknowledged_at=met_at,
            scheduled_deletion_at=calculate_scheduled_deletion_date(
                self.data_handling_option,
                met_at,
                cooling_period_days,
                extended_retention_days,
            ),
        )

    def cancelled(self, cancelled_by: str, cancelled_at: datetime) -> DissolutionRecord:
        """Cancel the dissolution.

        ``scheduled_deletion_at`` is left untouched.

        Raises:
            InvalidDissolutionTransitionError: Record is already terminal.
        """
        self._check_transition(DissolutionStatus.CANCELLED)
        return replace(
            self,
            status=DissolutionStatus.CANCELLED,
            cancelled_by=cancelled_by,
            cancelled_at=cancelled_at,
        )

    def completed(self, completed_at: datetime) -> DissolutionRecord:
        """Close out an elapsed cooling period.

        Raises:
            InvalidDissolutionTransitionError: Record is not in the cooling period.
            DissolutionRecordImmutableError: Scheduled deletion not yet reached.
        """
        self._check_transition(DissolutionStatus.COMPLETED)
        if self.scheduled_deletion_at is None or completed_at < self.scheduled_deletion_at:
            raise DissolutionRecordImmutableError(
                self.status, "scheduled deletion has not been reached"
            )
        return replace(
            self,
            status=DissolutionStatus.COMPLETED,
            completed_at=completed_at,
        )

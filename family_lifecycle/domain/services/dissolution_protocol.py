"""Pure dissolution protocol functions.

Derived facts computed from a DissolutionRecord. These functions are
referentially transparent: no I/O, no clock reads (``now`` is passed in).
They are shared by the client-side orchestrator (display) and the backend
service (quorum enforcement).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from family_lifecycle.domain.models.dissolution import (
    CANCELLABLE_STATUSES,
    DissolutionRecord,
    DissolutionStatus,
)

_ONE_DAY = timedelta(days=1)


def days_remaining(record: DissolutionRecord | None, now: datetime) -> int | None:
    """Whole days left until scheduled deletion.

    Partial days round up, so a deletion 36 hours away reads as 2 days.
    Past-due deletions read as 0, never negative.

    Args:
        record: The dissolution record, or None.
        now: Current time.

    Returns:
        Days remaining, or None when there is no record, no scheduled
        deletion yet, or the record was cancelled (its date is void). A
        completed record reads 0.
    """
    if record is None or record.scheduled_deletion_at is None:
        return None
    if record.status is DissolutionStatus.CANCELLED:
        return None
    remaining = (record.scheduled_deletion_at - now) / _ONE_DAY
    return max(0, math.ceil(remaining))


def needs_acknowledgment(record: DissolutionRecord | None, actor_id: str) -> bool:
    """Whether ``actor_id`` still has to acknowledge the dissolution.

    The initiator never needs to acknowledge; their consent is implicit.
    """
    if record is None:
        return False
    if record.status is not DissolutionStatus.PENDING_ACKNOWLEDGMENT:
        return False
    if record.initiated_by == actor_id:
        return False
    return not record.has_acknowledged(actor_id)


def can_cancel(status: DissolutionStatus | None) -> bool:
    """Whether a dissolution in ``status`` can still be cancelled."""
    return status in CANCELLABLE_STATUSES


def pending_acknowledgments(
    record: DissolutionRecord | None,
    guardian_ids: Iterable[str],
) -> list[str]:
    """Guardians who have not yet acknowledged, in ``guardian_ids`` order.

    Returns an empty list unless the record is awaiting acknowledgments.
    """
    if record is None or record.status is not DissolutionStatus.PENDING_ACKNOWLEDGMENT:
        return []
    acknowledged = record.acknowledged_guardian_ids
    return [g for g in guardian_ids if g not in acknowledged]


def all_guardians_acknowledged(
    record: DissolutionRecord | None,
    guardian_ids: Iterable[str],
) -> bool:
    """Whether every guardian in ``guardian_ids`` has consented."""
    return not pending_acknowledgments(record, guardian_ids)

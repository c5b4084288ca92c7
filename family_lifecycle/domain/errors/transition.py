"""State transition errors for the dissolution state machine.

Transitions only move forward:
``pending_acknowledgment -> cooling_period -> completed``, and ``cancelled``
is reachable only from the two non-terminal states.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from family_lifecycle.domain.exceptions import FamilyLifecycleError

if TYPE_CHECKING:
    from family_lifecycle.domain.models.dissolution import DissolutionStatus


class InvalidDissolutionTransitionError(FamilyLifecycleError):
    """Raised when a transition not in the transition matrix is attempted.

    Attributes:
        from_status: Current status of the record.
        to_status: Attempted target status.
        allowed_transitions: Valid target statuses from the current status.
    """

    def __init__(
        self,
        from_status: DissolutionStatus,
        to_status: DissolutionStatus,
        allowed_transitions: list[DissolutionStatus] | None = None,
    ) -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {[s.value for s in self.allowed_transitions]}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid dissolution transition: {from_status.value} -> "
            f"{to_status.value}.{allowed_str}"
        )


class DissolutionRecordImmutableError(FamilyLifecycleError):
    """Raised when mutating a record that no longer accepts the change.

    Completed and cancelled records are read-only. Acknowledgments also stop
    being meaningful once ``all_acknowledged_at`` is set.
    """

    def __init__(self, status: DissolutionStatus, detail: str) -> None:
        self.status = status
        self.detail = detail
        super().__init__(
            f"Dissolution record in status '{status.value}' cannot change: {detail}"
        )

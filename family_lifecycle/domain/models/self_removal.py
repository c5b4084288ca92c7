"""Guardian self-removal domain models.

Self-removal is the unilateral escape for a guardian in an unsafe
relationship. It has no intermediate states: it either fully applies or
fails, and it cannot be cancelled or applied twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, eq=True)
class SelfRemovalResult:
    """Outcome of one guardian's exit.

    Attributes:
        success: Whether the removal applied.
        is_single_guardian: True when the family's children are left with no
            remaining guardian.
        family_id: The family that was left.
        removed_at: When the removal applied.
    """

    success: bool
    is_single_guardian: bool
    family_id: str
    removed_at: datetime

    def __post_init__(self) -> None:
        if not self.family_id:
            raise ValueError("family_id is required")


@dataclass(frozen=True, eq=True)
class SelfRemovalEligibility:
    """Read-only pre-check shown before the destructive call.

    ``is_single_guardian`` is advisory. It drives the "you are the only
    guardian" warning but never blocks removal.

    Attributes:
        can_remove: Whether the actor may remove themselves.
        is_single_guardian: Whether the actor is the family's only guardian.
        reason: Error code explaining ``can_remove=False``.
    """

    can_remove: bool
    is_single_guardian: bool
    reason: str | None = field(default=None)

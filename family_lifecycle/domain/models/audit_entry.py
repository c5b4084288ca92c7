"""Audit log entries written alongside every lifecycle mutation.

Self-removal entries are sealed: they are kept for legal review but never
shown in family-visible audit queries, so the remaining guardians cannot see
that (or when) the escaping guardian left.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID, uuid4

# performed_by for entries written by scheduled or derived transitions.
SYSTEM_ACTOR_ID = "system"


class AuditAction(Enum):
    """Lifecycle actions recorded in the audit log."""

    DISSOLUTION_INITIATED = "dissolution_initiated"
    DISSOLUTION_ACKNOWLEDGED = "dissolution_acknowledged"
    DISSOLUTION_QUORUM_REACHED = "dissolution_quorum_reached"
    DISSOLUTION_CANCELLED = "dissolution_cancelled"
    DISSOLUTION_COMPLETED = "dissolution_completed"
    GUARDIAN_SELF_REMOVED = "guardian_self_removed"

    @property
    def is_sealed(self) -> bool:
        return self in SEALED_ACTIONS


SEALED_ACTIONS: frozenset[AuditAction] = frozenset(
    {AuditAction.GUARDIAN_SELF_REMOVED}
)


def _empty_metadata() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, eq=True)
class AuditEntry:
    """One append-only audit record.

    Attributes:
        family_id: Family the action applied to.
        action: What happened.
        performed_by: Acting guardian.
        performed_at: When it happened.
        metadata: Read-only action details.
        entry_id: Unique entry identifier.
    """

    family_id: str
    action: AuditAction
    performed_by: str
    performed_at: datetime
    metadata: Mapping[str, Any] = field(default_factory=_empty_metadata)
    entry_id: UUID = field(default_factory=uuid4)

    @classmethod
    def create(
        cls,
        family_id: str,
        action: AuditAction,
        performed_by: str,
        performed_at: datetime,
        **metadata: Any,
    ) -> AuditEntry:
        return cls(
            family_id=family_id,
            action=action,
            performed_by=performed_by,
            performed_at=performed_at,
            metadata=MappingProxyType(dict(metadata)),
        )

    @property
    def is_sealed(self) -> bool:
        return self.action.is_sealed

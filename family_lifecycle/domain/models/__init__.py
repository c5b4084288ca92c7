"""Domain models for the family lifecycle.

Immutable value objects with no infrastructure dependencies.
"""

from family_lifecycle.domain.models.audit_entry import AuditAction, AuditEntry
from family_lifecycle.domain.models.dissolution import (
    DataHandlingOption,
    DissolutionAcknowledgment,
    DissolutionRecord,
    DissolutionStatus,
)
from family_lifecycle.domain.models.error_kind import ClassifiedError, ErrorKind
from family_lifecycle.domain.models.family import Family
from family_lifecycle.domain.models.self_removal import (
    SelfRemovalEligibility,
    SelfRemovalResult,
)

__all__: list[str] = [
    "AuditAction",
    "AuditEntry",
    "ClassifiedError",
    "DataHandlingOption",
    "DissolutionAcknowledgment",
    "DissolutionRecord",
    "DissolutionStatus",
    "ErrorKind",
    "Family",
    "SelfRemovalEligibility",
    "SelfRemovalResult",
]

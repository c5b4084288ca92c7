"""Concurrent modification error for compare-and-swap writes.

The family repository writes dissolution records and guardian lists with a
conditional write: the caller states what it read, and the write only lands
if that is still the stored value. This is the backend's cross-instance
exclusion; the client-side guard only covers a single orchestrator instance.
"""

from __future__ import annotations

from family_lifecycle.domain.errors.lifecycle import LifecycleServiceError


class ConcurrentModificationError(LifecycleServiceError):
    """Raised when a CAS write fails because the stored value changed.

    This is a recoverable error: the caller should re-read the family and
    decide whether the operation still applies.

    Attributes:
        family_id: Family whose document was being written.
        operation: The write that lost the race (e.g. "dissolution").
    """

    code = "concurrent-modification"

    def __init__(self, family_id: str, operation: str = "dissolution") -> None:
        self.family_id = family_id
        self.operation = operation
        super().__init__()

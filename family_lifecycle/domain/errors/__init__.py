"""Domain errors for family lifecycle operations.

All exceptions inherit from FamilyLifecycleError.
- lifecycle: backend business-rule rejections carrying a machine ``code``
- operation: classified client-side failures raised by orchestrators
- transition: dissolution state machine violations
- concurrent_modification: lost compare-and-swap writes
"""

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
    LifecycleServiceError,
    NotAGuardianError,
    ReauthTokenExpiredError,
    ReauthTokenRequiredError,
)
from family_lifecycle.domain.errors.operation import (
    LifecycleOperationError,
    OperationAlreadyInProgressError,
    ReauthRequiredError,
)
from family_lifecycle.domain.errors.transition import (
    DissolutionRecordImmutableError,
    InvalidDissolutionTransitionError,
)

__all__: list[str] = [
    "AlreadyAcknowledgedError",
    "AlreadyDissolvingError",
    "CannotAcknowledgeOwnError",
    "CannotCancelError",
    "ConcurrentModificationError",
    "DissolutionNotPendingError",
    "DissolutionRecordImmutableError",
    "FamilyNotFoundError",
    "InvalidDissolutionTransitionError",
    "LifecycleOperationError",
    "LifecycleServiceError",
    "NotAGuardianError",
    "OperationAlreadyInProgressError",
    "ReauthRequiredError",
    "ReauthTokenExpiredError",
    "ReauthTokenRequiredError",
]

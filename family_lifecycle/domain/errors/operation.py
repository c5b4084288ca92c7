"""Client-side errors raised by the lifecycle orchestrators.

Orchestrators never let a raw remote failure escape. Each failure is classified
and re-raised as a LifecycleOperationError whose ``kind`` drives caller flow
control (e.g. prompt for a fresh credential on REAUTH_REQUIRED).
"""

from __future__ import annotations

from family_lifecycle.domain.exceptions import FamilyLifecycleError
from family_lifecycle.domain.models.error_kind import (
    DEFAULT_KIND_MESSAGES,
    ClassifiedError,
    ErrorKind,
)


class LifecycleOperationError(FamilyLifecycleError):
    """A classified failure of an orchestrator operation.

    Attributes:
        classified: The ClassifiedError that was also cached for display.
    """

    def __init__(self, classified: ClassifiedError) -> None:
        self.classified = classified
        super().__init__(classified.message)

    @property
    def kind(self) -> ErrorKind:
        return self.classified.kind

    @property
    def message(self) -> str:
        return self.classified.message

    @property
    def requires_reauth(self) -> bool:
        return self.classified.requires_reauth


class ReauthRequiredError(LifecycleOperationError):
    """Raised when the actor must re-prove their identity before retrying."""

    def __init__(self, classified: ClassifiedError | None = None) -> None:
        super().__init__(
            classified
            or ClassifiedError(
                kind=ErrorKind.REAUTH_REQUIRED,
                message=DEFAULT_KIND_MESSAGES[ErrorKind.REAUTH_REQUIRED],
            )
        )


class OperationAlreadyInProgressError(LifecycleOperationError):
    """Raised locally when a guarded operation is invoked while one is in flight.

    No remote call is made when this is raised.

    Attributes:
        operation: The operation that was rejected.
        held_by: The operation currently holding the guard.
    """

    def __init__(self, operation: str, held_by: str | None = None) -> None:
        self.operation = operation
        self.held_by = held_by
        super().__init__(
            ClassifiedError(
                kind=ErrorKind.ALREADY_IN_PROGRESS,
                message=DEFAULT_KIND_MESSAGES[ErrorKind.ALREADY_IN_PROGRESS],
            )
        )


def error_for_classified(classified: ClassifiedError) -> LifecycleOperationError:
    """Build the exception matching a classified error.

    Args:
        classified: The classified failure.

    Returns:
        ReauthRequiredError for re-auth failures, LifecycleOperationError otherwise.
    """
    if classified.requires_reauth:
        return ReauthRequiredError(classified)
    return LifecycleOperationError(classified)

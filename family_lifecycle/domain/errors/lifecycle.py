"""Business-rule errors raised by the lifecycle backend.

These errors cross the remote boundary. Each carries a machine-readable
``code`` alongside a plain-language message so the client-side classifier can
use the structured code first and only fall back to message matching for
legacy untyped errors.

Messages are written at a 6th-grade reading level; they are shown to guardians
as-is.
"""

from __future__ import annotations

from family_lifecycle.domain.exceptions import FamilyLifecycleError

DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."

LIFECYCLE_ERROR_MESSAGES: dict[str, str] = {
    "family-not-found": "We could not find this family.",
    "not-a-guardian": "You are not a member of this family.",
    "reauth-required": "Please sign in again to confirm this action.",
    "reauth-expired": "Your sign-in has expired. Please try again.",
    "already-dissolving": "This family is already being dissolved.",
    "not-pending": "This family is not being dissolved.",
    "already-acknowledged": "You have already acknowledged this.",
    "cannot-acknowledge-own": (
        "You started this dissolution. You do not need to acknowledge."
    ),
    "cannot-cancel": "This dissolution cannot be cancelled right now.",
    "concurrent-modification": (
        "Someone else changed this family at the same time. Please try again."
    ),
    "dissolution-failed": "Could not start dissolution. Please try again.",
    "acknowledgment-failed": "Could not record your acknowledgment. Please try again.",
    "cancellation-failed": "Could not cancel dissolution. Please try again.",
    "removal-failed": "Could not remove you from the family. Please try again.",
    "network-error": "Connection problem. Please check your internet and try again.",
}


def get_lifecycle_error_message(code: str) -> str:
    """Get the plain-language message for an error code.

    Args:
        code: Machine-readable error code.

    Returns:
        The message for the code, or the generic message for unknown codes.
    """
    return LIFECYCLE_ERROR_MESSAGES.get(code, DEFAULT_ERROR_MESSAGE)


class LifecycleServiceError(FamilyLifecycleError):
    """Base error for backend business-rule rejections.

    Attributes:
        code: Machine-readable error code (key of LIFECYCLE_ERROR_MESSAGES).
        message: Plain-language message safe to show to a guardian.
    """

    code: str = "unknown"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or get_lifecycle_error_message(self.code)
        super().__init__(self.message)


class FamilyNotFoundError(LifecycleServiceError):
    """Raised when the family does not exist."""

    code = "family-not-found"

    def __init__(self, family_id: str) -> None:
        self.family_id = family_id
        super().__init__()


class NotAGuardianError(LifecycleServiceError):
    """Raised when the actor is not a guardian of the family.

    This is also what a repeated self-removal sees: after the first removal
    succeeds the actor is no longer a member.
    """

    code = "not-a-guardian"

    def __init__(self, family_id: str, actor_id: str) -> None:
        self.family_id = family_id
        self.actor_id = actor_id
        super().__init__()


class ReauthTokenRequiredError(LifecycleServiceError):
    """Raised when a destructive call arrives without a valid reauth token."""

    code = "reauth-required"


class ReauthTokenExpiredError(LifecycleServiceError):
    """Raised when the reauth token was valid once but has expired or been used."""

    code = "reauth-expired"


class AlreadyDissolvingError(LifecycleServiceError):
    """Raised when a family already has a non-terminal dissolution record."""

    code = "already-dissolving"

    def __init__(self, family_id: str) -> None:
        self.family_id = family_id
        super().__init__()


class DissolutionNotPendingError(LifecycleServiceError):
    """Raised when acknowledging a dissolution that is not awaiting acknowledgment."""

    code = "not-pending"

    def __init__(self, family_id: str, current_status: str | None = None) -> None:
        self.family_id = family_id
        self.current_status = current_status
        super().__init__()


class CannotAcknowledgeOwnError(LifecycleServiceError):
    """Raised when the initiator tries to acknowledge their own dissolution."""

    code = "cannot-acknowledge-own"


class AlreadyAcknowledgedError(LifecycleServiceError):
    """Raised when a guardian acknowledges the same dissolution twice."""

    code = "already-acknowledged"


class CannotCancelError(LifecycleServiceError):
    """Raised when cancelling a dissolution that is absent or already terminal."""

    code = "cannot-cancel"

    def __init__(self, family_id: str, current_status: str | None = None) -> None:
        self.family_id = family_id
        self.current_status = current_status
        super().__init__()

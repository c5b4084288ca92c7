"""Error classifier for lifecycle operations.

Maps a raw failure from the remote side to one ErrorKind plus the message to
show. Resolution order:

1. Structured ``code`` attribute on the error (preferred).
2. Substring match on the message for re-auth phrases. This is a fallback
   for legacy untyped errors and is inherently brittle: a message that merely
   mentions "expired" is treated as a re-auth failure.
3. The failure kind of the operation that was attempted.

The classifier never raises.
"""

from __future__ import annotations

from enum import Enum

from family_lifecycle.domain.models.error_kind import (
    DEFAULT_KIND_MESSAGES,
    ClassifiedError,
    ErrorKind,
)


class LifecycleOperation(Enum):
    """Operations whose failures are classified."""

    INITIATE = "initiate"
    ACKNOWLEDGE = "acknowledge"
    CANCEL = "cancel"
    GET_STATUS = "get_status"
    REMOVE = "remove"
    CHECK_ELIGIBILITY = "check_eligibility"

    @property
    def failure_kind(self) -> ErrorKind:
        return OPERATION_FAILURE_KINDS[self]


OPERATION_FAILURE_KINDS: dict[LifecycleOperation, ErrorKind] = {
    LifecycleOperation.INITIATE: ErrorKind.DISSOLUTION_FAILED,
    LifecycleOperation.ACKNOWLEDGE: ErrorKind.ACKNOWLEDGMENT_FAILED,
    LifecycleOperation.CANCEL: ErrorKind.CANCELLATION_FAILED,
    LifecycleOperation.GET_STATUS: ErrorKind.UNKNOWN,
    LifecycleOperation.REMOVE: ErrorKind.REMOVAL_FAILED,
    LifecycleOperation.CHECK_ELIGIBILITY: ErrorKind.UNKNOWN,
}

# Codes with a fixed kind regardless of operation. Every other business
# code (not-a-guardian, not-pending, cannot-cancel, ...) becomes the
# attempted operation's failure kind.
CODE_KINDS: dict[str, ErrorKind] = {
    "reauth-required": ErrorKind.REAUTH_REQUIRED,
    "reauth-expired": ErrorKind.REAUTH_REQUIRED,
    "already-dissolving": ErrorKind.ALREADY_IN_PROGRESS,
    "already-in-progress": ErrorKind.ALREADY_IN_PROGRESS,
}

REAUTH_PHRASES: tuple[str, ...] = (
    "sign in again",
    "reauth",
    "re-auth",
    "expired",
    "authentication failed",
)


def _extract_code(error: object) -> str | None:
    code = getattr(error, "code", None)
    if isinstance(code, str) and code:
        return code
    return None


def _extract_message(error: object) -> str:
    if not isinstance(error, BaseException):
        return ""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def is_reauth_error(error: object) -> bool:
    """Whether ``error`` signals that the actor must re-authenticate.

    Only exceptions are considered; plain strings, None and arbitrary
    objects are never re-auth errors.
    """
    if not isinstance(error, BaseException):
        return False
    code = _extract_code(error)
    if code is not None:
        return CODE_KINDS.get(code) is ErrorKind.REAUTH_REQUIRED
    message = _extract_message(error).lower()
    return any(phrase in message for phrase in REAUTH_PHRASES)


def classify_error(
    error: object,
    operation: LifecycleOperation,
) -> ClassifiedError:
    """Classify a raw failure.

    Args:
        error: Whatever the remote call raised.
        operation: The operation that was attempted.

    Returns:
        ClassifiedError with the kind, the message to show (the remote message
        verbatim when there is one), and the structured code if present.
    """
    if not isinstance(error, BaseException):
        return ClassifiedError(
            kind=ErrorKind.UNKNOWN,
            message=DEFAULT_KIND_MESSAGES[ErrorKind.UNKNOWN],
        )

    code = _extract_code(error)
    message = _extract_message(error)

    if code is not None:
        kind = CODE_KINDS.get(code, operation.failure_kind)
    elif is_reauth_error(error):
        kind = ErrorKind.REAUTH_REQUIRED
    else:
        kind = operation.failure_kind

    return ClassifiedError(
        kind=kind,
        message=message or DEFAULT_KIND_MESSAGES[kind],
        code=code,
    )

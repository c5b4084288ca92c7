"""Error taxonomy for lifecycle operations.

Every failed orchestrator call is labelled with exactly one ErrorKind so the
caller can tell "re-authenticate" apart from "this action is not currently
valid" apart from "something transient failed".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Closed set of classified failure kinds."""

    REAUTH_REQUIRED = "reauth-required"
    ALREADY_IN_PROGRESS = "already-in-progress"
    ACKNOWLEDGMENT_FAILED = "acknowledgment-failed"
    CANCELLATION_FAILED = "cancellation-failed"
    DISSOLUTION_FAILED = "dissolution-failed"
    REMOVAL_FAILED = "removal-failed"
    UNKNOWN = "unknown"


DEFAULT_KIND_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.REAUTH_REQUIRED: "Please sign in again to confirm this action.",
    ErrorKind.ALREADY_IN_PROGRESS: "This action is already in progress. Please wait.",
    ErrorKind.ACKNOWLEDGMENT_FAILED: (
        "Could not record your acknowledgment. Please try again."
    ),
    ErrorKind.CANCELLATION_FAILED: "Could not cancel dissolution. Please try again.",
    ErrorKind.DISSOLUTION_FAILED: "Could not start dissolution. Please try again.",
    ErrorKind.REMOVAL_FAILED: (
        "Could not remove you from the family. Please try again."
    ),
    ErrorKind.UNKNOWN: "Something went wrong. Please try again.",
}


@dataclass(frozen=True, eq=True)
class ClassifiedError:
    """A failure labelled with its kind and the message to display.

    Attributes:
        kind: The classified failure kind.
        message: User-facing message.
        code: Structured error code reported by the remote side, if any.
    """

    kind: ErrorKind
    message: str
    code: str | None = None

    @property
    def requires_reauth(self) -> bool:
        """Whether the caller must obtain a fresh credential before retrying."""
        return self.kind is ErrorKind.REAUTH_REQUIRED

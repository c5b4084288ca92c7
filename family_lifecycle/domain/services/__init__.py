"""Pure domain services: dissolution protocol and error classification."""

from family_lifecycle.domain.services.dissolution_protocol import (
    all_guardians_acknowledged,
    can_cancel,
    days_remaining,
    needs_acknowledgment,
    pending_acknowledgments,
)
from family_lifecycle.domain.services.error_classifier import (
    LifecycleOperation,
    classify_error,
    is_reauth_error,
)

__all__: list[str] = [
    "LifecycleOperation",
    "all_guardians_acknowledged",
    "can_cancel",
    "classify_error",
    "days_remaining",
    "is_reauth_error",
    "needs_acknowledgment",
    "pending_acknowledgments",
]

"""Family lifecycle configuration.

The cooling period and retention windows are parameters, not part of the
core algorithm. The remote timeout bounds how long a mutating call may hold
the in-flight guard.

Environment Variables:
- FAMILY_COOLING_PERIOD_DAYS: Days between full acknowledgment and deletion (default: 30)
- FAMILY_EXTENDED_RETENTION_DAYS: Window for the retain_90_days option (default: 90)
- LIFECYCLE_REMOTE_TIMEOUT_SECONDS: Timeout for each remote call (default: 30.0)
- REAUTH_TOKEN_TTL_SECONDS: Lifetime of an issued reauth token (default: 300)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from family_lifecycle.domain.models.dissolution import (
    COOLING_PERIOD_DAYS,
    EXTENDED_RETENTION_DAYS,
)


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class LifecycleConfig:
    """Configuration for dissolution and self-removal.

    Attributes:
        cooling_period_days: Delay between full acknowledgment and deletion.
        extended_retention_days: Delay used by the retain_90_days option.
        remote_timeout_seconds: Per-call timeout for remote operations. A
            timed-out call releases the in-flight guard.
        reauth_token_ttl_seconds: How long an issued reauth token stays valid.
    """

    cooling_period_days: int = COOLING_PERIOD_DAYS
    extended_retention_days: int = EXTENDED_RETENTION_DAYS
    remote_timeout_seconds: float = 30.0
    reauth_token_ttl_seconds: int = 300

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.cooling_period_days < 1:
            raise ValueError(
                f"cooling_period_days must be positive, got {self.cooling_period_days}"
            )
        if self.extended_retention_days < self.cooling_period_days:
            raise ValueError(
                f"extended_retention_days ({self.extended_retention_days}) must be "
                f"at least cooling_period_days ({self.cooling_period_days})"
            )
        if self.remote_timeout_seconds <= 0:
            raise ValueError(
                "remote_timeout_seconds must be positive, "
                f"got {self.remote_timeout_seconds}"
            )
        if self.reauth_token_ttl_seconds < 1:
            raise ValueError(
                "reauth_token_ttl_seconds must be at least 1, "
                f"got {self.reauth_token_ttl_seconds}"
            )

    @classmethod
    def from_environment(cls) -> "LifecycleConfig":
        """Create config from environment variables with defaults.

        Returns:
            LifecycleConfig with values from environment or defaults.

        Raises:
            ValueError: If the resulting values are inconsistent.
        """
        return cls(
            cooling_period_days=_get_int_env(
                "FAMILY_COOLING_PERIOD_DAYS", COOLING_PERIOD_DAYS
            ),
            extended_retention_days=_get_int_env(
                "FAMILY_EXTENDED_RETENTION_DAYS", EXTENDED_RETENTION_DAYS
            ),
            remote_timeout_seconds=_get_float_env(
                "LIFECYCLE_REMOTE_TIMEOUT_SECONDS", 30.0
            ),
            reauth_token_ttl_seconds=_get_int_env("REAUTH_TOKEN_TTL_SECONDS", 300),
        )


DEFAULT_LIFECYCLE_CONFIG = LifecycleConfig()

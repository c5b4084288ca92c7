"""Configuration for the family lifecycle."""

from family_lifecycle.config.lifecycle_config import (
    DEFAULT_LIFECYCLE_CONFIG,
    LifecycleConfig,
)

__all__: list[str] = ["DEFAULT_LIFECYCLE_CONFIG", "LifecycleConfig"]

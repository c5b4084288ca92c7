"""Self-removal remote operations port.

INTENTIONALLY NOT DEFINED:
- cancel_removal(): self-removal applies immediately and cannot be undone
- approve_removal(): removal is unilateral, no co-guardian consent
"""

from __future__ import annotations

from typing import Protocol

from family_lifecycle.domain.models.self_removal import (
    SelfRemovalEligibility,
    SelfRemovalResult,
)


class SelfRemovalRemoteProtocol(Protocol):
    """Port for guardian self-removal operations."""

    async def can_remove_self(
        self,
        family_id: str,
        actor_id: str,
    ) -> SelfRemovalEligibility:
        """Read-only eligibility check. Never mutates."""
        ...

    async def remove_self_from_family(
        self,
        family_id: str,
        actor_id: str,
        reauth_token: str,
    ) -> SelfRemovalResult:
        """Remove the actor from the family.

        A second call after success fails with code ``not-a-guardian``.

        Args:
            family_id: Family to leave.
            actor_id: The leaving guardian.
            reauth_token: Fresh single-use reauthentication token.

        Returns:
            The removal result.
        """
        ...

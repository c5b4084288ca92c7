"""Dissolution remote operations port.

The operations a client-side DissolutionOrchestrator consumes. The transport
is out of scope; FamilyDissolutionService implements this protocol directly
for in-process use.

Failure contract:
- Business-rule rejections raise errors carrying a machine ``code`` and a
  plain-language message (see domain.errors.lifecycle).
- ``initiate_dissolution`` MUST reject a second non-terminal record for the
  same family with code ``already-dissolving``, even when two clients race.
  The client-side guard does not provide that exclusion.
"""

from __future__ import annotations

from typing import Protocol

from family_lifecycle.domain.models.dissolution import (
    DataHandlingOption,
    DissolutionRecord,
)


class DissolutionRemoteProtocol(Protocol):
    """Port for family dissolution operations."""

    async def initiate_dissolution(
        self,
        family_id: str,
        actor_id: str,
        data_handling_option: DataHandlingOption,
        reauth_token: str,
    ) -> DissolutionRecord:
        """Start a dissolution.

        Args:
            family_id: Family to dissolve.
            actor_id: Initiating guardian.
            data_handling_option: How data is handled after the cooling period.
            reauth_token: Fresh single-use reauthentication token.

        Returns:
            The created record.
        """
        ...

    async def acknowledge_dissolution(
        self,
        family_id: str,
        actor_id: str,
    ) -> DissolutionRecord:
        """Record a co-guardian's acknowledgment.

        Returns:
            The updated record, in cooling_period once the quorum is met.
        """
        ...

    async def cancel_dissolution(
        self,
        family_id: str,
        actor_id: str,
    ) -> DissolutionRecord:
        """Cancel a pending or cooling dissolution.

        Returns:
            The cancelled record.
        """
        ...

    async def get_dissolution_status(
        self,
        family_id: str,
    ) -> DissolutionRecord | None:
        """Read the family's latest dissolution record.

        Returns:
            The record, or None if the family has none (or does not exist).
        """
        ...

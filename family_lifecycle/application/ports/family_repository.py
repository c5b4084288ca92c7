"""Family repository port with conditional (compare-and-swap) writes.

Writes state what the caller last read. A write whose expectation no
longer matches the stored value raises ConcurrentModificationError; this is
how the backend keeps at most one non-terminal dissolution per family when
several clients race.
"""

from __future__ import annotations

from typing import Protocol

from family_lifecycle.domain.models.dissolution import (
    DissolutionRecord,
    DissolutionStatus,
)
from family_lifecycle.domain.models.family import Family


class FamilyRepositoryProtocol(Protocol):
    """Port for family persistence."""

    async def get(self, family_id: str) -> Family | None:
        """Get a family by ID, or None."""
        ...

    async def save(self, family: Family) -> None:
        """Create a new family.

        Raises:
            ValueError: If the family already exists.
        """
        ...

    async def compare_and_set_dissolution(
        self,
        family_id: str,
        expected: DissolutionRecord | None,
        new: DissolutionRecord,
    ) -> Family:
        """Replace the dissolution record if it still equals ``expected``.

        Returns:
            The updated family.

        Raises:
            KeyError: If the family does not exist.
            ConcurrentModificationError: If the stored record changed.
        """
        ...

    async def compare_and_remove_guardian(
        self,
        family_id: str,
        guardian_id: str,
        expected_guardian_ids: tuple[str, ...],
    ) -> Family:
        """Remove a guardian if the guardian list still equals the expectation.

        Returns:
            The updated family.

        Raises:
            KeyError: If the family does not exist.
            ConcurrentModificationError: If the guardian list changed.
        """
        ...

    async def list_by_dissolution_status(
        self,
        status: DissolutionStatus,
    ) -> list[Family]:
        """List families whose latest dissolution has ``status``."""
        ...

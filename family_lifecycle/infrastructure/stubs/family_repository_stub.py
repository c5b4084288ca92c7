"""In-memory stub for FamilyRepositoryProtocol.

Simulates the conditional writes a document store would give us. Every
compare-and-swap runs under one asyncio lock, so of two racing writers with
the same expectation exactly one lands and the other sees
ConcurrentModificationError.
"""

from __future__ import annotations

import asyncio

from family_lifecycle.application.ports.family_repository import (
    FamilyRepositoryProtocol,
)
from family_lifecycle.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from family_lifecycle.domain.models.dissolution import (
    DissolutionRecord,
    DissolutionStatus,
)
from family_lifecycle.domain.models.family import Family


class FamilyRepositoryStub(FamilyRepositoryProtocol):
    """In-memory family storage. NOT suitable for production use.

    Attributes:
        _families: Families keyed by family_id.
    """

    def __init__(self) -> None:
        self._families: dict[str, Family] = {}
        self._cas_lock = asyncio.Lock()

    def add_family(self, family: Family) -> None:
        """Seed a family synchronously (test helper). Overwrites."""
        self._families[family.family_id] = family

    async def get(self, family_id: str) -> Family | None:
        # Yield so concurrent callers can interleave between read and write.
        await asyncio.sleep(0)
        return self._families.get(family_id)

    async def save(self, family: Family) -> None:
        if family.family_id in self._families:
            raise ValueError(f"Family already exists: {family.family_id}")
        self._families[family.family_id] = family

    async def compare_and_set_dissolution(
        self,
        family_id: str,
        expected: DissolutionRecord | None,
        new: DissolutionRecord,
    ) -> Family:
        async with self._cas_lock:
            family = self._families.get(family_id)
            if family is None:
                raise KeyError(family_id)
            if family.dissolution != expected:
                raise ConcurrentModificationError(family_id, operation="dissolution")
            updated = family.with_dissolution(new)
            self._families[family_id] = updated
            return updated

    async def compare_and_remove_guardian(
        self,
        family_id: str,
        guardian_id: str,
        expected_guardian_ids: tuple[str, ...],
    ) -> Family:
        async with self._cas_lock:
            family = self._families.get(family_id)
            if family is None:
                raise KeyError(family_id)
            if family.guardian_ids != tuple(expected_guardian_ids):
                raise ConcurrentModificationError(family_id, operation="guardians")
            updated = family.without_guardian(guardian_id)
            self._families[family_id] = updated
            return updated

    async def list_by_dissolution_status(
        self,
        status: DissolutionStatus,
    ) -> list[Family]:
        return [
            family
            for family in self._families.values()
            if family.dissolution is not None and family.dissolution.status is status
        ]

    def clear(self) -> None:
        """Clear all stored families (for testing)."""
        self._families.clear()

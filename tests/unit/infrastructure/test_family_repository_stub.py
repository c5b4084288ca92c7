"""Unit tests for FamilyRepositoryStub conditional writes."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from family_lifecycle.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from family_lifecycle.domain.models.dissolution import (
    DataHandlingOption,
    DissolutionRecord,
    DissolutionStatus,
)
from family_lifecycle.domain.models.family import Family
from family_lifecycle.infrastructure.stubs.family_repository_stub import (
    FamilyRepositoryStub,
)

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _record(initiated_by: str) -> DissolutionRecord:
    return DissolutionRecord.initiate(
        initiated_by=initiated_by,
        initiated_at=T0,
        data_handling_option=DataHandlingOption.DELETE_ALL,
        co_guardian_ids=("other",),
    )


@pytest.fixture
def repository() -> FamilyRepositoryStub:
    repo = FamilyRepositoryStub()
    repo.add_family(Family(family_id="fam-1", guardian_ids=("guardian-a", "guardian-b")))
    return repo


class TestSaveAndGet:
    @pytest.mark.asyncio
    async def test_save_rejects_duplicate(self, repository: FamilyRepositoryStub) -> None:
        with pytest.raises(ValueError, match="already exists"):
            await repository.save(Family(family_id="fam-1", guardian_ids=("x",)))

    @pytest.mark.asyncio
    async def test_get_missing(self, repository: FamilyRepositoryStub) -> None:
        assert await repository.get("missing") is None

    @pytest.mark.asyncio
    async def test_clear(self, repository: FamilyRepositoryStub) -> None:
        repository.clear()
        assert await repository.get("fam-1") is None


class TestCompareAndSetDissolution:
    @pytest.mark.asyncio
    async def test_matching_expectation_writes(
        self, repository: FamilyRepositoryStub
    ) -> None:
        record = _record("guardian-a")
        updated = await repository.compare_and_set_dissolution(
            "fam-1", expected=None, new=record
        )

        assert updated.dissolution == record
        assert (await repository.get("fam-1")) == updated

    @pytest.mark.asyncio
    async def test_stale_expectation_rejected(
        self, repository: FamilyRepositoryStub
    ) -> None:
        await repository.compare_and_set_dissolution(
            "fam-1", expected=None, new=_record("guardian-a")
        )

        with pytest.raises(ConcurrentModificationError) as exc_info:
            await repository.compare_and_set_dissolution(
                "fam-1", expected=None, new=_record("guardian-b")
            )

        assert exc_info.value.operation == "dissolution"
        stored = await repository.get("fam-1")
        assert stored is not None and stored.dissolution is not None
        assert stored.dissolution.initiated_by == "guardian-a"

    @pytest.mark.asyncio
    async def test_missing_family(self, repository: FamilyRepositoryStub) -> None:
        with pytest.raises(KeyError):
            await repository.compare_and_set_dissolution(
                "missing", expected=None, new=_record("guardian-a")
            )

    @pytest.mark.asyncio
    async def test_racing_writers_exactly_one_wins(
        self, repository: FamilyRepositoryStub
    ) -> None:
        results = await asyncio.gather(
            repository.compare_and_set_dissolution(
                "fam-1", expected=None, new=_record("guardian-a")
            ),
            repository.compare_and_set_dissolution(
                "fam-1", expected=None, new=_record("guardian-b")
            ),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, ConcurrentModificationError)]
        assert len(failures) == 1

    @pytest.mark.asyncio
    async def test_list_by_status(self, repository: FamilyRepositoryStub) -> None:
        repository.add_family(Family(family_id="fam-2", guardian_ids=("x",)))
        await repository.compare_and_set_dissolution(
            "fam-1", expected=None, new=_record("guardian-a")
        )

        pending = await repository.list_by_dissolution_status(
            DissolutionStatus.PENDING_ACKNOWLEDGMENT
        )
        cooling = await repository.list_by_dissolution_status(
            DissolutionStatus.COOLING_PERIOD
        )

        assert [f.family_id for f in pending] == ["fam-1"]
        assert cooling == []


class TestCompareAndRemoveGuardian:
    @pytest.mark.asyncio
    async def test_removes(self, repository: FamilyRepositoryStub) -> None:
        updated = await repository.compare_and_remove_guardian(
            "fam-1", "guardian-a", expected_guardian_ids=("guardian-a", "guardian-b")
        )
        assert updated.guardian_ids == ("guardian-b",)

    @pytest.mark.asyncio
    async def test_stale_guardian_list(self, repository: FamilyRepositoryStub) -> None:
        with pytest.raises(ConcurrentModificationError) as exc_info:
            await repository.compare_and_remove_guardian(
                "fam-1", "guardian-a", expected_guardian_ids=("guardian-a",)
            )
        assert exc_info.value.operation == "guardians"

"""Unit tests for the Family aggregate."""

from datetime import datetime, timezone

import pytest

from family_lifecycle.domain.models.dissolution import (
    DataHandlingOption,
    DissolutionRecord,
)
from family_lifecycle.domain.models.family import Family

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def family() -> Family:
    return Family(
        family_id="fam-1",
        guardian_ids=("guardian-a", "guardian-b"),
        child_ids=("child-1",),
    )


class TestFamily:
    def test_requires_family_id(self) -> None:
        with pytest.raises(ValueError, match="family_id"):
            Family(family_id="", guardian_ids=("guardian-a",))

    def test_rejects_duplicate_guardians(self) -> None:
        with pytest.raises(ValueError, match="unique"):
            Family(family_id="fam-1", guardian_ids=("guardian-a", "guardian-a"))

    def test_membership(self, family: Family) -> None:
        assert family.is_guardian("guardian-a")
        assert not family.is_guardian("child-1")

    def test_co_guardians_of(self, family: Family) -> None:
        assert family.co_guardians_of("guardian-a") == ("guardian-b",)

    def test_without_guardian(self, family: Family) -> None:
        updated = family.without_guardian("guardian-a")

        assert updated.guardian_ids == ("guardian-b",)
        assert updated.child_ids == family.child_ids
        assert family.guardian_ids == ("guardian-a", "guardian-b")

    def test_active_dissolution(self, family: Family) -> None:
        assert not family.has_active_dissolution

        record = DissolutionRecord.initiate(
            initiated_by="guardian-a",
            initiated_at=T0,
            data_handling_option=DataHandlingOption.DELETE_ALL,
            co_guardian_ids=family.co_guardians_of("guardian-a"),
        )
        dissolving = family.with_dissolution(record)
        assert dissolving.has_active_dissolution

        cancelled = dissolving.with_dissolution(record.cancelled("guardian-b", T0))
        assert not cancelled.has_active_dissolution
        assert cancelled.dissolution is not None

"""Unit tests for audit entries."""

from datetime import datetime, timezone

import pytest

from family_lifecycle.domain.models.audit_entry import (
    SEALED_ACTIONS,
    AuditAction,
    AuditEntry,
)

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


class TestAuditEntry:
    def test_create_collects_metadata(self) -> None:
        entry = AuditEntry.create(
            family_id="fam-1",
            action=AuditAction.DISSOLUTION_INITIATED,
            performed_by="guardian-a",
            performed_at=T0,
            data_handling_option="delete_all",
            is_shared_custody=True,
        )

        assert entry.metadata == {
            "data_handling_option": "delete_all",
            "is_shared_custody": True,
        }
        assert not entry.is_sealed

    def test_metadata_is_read_only(self) -> None:
        entry = AuditEntry.create(
            family_id="fam-1",
            action=AuditAction.DISSOLUTION_CANCELLED,
            performed_by="guardian-a",
            performed_at=T0,
        )
        with pytest.raises(TypeError):
            entry.metadata["cancelled_by"] = "someone"  # type: ignore[index]

    def test_entries_get_unique_ids(self) -> None:
        first = AuditEntry.create("fam-1", AuditAction.DISSOLUTION_COMPLETED, "system", T0)
        second = AuditEntry.create("fam-1", AuditAction.DISSOLUTION_COMPLETED, "system", T0)
        assert first.entry_id != second.entry_id

    def test_only_self_removal_is_sealed(self) -> None:
        assert SEALED_ACTIONS == {AuditAction.GUARDIAN_SELF_REMOVED}
        for action in AuditAction:
            assert action.is_sealed is (action is AuditAction.GUARDIAN_SELF_REMOVED)

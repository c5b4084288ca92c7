"""Unit tests for the DissolutionRecord state machine."""

from datetime import datetime, timedelta, timezone

import pytest

from family_lifecycle.domain.errors.transition import (
    DissolutionRecordImmutableError,
    InvalidDissolutionTransitionError,
)
from family_lifecycle.domain.models.dissolution import (
    CANCELLABLE_STATUSES,
    STATUS_TRANSITION_MATRIX,
    TERMINAL_STATUSES,
    DataHandlingOption,
    DissolutionAcknowledgment,
    DissolutionRecord,
    DissolutionStatus,
    calculate_scheduled_deletion_date,
)

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def _pending(option: DataHandlingOption = DataHandlingOption.DELETE_ALL) -> DissolutionRecord:
    return DissolutionRecord.initiate(
        initiated_by="guardian-a",
        initiated_at=T0,
        data_handling_option=option,
        co_guardian_ids=("guardian-b", "guardian-c"),
    )


class TestDissolutionStatus:
    """Tests for the status enum and transition matrix."""

    def test_terminal_statuses(self) -> None:
        assert TERMINAL_STATUSES == {
            DissolutionStatus.COMPLETED,
            DissolutionStatus.CANCELLED,
        }
        assert DissolutionStatus.COMPLETED.is_terminal()
        assert not DissolutionStatus.COOLING_PERIOD.is_terminal()

    def test_terminal_statuses_have_no_transitions(self) -> None:
        for status in TERMINAL_STATUSES:
            assert status.valid_transitions() == frozenset()

    def test_every_status_is_in_matrix(self) -> None:
        assert set(STATUS_TRANSITION_MATRIX) == set(DissolutionStatus)

    def test_cancellable_statuses_are_the_non_terminal_ones(self) -> None:
        assert CANCELLABLE_STATUSES == set(DissolutionStatus) - TERMINAL_STATUSES

    def test_pending_cannot_skip_to_completed(self) -> None:
        assert (
            DissolutionStatus.COMPLETED
            not in DissolutionStatus.PENDING_ACKNOWLEDGMENT.valid_transitions()
        )


class TestScheduledDeletionDate:
    """Tests for calculate_scheduled_deletion_date."""

    @pytest.mark.parametrize(
        "option",
        [DataHandlingOption.DELETE_ALL, DataHandlingOption.EXPORT_FIRST],
    )
    def test_standard_options_use_cooling_period(self, option: DataHandlingOption) -> None:
        assert calculate_scheduled_deletion_date(option, T0) == T0 + timedelta(days=30)

    def test_retain_option_uses_extended_window(self) -> None:
        result = calculate_scheduled_deletion_date(DataHandlingOption.RETAIN_90_DAYS, T0)
        assert result == T0 + timedelta(days=90)

    def test_custom_windows(self) -> None:
        result = calculate_scheduled_deletion_date(
            DataHandlingOption.DELETE_ALL,
            T0,
            cooling_period_days=7,
            extended_retention_days=14,
        )
        assert result == T0 + timedelta(days=7)


class TestInitiate:
    """Tests for DissolutionRecord.initiate."""

    def test_with_co_guardians_waits_for_acknowledgment(self) -> None:
        record = _pending()

        assert record.status is DissolutionStatus.PENDING_ACKNOWLEDGMENT
        assert record.acknowledgments == ()
        assert record.all_acknowledged_at is None
        assert record.scheduled_deletion_at is None

    def test_sole_guardian_starts_cooling_immediately(self) -> None:
        record = DissolutionRecord.initiate(
            initiated_by="guardian-a",
            initiated_at=T0,
            data_handling_option=DataHandlingOption.DELETE_ALL,
            co_guardian_ids=(),
        )

        assert record.status is DissolutionStatus.COOLING_PERIOD
        assert record.all_acknowledged_at == T0
        assert record.scheduled_deletion_at == T0 + timedelta(days=30)

    def test_initiator_counts_as_acknowledged(self) -> None:
        record = _pending()
        assert record.acknowledged_guardian_ids == {"guardian-a"}
        assert not record.has_acknowledged("guardian-a")


class TestStructuralInvariants:
    """Tests for __post_init__ validation."""

    def test_initiator_cannot_be_in_acknowledgments(self) -> None:
        with pytest.raises(ValueError, match="Initiator"):
            DissolutionRecord(
                status=DissolutionStatus.PENDING_ACKNOWLEDGMENT,
                initiated_by="guardian-a",
                initiated_at=T0,
                data_handling_option=DataHandlingOption.DELETE_ALL,
                acknowledgments=(DissolutionAcknowledgment("guardian-a", T0),),
            )

    def test_duplicate_acknowledgments_rejected(self) -> None:
        with pytest.raises(ValueError, match="only once"):
            DissolutionRecord(
                status=DissolutionStatus.PENDING_ACKNOWLEDGMENT,
                initiated_by="guardian-a",
                initiated_at=T0,
                data_handling_option=DataHandlingOption.DELETE_ALL,
                acknowledgments=(
                    DissolutionAcknowledgment("guardian-b", T0),
                    DissolutionAcknowledgment("guardian-b", T0),
                ),
            )

    def test_cancelled_record_requires_canceller(self) -> None:
        with pytest.raises(ValueError, match="cancelled_by"):
            DissolutionRecord(
                status=DissolutionStatus.CANCELLED,
                initiated_by="guardian-a",
                initiated_at=T0,
                data_handling_option=DataHandlingOption.DELETE_ALL,
            )

    def test_records_are_frozen(self) -> None:
        record = _pending()
        with pytest.raises(AttributeError):
            record.status = DissolutionStatus.CANCELLED  # type: ignore[misc]


class TestWithAcknowledgment:
    """Tests for appending acknowledgments."""

    def test_partial_quorum_stays_pending(self) -> None:
        ack_at = T0 + timedelta(hours=1)
        record = _pending().with_acknowledgment("guardian-b", ack_at, quorum_met=False)

        assert record.status is DissolutionStatus.PENDING_ACKNOWLEDGMENT
        assert record.acknowledgments == (DissolutionAcknowledgment("guardian-b", ack_at),)
        assert record.scheduled_deletion_at is None

    def test_quorum_enters_cooling_period(self) -> None:
        first = T0 + timedelta(hours=1)
        last = T0 + timedelta(days=2)
        record = (
            _pending()
            .with_acknowledgment("guardian-b", first, quorum_met=False)
            .with_acknowledgment("guardian-c", last, quorum_met=True)
        )

        assert record.status is DissolutionStatus.COOLING_PERIOD
        assert record.all_acknowledged_at == last
        assert record.scheduled_deletion_at == last + timedelta(days=30)
        assert [a.guardian_id for a in record.acknowledgments] == [
            "guardian-b",
            "guardian-c",
        ]

    def test_quorum_with_retain_option(self) -> None:
        record = _pending(DataHandlingOption.RETAIN_90_DAYS).with_acknowledgment(
            "guardian-b", T0, quorum_met=True
        )
        assert record.scheduled_deletion_at == T0 + timedelta(days=90)

    def test_acknowledgments_closed_after_quorum(self) -> None:
        record = _pending().with_acknowledgment("guardian-b", T0, quorum_met=True)

        with pytest.raises(DissolutionRecordImmutableError):
            record.with_acknowledgment("guardian-c", T0, quorum_met=True)

    def test_initiator_acknowledgment_rejected(self) -> None:
        with pytest.raises(ValueError):
            _pending().with_acknowledgment("guardian-a", T0, quorum_met=False)


class TestWithQuorumMet:
    """Tests for entering the cooling period without a final acknowledgment."""

    def test_enters_cooling_period_keeping_acknowledgments(self) -> None:
        met_at = T0 + timedelta(days=3)
        partial = _pending().with_acknowledgment("guardian-b", T0, quorum_met=False)

        record = partial.with_quorum_met(met_at)

        assert record.status is DissolutionStatus.COOLING_PERIOD
        assert record.all_acknowledged_at == met_at
        assert record.scheduled_deletion_at == met_at + timedelta(days=30)
        assert record.acknowledgments == partial.acknowledgments

    def test_uses_extended_window_for_retain_option(self) -> None:
        record = _pending(DataHandlingOption.RETAIN_90_DAYS).with_quorum_met(T0)
        assert record.scheduled_deletion_at == T0 + timedelta(days=90)

    def test_deletion_date_is_fixed_once(self) -> None:
        record = _pending().with_quorum_met(T0)

        with pytest.raises(DissolutionRecordImmutableError):
            record.with_quorum_met(T0 + timedelta(days=1))

    def test_cancelled_record_rejected(self) -> None:
        cancelled = _pending().cancelled("guardian-b", T0)

        with pytest.raises(DissolutionRecordImmutableError):
            cancelled.with_quorum_met(T0)


class TestCancelled:
    """Tests for cancellation."""

    def test_cancel_pending(self) -> None:
        cancel_at = T0 + timedelta(hours=3)
        record = _pending().cancelled("guardian-b", cancel_at)

        assert record.status is DissolutionStatus.CANCELLED
        assert record.cancelled_by == "guardian-b"
        assert record.cancelled_at == cancel_at

    def test_cancel_keeps_scheduled_deletion(self) -> None:
        cooling = _pending().with_acknowledgment("guardian-b", T0, quorum_met=True)
        record = cooling.cancelled("guardian-a", T0 + timedelta(days=1))
        assert record.scheduled_deletion_at == cooling.scheduled_deletion_at

    def test_cancelled_record_cannot_be_cancelled_again(self) -> None:
        record = _pending().cancelled("guardian-b", T0)

        with pytest.raises(InvalidDissolutionTransitionError) as exc_info:
            record.cancelled("guardian-a", T0)

        assert exc_info.value.from_status is DissolutionStatus.CANCELLED
        assert exc_info.value.allowed_transitions == []

    def test_cancelled_record_rejects_acknowledgment(self) -> None:
        record = _pending().cancelled("guardian-b", T0)
        with pytest.raises(DissolutionRecordImmutableError):
            record.with_acknowledgment("guardian-c", T0, quorum_met=True)


class TestCompleted:
    """Tests for closing out the cooling period."""

    def test_complete_after_scheduled_deletion(self) -> None:
        cooling = _pending().with_acknowledgment("guardian-b", T0, quorum_met=True)
        done_at = T0 + timedelta(days=30)

        record = cooling.completed(done_at)

        assert record.status is DissolutionStatus.COMPLETED
        assert record.completed_at == done_at
        assert record.is_terminal

    def test_complete_before_scheduled_deletion_rejected(self) -> None:
        cooling = _pending().with_acknowledgment("guardian-b", T0, quorum_met=True)
        with pytest.raises(DissolutionRecordImmutableError):
            cooling.completed(T0 + timedelta(days=29))

    def test_pending_record_cannot_complete(self) -> None:
        with pytest.raises(InvalidDissolutionTransitionError):
            _pending().completed(T0 + timedelta(days=365))

    def test_completed_record_cannot_be_cancelled(self) -> None:
        record = (
            _pending()
            .with_acknowledgment("guardian-b", T0, quorum_met=True)
            .completed(T0 + timedelta(days=31))
        )
        with pytest.raises(InvalidDissolutionTransitionError):
            record.cancelled("guardian-a", T0 + timedelta(days=32))

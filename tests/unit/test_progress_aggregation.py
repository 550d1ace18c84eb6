"""
Unit tests for per-user progress and item status merging.
"""

from __future__ import annotations

from src.domain.models import CompletionStatus, ItemKind, UserProgress
from src.domain.services.progress import (
    compute_user_progress,
    merge_item_status,
    percent,
)

from tests.utils import at, doc, module, record


class TestComputeUserProgress:
    """Tests for compute_user_progress."""

    def test_required_items_only(self) -> None:
        items = [doc("A"), doc("B"), doc("C", required=False)]
        records = [record("A", status=CompletionStatus.COMPLETED), record("B")]

        progress = compute_user_progress(items, records, "user-1")

        assert progress == UserProgress(total=2, completed=1, percentage=50, is_complete=False)

    def test_no_records_means_nothing_completed(self) -> None:
        items = [doc("A"), doc("B"), doc("C")]

        progress = compute_user_progress(items, [], "user-1")

        assert progress.total == 3
        assert progress.completed == 0
        assert progress.percentage == 0
        assert progress.is_complete is False

    def test_empty_inputs_give_zero_state(self) -> None:
        assert compute_user_progress([], [], "user-1") == UserProgress()

    def test_only_optional_items_counts_as_not_complete(self) -> None:
        items = [doc("A", required=False)]
        records = [record("A", status=CompletionStatus.COMPLETED)]

        progress = compute_user_progress(items, records, "user-1")

        assert progress.total == 0
        assert progress.is_complete is False

    def test_all_required_done_is_complete(self) -> None:
        items = [doc("A"), doc("B")]
        records = [
            record("A", status=CompletionStatus.COMPLETED),
            record("B", status=CompletionStatus.APPROVED),
        ]

        progress = compute_user_progress(items, records, "user-1")

        assert progress.percentage == 100
        assert progress.is_complete is True

    def test_non_terminal_statuses_do_not_count(self) -> None:
        items = [doc(str(i)) for i in range(4)]
        records = [
            record("0", status=CompletionStatus.SUBMITTED),
            record("1", status=CompletionStatus.IN_PROGRESS),
            record("2", status=CompletionStatus.EXPIRED),
            record("3", status=CompletionStatus.PENDING),
        ]

        assert compute_user_progress(items, records, "user-1").completed == 0

    def test_other_users_records_ignored(self) -> None:
        items = [doc("A")]
        records = [record("A", user_id="someone-else", status=CompletionStatus.COMPLETED)]

        assert compute_user_progress(items, records, "user-1").completed == 0

    def test_rounding_one_third_and_two_thirds(self) -> None:
        items = [doc("A"), doc("B"), doc("C")]
        one = [record("A", status=CompletionStatus.COMPLETED)]
        two = one + [record("B", status=CompletionStatus.COMPLETED)]

        assert compute_user_progress(items, one, "user-1").percentage == 33
        assert compute_user_progress(items, two, "user-1").percentage == 67

    def test_kind_filter(self) -> None:
        items = [doc("A"), module("M")]
        records = [record("M", status=CompletionStatus.COMPLETED)]

        onboarding = compute_user_progress(
            items, records, "user-1", kind=ItemKind.ONBOARDING_DOCUMENT
        )
        training = compute_user_progress(
            items, records, "user-1", kind=ItemKind.TRAINING_ASSIGNMENT
        )

        assert (onboarding.total, onboarding.completed) == (1, 0)
        assert (training.total, training.completed, training.is_complete) == (1, 1, True)

    def test_duplicate_records_use_latest(self) -> None:
        items = [doc("A")]
        records = [
            record("A", status=CompletionStatus.PENDING, updated_at=at(10)),
            record("A", status=CompletionStatus.COMPLETED, updated_at=at(5)),
        ]

        progress = compute_user_progress(items, records, "user-1")

        assert progress.completed == 0


class TestPercent:
    def test_half_rounds_up(self) -> None:
        assert percent(1, 8) == 13
        assert percent(1, 2) == 50

    def test_zero_denominator(self) -> None:
        assert percent(0, 0) == 0
        assert percent(3, 0) == 0


class TestMergeItemStatus:
    """Tests for merge_item_status."""

    def test_preserves_order_and_length(self) -> None:
        items = [doc("C"), doc("A"), doc("B", required=False)]
        records = [record("A", status=CompletionStatus.SUBMITTED)]

        merged = merge_item_status(items, records, "user-1")

        assert [m.item.id for m in merged] == ["C", "A", "B"]
        assert [m.status for m in merged] == [
            CompletionStatus.PENDING,
            CompletionStatus.SUBMITTED,
            CompletionStatus.PENDING,
        ]

    def test_missing_record_fields_default_to_none(self) -> None:
        merged = merge_item_status([doc("A")], [], "user-1")

        entry = merged[0]
        assert entry.acknowledged_at is None
        assert entry.signature_url is None
        assert entry.form_data is None
        assert entry.record_id is None

    def test_copies_record_fields(self) -> None:
        records = [
            record(
                "A",
                status=CompletionStatus.COMPLETED,
                id="ack-1",
                acknowledged_at=at(3),
                signature_url="https://files.example.com/sig.png",
                form_data={"tax_code": "1257L"},
            )
        ]

        entry = merge_item_status([doc("A")], records, "user-1")[0]

        assert entry.record_id == "ack-1"
        assert entry.acknowledged_at == at(3)
        assert entry.signature_url == "https://files.example.com/sig.png"
        assert entry.form_data == {"tax_code": "1257L"}

    def test_duplicates_do_not_duplicate_output(self) -> None:
        items = [doc("A"), doc("B")]
        records = [
            record("A", status=CompletionStatus.SUBMITTED, updated_at=at(1)),
            record("A", status=CompletionStatus.APPROVED, updated_at=at(2)),
            record("A", status=CompletionStatus.PENDING, updated_at=at(0)),
        ]

        merged = merge_item_status(items, records, "user-1")

        assert len(merged) == len(items)
        assert merged[0].status == CompletionStatus.APPROVED

    def test_dated_record_beats_undated(self) -> None:
        records = [
            record("A", status=CompletionStatus.SUBMITTED, updated_at=at(1)),
            record("A", status=CompletionStatus.PENDING),
        ]

        assert merge_item_status([doc("A")], records, "user-1")[0].status == (
            CompletionStatus.SUBMITTED
        )

    def test_equal_timestamps_later_record_wins(self) -> None:
        records = [
            record("A", status=CompletionStatus.SUBMITTED, updated_at=at(1)),
            record("A", status=CompletionStatus.APPROVED, updated_at=at(1)),
        ]

        assert merge_item_status([doc("A")], records, "user-1")[0].status == (
            CompletionStatus.APPROVED
        )

    def test_does_not_mutate_inputs(self) -> None:
        items = [doc("A")]
        records = [record("A", status=CompletionStatus.COMPLETED)]

        merge_item_status(items, records, "user-1")

        assert items == [doc("A")]
        assert records == [record("A", status=CompletionStatus.COMPLETED)]

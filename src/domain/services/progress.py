"""
Progress aggregation over assignable items and completion records.

Everything here is a pure function over caller-supplied snapshots: nothing is
read from the database and neither input collection is mutated, so these can
be called from any number of request handlers at once.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import datetime

from src.domain.errors import InvalidArgumentError
from src.domain.models import (
    AcknowledgmentEntry,
    ActivityEntry,
    AssignableItem,
    AuditEntry,
    CompletionRecord,
    CompletionStatus,
    ItemKind,
    ItemWithStatus,
    OrgRates,
    SubmissionEntry,
    UserProgress,
)

AUDIT_ACTION_PHRASES: dict[str, str] = {
    "create_user": "New staff member added",
    "update_user": "Staff member updated",
    "delete_user": "Staff member deleted",
    "deactivate_user": "Staff member deactivated",
    "create_document": "Document created",
    "update_document": "Document updated",
    "approve_document": "Document approved",
    "reject_document": "Document rejected",
    "create_training": "Training module created",
    "update_training": "Training module updated",
    "assign_training": "Training assigned",
    "create_handbook": "Handbook created",
    "update_handbook": "Handbook updated",
    "assign_document": "Document assigned to staff",
    "create_hr_record": "HR record created",
}

DOCUMENT_TYPE_LABELS: dict[str, str] = {
    "onboarding": "Onboarding",
    "handbook": "Handbook",
    "hr_records": "HR Records",
    "training": "Training",
    "policy": "Policy",
    "other": "Other",
}


def percent(numerator: int, denominator: int) -> int:
    """Whole-number percentage rounded half-up; 0 for an empty denominator."""
    if denominator <= 0:
        return 0
    # Integer form of floor(n / d * 100 + 0.5), exact for any counts
    return (200 * numerator + denominator) // (2 * denominator)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _mean(values: Sequence[float]) -> int:
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def _is_newer(candidate: CompletionRecord, current: CompletionRecord) -> bool:
    # Undated records are older than any dated one; on a tie the later input wins.
    if candidate.updated_at is None:
        return current.updated_at is None
    if current.updated_at is None:
        return True
    return candidate.updated_at >= current.updated_at


def latest_records_by_item(
    records: Iterable[CompletionRecord], user_id: str
) -> dict[str, CompletionRecord]:
    """Resolve one record per item for ``user_id``, keeping the most recently updated."""
    latest: dict[str, CompletionRecord] = {}
    for record in records:
        if record.user_id != user_id:
            continue
        current = latest.get(record.item_id)
        if current is None or _is_newer(record, current):
            latest[record.item_id] = record
    return latest


def compute_user_progress(
    items: Iterable[AssignableItem],
    records: Iterable[CompletionRecord],
    user_id: str,
    *,
    kind: ItemKind | None = None,
) -> UserProgress:
    """
    Summarise how far ``user_id`` is through the required items.

    Only required items count; an item is done when the user's record for it
    is in a terminal-success status (completed or approved).
    """
    required = [
        item for item in items if item.is_required and (kind is None or item.kind == kind)
    ]
    total = len(required)
    if total == 0:
        return UserProgress()

    latest = latest_records_by_item(records, user_id)
    completed = sum(
        1
        for item in required
        if item.id in latest and latest[item.id].status.is_terminal_success
    )
    return UserProgress(
        total=total,
        completed=completed,
        percentage=percent(completed, total),
        is_complete=completed >= total,
    )


def merge_item_status(
    items: Iterable[AssignableItem],
    records: Iterable[CompletionRecord],
    user_id: str,
) -> list[ItemWithStatus]:
    """Annotate every item, in order, with the user's status on it."""
    latest = latest_records_by_item(records, user_id)
    merged: list[ItemWithStatus] = []
    for item in items:
        record = latest.get(item.id)
        if record is None:
            merged.append(ItemWithStatus(item=item))
            continue
        merged.append(
            ItemWithStatus(
                item=item,
                status=record.status,
                acknowledged_at=record.acknowledged_at,
                signature_url=record.signature_url,
                form_data=record.form_data,
                record_id=record.id,
            )
        )
    return merged


def compute_org_rates(
    items: Iterable[AssignableItem],
    records: Iterable[CompletionRecord],
) -> OrgRates:
    """Organisation-wide submission, onboarding and training rates."""
    kinds = {item.id: item.kind for item in items}
    records = list(records)

    submitted = sum(1 for r in records if r.completed_at is not None)

    onboarding = [r for r in records if kinds.get(r.item_id) == ItemKind.ONBOARDING_DOCUMENT]
    onboarding_done = sum(1 for r in onboarding if r.completed_at is not None)

    training = [r for r in records if kinds.get(r.item_id) == ItemKind.TRAINING_ASSIGNMENT]
    training_done = sum(1 for r in training if r.status.is_terminal_success)
    in_progress = sum(1 for r in training if r.status == CompletionStatus.IN_PROGRESS)

    scores = [r.score for r in records if r.score is not None]
    watched = [r.watched_percentage for r in records if r.watched_percentage is not None]

    return OrgRates(
        submission_rate=percent(submitted, len(records)),
        onboarding_rate=percent(onboarding_done, len(onboarding)),
        completion_rate=percent(training_done, len(training)),
        avg_score=_mean(scores),
        avg_watch_percentage=_mean(watched),
        total_assignments=len(records),
        total_submitted=submitted,
        total_completions=training_done,
        in_progress_count=in_progress,
    )


def describe_audit_action(action: str, changes: dict | None = None) -> str:
    description = AUDIT_ACTION_PHRASES.get(action, action)
    if changes:
        if changes.get("title"):
            description += f": {changes['title']}"
        if changes.get("name"):
            description += f": {changes['name']}"
    return description


def describe_document_type(document_type: str) -> str:
    return DOCUMENT_TYPE_LABELS.get(document_type, document_type)


def _from_audit(entry: AuditEntry) -> ActivityEntry:
    return ActivityEntry(
        id=f"audit-{entry.id}",
        type="audit",
        action=entry.action,
        description=describe_audit_action(entry.action, entry.changes),
        timestamp=entry.created_at,
    )


def _from_submission(entry: SubmissionEntry) -> ActivityEntry:
    user_name = entry.user_name or "Unknown"
    title = entry.document_title or "Unknown Document"
    doc_type = describe_document_type(entry.document_type or "document")
    return ActivityEntry(
        id=f"sub-{entry.id}",
        type="submission",
        action="document_submitted",
        description=f'{user_name} submitted "{title}" ({doc_type})',
        timestamp=entry.completed_at,
        user_name=user_name,
    )


def _from_acknowledgment(entry: AcknowledgmentEntry) -> ActivityEntry:
    user_name = entry.user_name or "Unknown"
    title = entry.record_title or (
        entry.record_type.replace("_", " ") if entry.record_type else "Unknown HR Record"
    )
    return ActivityEntry(
        id=f"hr-{entry.id}",
        type="hr_acknowledgment",
        action="hr_record_acknowledged",
        description=f'{user_name} acknowledged HR record "{title}"',
        timestamp=entry.acknowledged_at,
        user_name=user_name,
    )


def _timestamp_key(entry: ActivityEntry) -> datetime:
    return entry.timestamp


def merge_activity_timeline(
    audit_entries: Iterable[AuditEntry],
    submission_entries: Iterable[SubmissionEntry],
    acknowledgment_entries: Iterable[AcknowledgmentEntry],
    limit: int,
) -> list[ActivityEntry]:
    """
    Combine the three activity sources into one newest-first timeline.

    Entries sharing a timestamp keep source order (audit, then submission,
    then acknowledgment) because ``sorted`` is stable with ``reverse=True``.
    """
    if limit <= 0:
        raise InvalidArgumentError(f"Timeline limit must be positive, got {limit}")

    activities = [_from_audit(entry) for entry in audit_entries]
    activities.extend(_from_submission(entry) for entry in submission_entries)
    activities.extend(_from_acknowledgment(entry) for entry in acknowledgment_entries)

    activities = sorted(activities, key=_timestamp_key, reverse=True)
    return activities[:limit]

"""Queue Ordering - Sort and de-duplicate queue entries"""
from typing import Iterable, List, Tuple
from datetime import datetime

from ..domain.enums import QueueStatus
from ..domain.models import QueueEntry

# Escalated entries are served before everything else
STATUS_RANK = {
    QueueStatus.ESCALATED.value: 0,
    QueueStatus.QUEUED.value: 1,
    QueueStatus.IN_PROGRESS.value: 2,
    QueueStatus.RESOLVED.value: 3,
}


def queue_sort_key(entry: QueueEntry) -> Tuple[int, int, datetime]:
    """(escalated-first, priority ascending, enqueued_at ascending)"""
    return (STATUS_RANK.get(entry.status, len(STATUS_RANK)), entry.priority, entry.enqueued_at)


def order_entries(entries: Iterable[QueueEntry]) -> List[QueueEntry]:
    """Return entries in service order"""
    return sorted(entries, key=queue_sort_key)


def dedupe_by_complaint(entries: Iterable[QueueEntry]) -> List[QueueEntry]:
    """Keep the first entry seen per complaint, drop later duplicates"""
    seen = set()
    unique: List[QueueEntry] = []
    for entry in entries:
        if entry.complaint_id in seen:
            continue
        seen.add(entry.complaint_id)
        unique.append(entry)
    return unique

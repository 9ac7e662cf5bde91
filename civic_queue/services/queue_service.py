"""Priority Queue Service - Enqueue, ordered listing and stats"""
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Union
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pydantic import ValidationError

from ..domain.enums import QueueStatus
from ..domain.models import (
    Coordinates, Issue, PriorityBreakdown, QueueEntry, QueueStats, QueuedIssue
)
from ..domain.defaults import DEFAULT_ROUTE
from ..engine.queue_ordering import dedupe_by_complaint, order_entries
from ..repositories.issue_repo import IssueRepository
from ..repositories.queue_repo import QueueRepository
from ..utils.idgen import generate_queue_entry_id
from ..utils.time import format_iso, utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)

PRIORITY_BUCKETS = {1: "high", 2: "medium", 3: "low"}

STATUS_COUNTERS = {
    QueueStatus.QUEUED.value: "queued",
    QueueStatus.IN_PROGRESS.value: "in_progress",
    QueueStatus.ESCALATED.value: "escalated",
    QueueStatus.RESOLVED.value: "resolved",
}


@dataclass(frozen=True)
class EnrichmentHit:
    """Queue entry joined with its issue record"""
    entry: QueueEntry
    issue: Issue


@dataclass(frozen=True)
class EnrichmentMiss:
    """Queue entry whose issue record is missing or malformed"""
    entry: QueueEntry
    reason: str


EnrichmentResult = Union[EnrichmentHit, EnrichmentMiss]


class PriorityQueueService:
    """Service for the priority queue"""

    def __init__(self, db: Optional[Database] = None):
        self.queue_repo = QueueRepository(db)
        self.issue_repo = IssueRepository(db)

    # =========================================================================
    # Enqueue
    # =========================================================================

    def add_to_queue(
        self,
        issue: Issue,
        priority: int,
        escalated: bool,
        coordinates: Optional[Coordinates] = None
    ) -> str:
        """
        Create a new queue entry for a complaint

        The entry starts Escalated when the routing demanded it, otherwise
        Queued. The issue record itself is never touched. Store errors
        propagate to the caller.

        Returns:
            Generated queue entry ID
        """
        entry = QueueEntry(
            entry_id=generate_queue_entry_id(),
            complaint_id=issue.complaint_id,
            severity=issue.severity,
            priority=priority,
            status=QueueStatus.ESCALATED if escalated else QueueStatus.QUEUED,
            department_id=self._department_for(issue),
            enqueued_at=utc_now(),
            coordinates=coordinates,
        )
        self.queue_repo.insert_entry(entry)
        return entry.entry_id

    # =========================================================================
    # Listing
    # =========================================================================

    def get_queued_issues(self, department_id: Optional[str] = None) -> List[QueuedIssue]:
        """
        Ordered, de-duplicated queue with issue details

        Order is escalated-first, then priority ascending, then FIFO.
        Entries whose issue cannot be loaded are dropped. A failing store
        read yields an empty list.
        """
        try:
            entries = self.queue_repo.list_listed_entries(department_id)
            unique = dedupe_by_complaint(order_entries(entries))
            documents = self.issue_repo.get_issue_documents(e.complaint_id for e in unique)
        except PyMongoError as e:
            logger.error(f"Error fetching queued issues: {e}", extra={"department": department_id})
            return []

        results = [self._enrich(entry, documents.get(entry.complaint_id)) for entry in unique]

        queued: List[QueuedIssue] = []
        for result in results:
            if isinstance(result, EnrichmentMiss):
                logger.warning(
                    f"Dropping queue entry {result.entry.entry_id}: {result.reason}",
                    extra={"entry_id": result.entry.entry_id, "complaint_id": result.entry.complaint_id}
                )
                continue
            queued.append(self._to_queued_issue(result, position=len(queued) + 1))
        return queued

    def _enrich(self, entry: QueueEntry, doc: Optional[Dict[str, Any]]) -> EnrichmentResult:
        if doc is None:
            return EnrichmentMiss(entry, "issue record not found")
        doc = dict(doc)
        doc.setdefault("complaint_id", entry.complaint_id)
        try:
            return EnrichmentHit(entry, Issue.model_validate(doc))
        except ValidationError as e:
            return EnrichmentMiss(entry, f"issue record malformed ({e.error_count()} error(s))")

    def _to_queued_issue(self, hit: EnrichmentHit, position: int) -> QueuedIssue:
        return QueuedIssue(
            **hit.issue.model_dump(),
            queue_position=position,
            enqueued_at=format_iso(hit.entry.enqueued_at),
            priority=hit.entry.priority,
            escalated=hit.entry.is_escalated,
        )

    # =========================================================================
    # Stats
    # =========================================================================

    def get_queue_stats(self, department_id: Optional[str] = None) -> Optional[QueueStats]:
        """
        Counts by status and priority over every entry, active or not

        Returns None when the store read fails, which callers must keep
        apart from a successful all-zero result.
        """
        counts: Dict[str, int] = {name: 0 for name in STATUS_COUNTERS.values()}
        buckets: Dict[str, int] = {name: 0 for name in PRIORITY_BUCKETS.values()}
        total = 0

        try:
            for row in self.queue_repo.iter_stat_rows(department_id):
                total += 1
                status_counter = STATUS_COUNTERS.get(row.get("status"))
                if status_counter:
                    counts[status_counter] += 1
                bucket = PRIORITY_BUCKETS.get(row.get("priority"))
                if bucket:
                    buckets[bucket] += 1
        except PyMongoError as e:
            logger.error(f"Error fetching queue stats: {e}", extra={"department": department_id})
            return None

        return QueueStats(total=total, by_priority=PriorityBreakdown(**buckets), **counts)

    @staticmethod
    def _department_for(issue: Issue) -> str:
        if issue.routing is not None:
            return issue.routing.department
        return issue.department or DEFAULT_ROUTE.department

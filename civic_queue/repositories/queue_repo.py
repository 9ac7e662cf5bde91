"""Queue Repository - Data access for priority queue entries"""
from typing import Any, Dict, Iterator, List, Optional
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pydantic import ValidationError

from .mongo_client import ISSUE_QUEUE, get_collection
from ..domain.enums import ACTIVE_QUEUE_STATUSES, LISTED_QUEUE_STATUSES, QueueStatus
from ..domain.models import QueueEntry
from ..engine.queue_ordering import queue_sort_key
from ..utils.logger import get_logger
from ..utils.time import utc_now

logger = get_logger(__name__)


class QueueRepository:
    """
    Repository for queue entries

    A complaint may own several rows over time; nothing here enforces
    uniqueness. Listing order and de-duplication happen in the service layer.
    """

    def __init__(self, db: Optional[Database] = None):
        self._queue: Collection = get_collection(ISSUE_QUEUE, db)

    def insert_entry(self, entry: QueueEntry) -> QueueEntry:
        """Insert a new queue entry"""
        doc = entry.model_dump()
        doc["_id"] = entry.entry_id

        self._queue.insert_one(doc)
        logger.info(
            f"Enqueued {entry.complaint_id} as {entry.status} (priority {entry.priority})",
            extra={
                "complaint_id": entry.complaint_id,
                "entry_id": entry.entry_id,
                "department": entry.department_id,
                "status": entry.status,
                "priority": entry.priority,
            }
        )
        return entry

    def list_listed_entries(self, department_id: Optional[str] = None) -> List[QueueEntry]:
        """Entries in Queued or Escalated status, optionally for one department"""
        query: Dict[str, Any] = {"status": {"$in": [s.value for s in LISTED_QUEUE_STATUSES]}}
        if department_id:
            query["department_id"] = department_id

        entries = []
        for doc in self._queue.find(query):
            entry = self._to_entry(doc)
            if entry is not None:
                entries.append(entry)
        return entries

    def iter_stat_rows(self, department_id: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """Status and priority of every entry regardless of status"""
        query: Dict[str, Any] = {}
        if department_id:
            query["department_id"] = department_id
        return self._queue.find(query, {"status": 1, "priority": 1})

    def find_entry_for_complaint(self, complaint_id: str) -> Optional[QueueEntry]:
        """
        Locate the entry an escalation applies to

        Among active entries this is the one the ordered listing shows for
        the complaint. Without an active entry it falls back to the most
        recently enqueued entry of any status.
        """
        active = [
            entry for entry in (
                self._to_entry(doc) for doc in self._queue.find(self._active_filter(complaint_id))
            ) if entry is not None
        ]
        if active:
            return min(active, key=queue_sort_key)
        return self._latest_entry(complaint_id)

    def set_status_for_complaint(self, complaint_id: str, status: QueueStatus) -> List[str]:
        """
        Set the status of every active entry of a complaint

        Re-submitted complaints can own several active rows; all of them
        move together so no stale row stays listed. With no active entry
        the most recent entry of any status is updated instead.

        Returns:
            IDs of the updated entries, empty if the complaint is unknown
        """
        entry_ids = [doc["_id"] for doc in self._queue.find(self._active_filter(complaint_id), {"_id": 1})]
        if not entry_ids:
            latest = self._latest_entry(complaint_id)
            if latest is None:
                return []
            entry_ids = [latest.entry_id]

        self._queue.update_many(
            {"_id": {"$in": entry_ids}},
            {"$set": {"status": status.value, "updated_at": utc_now()}}
        )
        logger.info(
            f"Queue entries {', '.join(map(str, entry_ids))} of {complaint_id} set to {status.value}",
            extra={"complaint_id": complaint_id, "status": status.value}
        )
        return entry_ids

    def get_entry(self, entry_id: str) -> Optional[QueueEntry]:
        """Get one entry by ID"""
        doc = self._queue.find_one({"_id": entry_id})
        return self._to_entry(doc) if doc else None

    @staticmethod
    def _active_filter(complaint_id: str) -> Dict[str, Any]:
        return {"complaint_id": complaint_id, "status": {"$in": [s.value for s in ACTIVE_QUEUE_STATUSES]}}

    def _latest_entry(self, complaint_id: str) -> Optional[QueueEntry]:
        doc = self._queue.find_one({"complaint_id": complaint_id}, sort=[("enqueued_at", DESCENDING)])
        return self._to_entry(doc) if doc else None

    def compare_and_escalate(
        self,
        entry_id: str,
        expected_priority: int,
        new_priority: int
    ) -> Optional[QueueEntry]:
        """
        Escalate only if priority is still what the caller read

        Returns:
            The updated entry, or None if another writer changed the
            priority (or removed the entry) in between
        """
        result = self._queue.find_one_and_update(
            {"_id": entry_id, "priority": expected_priority},
            {"$set": {
                "priority": new_priority,
                "status": QueueStatus.ESCALATED.value,
                "updated_at": utc_now(),
            }},
            return_document=ReturnDocument.AFTER
        )
        if result is None:
            return None
        logger.info(
            f"Queue entry {entry_id} escalated: priority {expected_priority} -> {new_priority}",
            extra={
                "entry_id": entry_id,
                "complaint_id": result.get("complaint_id"),
                "status": QueueStatus.ESCALATED.value,
                "priority": new_priority,
            }
        )
        return self._to_entry(result)

    def _to_entry(self, doc: Dict[str, Any]) -> Optional[QueueEntry]:
        doc = dict(doc)
        entry_id = doc.pop("_id", None)
        doc.setdefault("entry_id", str(entry_id))
        try:
            return QueueEntry.model_validate(doc)
        except ValidationError as e:
            logger.error(
                f"Skipping malformed queue entry {entry_id}: {e.error_count()} validation error(s)",
                extra={"entry_id": str(entry_id), "complaint_id": doc.get("complaint_id")}
            )
            return None

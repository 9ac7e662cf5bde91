"""Document builders shared by the tests"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from civic_queue.domain.models import Issue, QueueEntry, RoutingDecision
from civic_queue.repositories.mongo_client import ISSUES, ISSUE_QUEUE

BASE_TIME = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


def make_issue(complaint_id: str, department: Optional[str] = "Municipal Roads Department", **overrides) -> Issue:
    fields: Dict[str, Any] = {
        "complaint_id": complaint_id,
        "issue_type": "Pothole",
        "severity": "Medium",
        "title": f"Issue {complaint_id}",
        "summary": "Reported by a resident.",
        "department": department,
        "created_at": BASE_TIME,
    }
    if department and "routing" not in overrides:
        fields["routing"] = RoutingDecision(
            department=department,
            contact="roads@civic.gov",
            response_sla="Within 16 hours",
            jurisdiction="Central Zone",
            notes="Test routing.",
            priority=2,
        )
    fields.update(overrides)
    return Issue(**fields)


def make_entry(
    entry_id: str,
    complaint_id: str,
    priority: int = 2,
    status: str = "Queued",
    minutes: int = 0,
    department: str = "Municipal Roads Department",
) -> QueueEntry:
    return QueueEntry(
        entry_id=entry_id,
        complaint_id=complaint_id,
        severity="Medium",
        priority=priority,
        status=status,
        department_id=department,
        enqueued_at=BASE_TIME + timedelta(minutes=minutes),
    )


def store_issue(db, issue: Issue) -> None:
    doc = issue.model_dump()
    doc["_id"] = issue.complaint_id
    db[ISSUES].insert_one(doc)


def store_entry(db, entry: QueueEntry) -> None:
    doc = entry.model_dump()
    doc["_id"] = entry.entry_id
    db[ISSUE_QUEUE].insert_one(doc)

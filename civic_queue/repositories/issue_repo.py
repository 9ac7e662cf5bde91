"""Issue Repository - Data access for classified issue records"""
from typing import Any, Dict, Iterable, List, Optional, Sequence
from pymongo.collection import Collection
from pymongo.database import Database

from .mongo_client import ISSUES, get_collection
from ..domain.enums import IssueStatus
from ..domain.errors import IssueNotFoundError
from ..domain.models import HistoryEntry, Issue
from ..utils.logger import get_logger

logger = get_logger(__name__)


class IssueRepository:
    """
    Repository for issue records

    Classification fields and routing are written once at creation; the
    only later mutation is a status change with an appended history event.
    """

    def __init__(self, db: Optional[Database] = None):
        self._issues: Collection = get_collection(ISSUES, db)

    def create_issue(self, issue: Issue) -> Issue:
        """Insert a new issue keyed by its complaint ID"""
        doc = issue.model_dump()
        doc["_id"] = issue.complaint_id

        self._issues.insert_one(doc)
        logger.info(
            f"Created issue: {issue.complaint_id}",
            extra={"complaint_id": issue.complaint_id}
        )
        return issue

    def exists(self, complaint_id: str) -> bool:
        """Check whether a complaint ID is taken"""
        return self._issues.find_one({"_id": complaint_id}, {"_id": 1}) is not None

    def get_issue(self, complaint_id: str) -> Optional[Issue]:
        """Get issue by complaint ID"""
        doc = self._issues.find_one({"_id": complaint_id})
        if doc:
            doc.pop("_id", None)
            return Issue.model_validate(doc)
        return None

    def get_issue_or_raise(self, complaint_id: str) -> Issue:
        """Get issue by complaint ID or raise error"""
        issue = self.get_issue(complaint_id)
        if not issue:
            raise IssueNotFoundError(
                f"Issue {complaint_id} not found",
                details={"complaint_id": complaint_id}
            )
        return issue

    def get_issue_documents(self, complaint_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Fetch raw documents for many complaints in one round trip

        Documents are returned unvalidated so the caller decides what a
        malformed record means.
        """
        ids: List[str] = list(dict.fromkeys(complaint_ids))
        if not ids:
            return {}

        docs: Dict[str, Dict[str, Any]] = {}
        for doc in self._issues.find({"_id": {"$in": ids}}):
            complaint_id = doc.pop("_id")
            docs[complaint_id] = doc
        return docs

    def record_status_change(
        self,
        complaint_id: str,
        status: IssueStatus,
        event: HistoryEntry,
        allowed_from: Sequence[IssueStatus]
    ) -> bool:
        """
        Move the issue forward and append a history event

        The filter only matches when the current status is one of
        allowed_from, which keeps the issue status monotonic.

        Returns:
            True if the issue was updated
        """
        result = self._issues.update_one(
            {"_id": complaint_id, "status": {"$in": [s.value for s in allowed_from]}},
            {
                "$set": {"status": status.value},
                "$push": {"history": event.model_dump()},
            }
        )
        if result.modified_count:
            logger.info(
                f"Issue {complaint_id} moved to {status.value}",
                extra={"complaint_id": complaint_id, "status": status.value}
            )
            return True

        logger.info(
            f"Issue {complaint_id} not moved to {status.value} (missing or already past it)",
            extra={"complaint_id": complaint_id, "status": status.value}
        )
        return False

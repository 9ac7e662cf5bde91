"""Queue Status Controller - Operator transitions on queue entries"""
from typing import Dict, Optional, Tuple
from pymongo.database import Database

from ..config.settings import settings
from ..domain.enums import IssueStatus, QueueAction, QueueStatus
from ..domain.errors import ConcurrencyError
from ..domain.models import HistoryEntry, QueueEntry
from ..engine.queue_ordering import queue_sort_key
from ..repositories.issue_repo import IssueRepository
from ..repositories.queue_repo import QueueRepository
from ..utils.time import utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Issue record moves forward only: target status -> statuses it may come from
ISSUE_TRANSITIONS: Dict[QueueAction, Tuple[IssueStatus, Tuple[IssueStatus, ...], str]] = {
    QueueAction.START: (
        IssueStatus.IN_PROGRESS,
        (IssueStatus.SUBMITTED,),
        "Work started by field response unit.",
    ),
    QueueAction.RESOLVE: (
        IssueStatus.RESOLVED,
        (IssueStatus.SUBMITTED, IssueStatus.IN_PROGRESS),
        "Marked resolved by operator.",
    ),
}


class QueueStatusController:
    """
    Apply start / resolve / escalate to the queue entries of a complaint

    The controller is permissive: any action is accepted from any current
    queue status, including Resolved. An unknown complaint is a logged
    no-op rather than an error.
    """

    def __init__(self, db: Optional[Database] = None, max_attempts: Optional[int] = None):
        self.queue_repo = QueueRepository(db)
        self.issue_repo = IssueRepository(db)
        self.max_attempts = max_attempts or settings.escalation_max_attempts

    def apply(self, complaint_id: str, action: QueueAction) -> Optional[QueueEntry]:
        """Dispatch an operator action"""
        action = QueueAction(action)
        if action == QueueAction.START:
            return self.start(complaint_id)
        if action == QueueAction.RESOLVE:
            return self.resolve(complaint_id)
        return self.escalate(complaint_id)

    def start(self, complaint_id: str) -> Optional[QueueEntry]:
        """Move every active entry of the complaint to InProgress"""
        return self._set_status(complaint_id, QueueStatus.IN_PROGRESS, QueueAction.START)

    def resolve(self, complaint_id: str) -> Optional[QueueEntry]:
        """Move every active entry of the complaint to Resolved"""
        return self._set_status(complaint_id, QueueStatus.RESOLVED, QueueAction.RESOLVE)

    def escalate(self, complaint_id: str) -> Optional[QueueEntry]:
        """
        Mark the entry Escalated and raise its priority by one level

        Priority 3 becomes 2, 2 becomes 1, 1 stays 1. The write only lands
        if the priority is unchanged since it was read; on conflict the
        entry is re-read and the decrement recomputed.

        Raises:
            ConcurrencyError: if every attempt lost to a concurrent writer
        """
        for attempt in range(1, self.max_attempts + 1):
            entry = self.queue_repo.find_entry_for_complaint(complaint_id)
            if entry is None:
                self._log_unknown(complaint_id, QueueAction.ESCALATE)
                return None

            new_priority = max(1, entry.priority - 1)
            updated = self.queue_repo.compare_and_escalate(entry.entry_id, entry.priority, new_priority)
            if updated is not None:
                return updated

            logger.warning(
                f"Escalation of {complaint_id} lost a race (attempt {attempt}/{self.max_attempts})",
                extra={"complaint_id": complaint_id, "entry_id": entry.entry_id, "action": QueueAction.ESCALATE.value}
            )

        raise ConcurrencyError(
            f"Could not escalate {complaint_id}: priority kept changing. Please retry.",
            details={"complaint_id": complaint_id, "attempts": self.max_attempts}
        )

    def _set_status(
        self,
        complaint_id: str,
        status: QueueStatus,
        action: QueueAction
    ) -> Optional[QueueEntry]:
        entry_ids = self.queue_repo.set_status_for_complaint(complaint_id, status)
        if not entry_ids:
            self._log_unknown(complaint_id, action)
            return None

        issue_status, allowed_from, note = ISSUE_TRANSITIONS[action]
        self.issue_repo.record_status_change(
            complaint_id,
            issue_status,
            HistoryEntry(status=issue_status, timestamp=utc_now(), note=note),
            allowed_from=allowed_from,
        )

        updated = [e for e in (self.queue_repo.get_entry(i) for i in entry_ids) if e is not None]
        return min(updated, key=queue_sort_key) if updated else None

    @staticmethod
    def _log_unknown(complaint_id: str, action: QueueAction) -> None:
        logger.warning(
            f"No queue entry for {complaint_id}; {action.value} ignored",
            extra={"complaint_id": complaint_id, "action": action.value}
        )

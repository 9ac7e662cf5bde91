"""Issue Service - Submission of classified complaints"""
from datetime import datetime
from typing import List, Optional, Tuple
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from ..config.settings import settings
from ..domain.defaults import DEFAULT_ROUTING
from ..domain.enums import IssueStatus, Severity
from ..domain.errors import ComplaintIdExhaustedError
from ..domain.models import Coordinates, HistoryEntry, Issue, IssueAnalysis, RoutingDefaults
from ..repositories.issue_repo import IssueRepository
from .queue_service import PriorityQueueService
from .routing_service import RoutingService
from ..utils.idgen import generate_complaint_id
from ..utils.time import add_minutes, utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)

# High severity gets a work order straight away
WORK_ORDER_DELAY_MINUTES = 30


def build_tracking(severity: str, now: datetime) -> Tuple[IssueStatus, List[HistoryEntry]]:
    """
    Initial status and history for a new complaint

    History opens with the Submitted event; later milestones are listed
    with a None timestamp until they happen.
    """
    history = [
        HistoryEntry(
            status=IssueStatus.SUBMITTED,
            timestamp=now,
            note="Complaint recorded and routed to control center.",
        )
    ]

    if Severity.normalize(severity) == Severity.HIGH:
        status = IssueStatus.IN_PROGRESS
        history.append(HistoryEntry(
            status=IssueStatus.IN_PROGRESS,
            timestamp=add_minutes(now, WORK_ORDER_DELAY_MINUTES),
            note="Work order issued to field response unit.",
        ))
    else:
        status = IssueStatus.SUBMITTED
        history.append(HistoryEntry(
            status=IssueStatus.IN_PROGRESS,
            timestamp=None,
            note="Awaiting crew assignment based on workload.",
        ))

    history.append(HistoryEntry(
        status=IssueStatus.RESOLVED,
        timestamp=None,
        note="Resolution pending verification visit.",
    ))
    return status, history


class IssueService:
    """Service for submitting and reading issues"""

    def __init__(
        self,
        db: Optional[Database] = None,
        defaults: RoutingDefaults = DEFAULT_ROUTING
    ):
        self.issue_repo = IssueRepository(db)
        self.routing_service = RoutingService(db, defaults)
        self.queue_service = PriorityQueueService(db)

    def submit_issue(
        self,
        analysis: IssueAnalysis,
        location: Optional[Coordinates] = None,
        description: Optional[str] = None,
        user_id: Optional[str] = None,
        user_email: Optional[str] = None
    ) -> Issue:
        """
        Route, persist and enqueue a classified complaint

        Returns:
            The stored issue, including its complaint ID and routing
        """
        routing = self.routing_service.route_issue(analysis.issue_type, analysis.severity, location)

        now = utc_now()
        status, history = build_tracking(analysis.severity, now)

        fields = analysis.model_dump()
        fields["department"] = routing.department
        base = Issue(
            **fields,
            complaint_id="pending",
            routing=routing,
            status=status,
            history=history,
            location=location,
            description=description,
            user_id=user_id,
            user_email=user_email,
            created_at=now,
        )

        issue = self._persist_with_fresh_id(base, now)
        self.queue_service.add_to_queue(issue, routing.priority, routing.escalated, location)
        return issue

    def get_issue(self, complaint_id: str) -> Issue:
        """Get issue by complaint ID"""
        return self.issue_repo.get_issue_or_raise(complaint_id)

    def _persist_with_fresh_id(self, issue: Issue, now: datetime) -> Issue:
        """Insert under a newly generated complaint ID, retrying on collision"""
        attempts = settings.complaint_id_max_attempts
        for _ in range(attempts):
            candidate = issue.model_copy(update={"complaint_id": generate_complaint_id(now)})
            if self.issue_repo.exists(candidate.complaint_id):
                logger.warning(
                    f"Complaint ID collision on {candidate.complaint_id}, regenerating",
                    extra={"complaint_id": candidate.complaint_id}
                )
                continue
            try:
                return self.issue_repo.create_issue(candidate)
            except DuplicateKeyError:
                logger.warning(
                    f"Complaint ID {candidate.complaint_id} taken concurrently, regenerating",
                    extra={"complaint_id": candidate.complaint_id}
                )

        raise ComplaintIdExhaustedError(
            f"No free complaint ID after {attempts} attempts",
            details={"attempts": attempts}
        )

"""
Issue Routes

Submission of classified complaints and lookup of issue records.
"""

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from ..deps import get_correlation_id_dep, get_db_dep, get_routing_defaults_dep
from ...domain.errors import DomainError
from ...domain.models import Issue, RoutingDefaults
from ...services.issue_service import IssueService
from ...utils.logger import get_logger
from .schemas import SubmitIssueRequest, SubmitIssueResponse

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=SubmitIssueResponse)
async def submit_issue(
    request: SubmitIssueRequest,
    db: Database = Depends(get_db_dep),
    defaults: RoutingDefaults = Depends(get_routing_defaults_dep),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """
    Submit a classified complaint.

    Computes routing from the current configuration, stores the issue
    under a new CIR-... complaint ID and adds it to the priority queue.
    """
    try:
        service = IssueService(db, defaults)
        issue = service.submit_issue(
            analysis=request.analysis,
            location=request.location,
            description=request.description,
            user_id=request.user_id,
            user_email=request.user_email
        )
        return SubmitIssueResponse(complaint_id=issue.complaint_id, routing=issue.routing)

    except DomainError as e:
        raise HTTPException(status_code=e.http_status, detail=e.to_dict())


@router.get("/{complaint_id}", response_model=Issue)
async def get_issue(
    complaint_id: str,
    db: Database = Depends(get_db_dep)
):
    """Get an issue record with its routing and history."""
    try:
        return IssueService(db).get_issue(complaint_id)

    except DomainError as e:
        raise HTTPException(status_code=e.http_status, detail=e.to_dict())

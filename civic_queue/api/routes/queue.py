"""
Queue Routes

Ordered queue listing with optional stats, direct enqueue, and operator
status actions (start / resolve / escalate).
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.database import Database

from ..deps import get_correlation_id_dep, get_db_dep
from ...domain.errors import DomainError
from ...domain.models import Issue
from ...services.queue_service import PriorityQueueService
from ...services.queue_status_service import QueueStatusController
from ...utils.logger import get_logger
from .schemas import ActionResponse, EnqueueRequest, EnqueueResponse, QueueUpdateRequest

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
async def get_queue(
    department: Optional[str] = Query(None, description="Restrict to one department"),
    stats: bool = Query(False, description="Include queue statistics"),
    db: Database = Depends(get_db_dep)
) -> Dict[str, Any]:
    """
    Get the priority queue.

    Escalated issues come first, then by priority, then oldest first. A
    backend failure shows up as an empty queue; stats are null when they
    could not be computed.
    """
    service = PriorityQueueService(db)
    issues = service.get_queued_issues(department)

    response: Dict[str, Any] = {
        "issues": [issue.model_dump(mode="json", by_alias=True) for issue in issues],
        "count": len(issues),
    }

    if stats:
        queue_stats = service.get_queue_stats(department)
        response["stats"] = queue_stats.model_dump(mode="json", by_alias=True) if queue_stats else None

    return response


@router.post("", response_model=EnqueueResponse)
async def enqueue_issue(
    request: EnqueueRequest,
    db: Database = Depends(get_db_dep),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """
    Add a complaint to the queue directly.

    Used for re-submission; the issue record is not created or changed.
    """
    issue = Issue(**request.analysis.model_dump())
    entry_id = PriorityQueueService(db).add_to_queue(
        issue, request.priority, request.escalated, request.coordinates
    )
    return EnqueueResponse(entry_id=entry_id)


@router.post("/update", response_model=ActionResponse)
async def update_queue(
    request: QueueUpdateRequest,
    db: Database = Depends(get_db_dep),
    correlation_id: str = Depends(get_correlation_id_dep)
):
    """
    Apply an operator action to a complaint's queue entry.

    An unknown complaint ID is accepted and ignored.
    """
    try:
        QueueStatusController(db).apply(request.complaint_id, request.action)
        return ActionResponse()

    except DomainError as e:
        raise HTTPException(status_code=e.http_status, detail=e.to_dict())

"""
API Schemas

Request and response models for the issue, queue, routing and admin
endpoints. Field names on the wire are camelCase.
"""

from typing import Optional
from pydantic import EmailStr, Field

from ...domain.enums import QueueAction
from ...domain.models import CivicModel, Coordinates, IssueAnalysis, RoutingDecision


# =============================================================================
# Issue Schemas
# =============================================================================

class SubmitIssueRequest(CivicModel):
    """Classified complaint ready for routing"""
    analysis: IssueAnalysis
    location: Optional[Coordinates] = None
    description: Optional[str] = Field(None, max_length=5000)
    user_id: Optional[str] = None
    user_email: Optional[EmailStr] = None


class SubmitIssueResponse(CivicModel):
    success: bool = True
    complaint_id: str
    message: str = "Report submitted successfully"
    routing: RoutingDecision


# =============================================================================
# Queue Schemas
# =============================================================================

class EnqueueAnalysis(IssueAnalysis):
    """Issue fields (without routing) for a direct enqueue"""
    complaint_id: str = Field(..., min_length=1)


class EnqueueRequest(CivicModel):
    """Add an existing complaint to the queue again"""
    analysis: EnqueueAnalysis
    priority: int = Field(..., ge=1, le=3)
    escalated: bool = False
    coordinates: Optional[Coordinates] = None


class EnqueueResponse(CivicModel):
    success: bool = True
    entry_id: str


class QueueUpdateRequest(CivicModel):
    """Operator action on a complaint's queue entry"""
    complaint_id: str = Field(..., min_length=1)
    action: QueueAction


class ActionResponse(CivicModel):
    success: bool = True


# =============================================================================
# Routing Schemas
# =============================================================================

class ResolveRoutingRequest(CivicModel):
    """Preview the routing for an issue type"""
    issue_type: str = ""
    severity: Optional[str] = None
    coordinates: Optional[Coordinates] = None

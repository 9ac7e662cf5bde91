"""
Routing Routes

Read-only preview of the routing an issue would receive.
"""

from fastapi import APIRouter, Depends
from pymongo.database import Database

from ..deps import get_db_dep, get_routing_defaults_dep
from ...domain.models import RoutingDecision, RoutingDefaults
from ...services.routing_service import RoutingService
from .schemas import ResolveRoutingRequest

router = APIRouter()


@router.post("/resolve", response_model=RoutingDecision)
async def resolve_routing(
    request: ResolveRoutingRequest,
    db: Database = Depends(get_db_dep),
    defaults: RoutingDefaults = Depends(get_routing_defaults_dep)
):
    """Compute department, jurisdiction, SLA and priority without storing anything."""
    return RoutingService(db, defaults).route_issue(
        request.issue_type, request.severity, request.coordinates
    )

"""
Admin Routes

Seed and inspect the routing configuration. Both endpoints require
"Authorization: Bearer <ADMIN_INIT_TOKEN>".
"""

from fastapi import APIRouter, Depends
from pymongo.database import Database

from ..deps import get_db_dep, get_routing_defaults_dep, require_admin_dep
from ...domain.errors import StorageError
from ...domain.models import RoutingDefaults
from ...services.routing_service import RoutingService
from ...utils.time import format_iso, utc_now
from ...utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(dependencies=[Depends(require_admin_dep)])


@router.post("/init-routing")
async def init_routing(
    db: Database = Depends(get_db_dep),
    defaults: RoutingDefaults = Depends(get_routing_defaults_dep)
):
    """
    Seed severity configs and route templates.

    Merge-upserts the built-in rows; safe to call repeatedly.
    """
    if not RoutingService(db, defaults).initialize_routing_configs():
        raise StorageError("Some routing configurations could not be written")

    logger.info("Routing configurations initialized via admin endpoint")
    return {
        "success": True,
        "message": "Routing and severity configurations initialized successfully",
        "timestamp": format_iso(utc_now()),
    }


@router.get("/init-routing")
async def get_routing_configuration(
    db: Database = Depends(get_db_dep),
    defaults: RoutingDefaults = Depends(get_routing_defaults_dep)
):
    """Current route templates, effective severity configs and built-in defaults."""
    config = RoutingService(db, defaults).get_configuration()
    return {
        "routeConfigs": [t.model_dump(mode="json", by_alias=True) for t in config["route_configs"]],
        "severityConfigs": {
            level: c.model_dump(mode="json", by_alias=True) for level, c in config["severity_configs"].items()
        },
        "severityDefaults": {
            level: c.model_dump(mode="json", by_alias=True) for level, c in config["severity_defaults"].items()
        },
        "status": "initialized",
        "timestamp": format_iso(utc_now()),
    }

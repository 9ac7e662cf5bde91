"""API Routes module"""
from fastapi import APIRouter

from .issues import router as issues_router
from .queue import router as queue_router
from .routing import router as routing_router
from .admin import router as admin_router

# Main API router
api_router = APIRouter()

api_router.include_router(issues_router, prefix="/issues", tags=["Issues"])
api_router.include_router(queue_router, prefix="/queue", tags=["Queue"])
api_router.include_router(routing_router, prefix="/routing", tags=["Routing"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])

__all__ = ["api_router"]

"""API Dependencies - Common dependencies for routes"""
import secrets
from typing import Optional
from fastapi import Header, HTTPException, Request, status
from pymongo.database import Database

from ..config.settings import settings
from ..domain.defaults import DEFAULT_ROUTING
from ..domain.errors import AuthenticationError
from ..domain.models import RoutingDefaults
from ..repositories.mongo_client import get_database
from ..utils.logger import set_correlation_id
from ..utils.idgen import generate_correlation_id


async def get_correlation_id_dep(
    x_correlation_id: Optional[str] = Header(None, alias="X-Correlation-Id")
) -> str:
    """
    Get or generate correlation ID for request tracing

    If client provides X-Correlation-Id, use it.
    Otherwise generate a new one.
    """
    correlation_id = x_correlation_id or generate_correlation_id()
    set_correlation_id(correlation_id)
    return correlation_id


def get_db_dep() -> Database:
    """Application database (overridden in tests)"""
    return get_database()


def get_routing_defaults_dep(request: Request) -> RoutingDefaults:
    """Built-in routing tables injected at startup"""
    return getattr(request.app.state, "routing_defaults", DEFAULT_ROUTING)


async def require_admin_dep(
    authorization: Optional[str] = Header(None)
) -> None:
    """
    Guard for the admin routing endpoints

    Expects "Authorization: Bearer <admin_init_token>". An unset token
    disables the endpoints.
    """
    expected = settings.admin_init_token
    supplied = authorization or ""
    if not expected or not secrets.compare_digest(supplied.encode(), f"Bearer {expected}".encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AuthenticationError("Unauthorized").to_dict(),
            headers={"WWW-Authenticate": "Bearer"}
        )

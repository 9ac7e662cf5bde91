"""API module - Routes and dependencies"""
from .deps import get_correlation_id_dep, get_db_dep, require_admin_dep

__all__ = ["get_correlation_id_dep", "get_db_dep", "require_admin_dep"]

"""Routing Service - Database-backed issue routing"""
from typing import Any, Dict, Optional
from pymongo.database import Database

from ..domain.defaults import DEFAULT_ROUTING
from ..domain.models import Coordinates, RoutingDecision, RoutingDefaults
from ..engine.routing_resolver import RoutingResolver
from ..repositories.routing_config_repo import RoutingConfigRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RoutingService:
    """Service for routing decisions and routing configuration"""

    def __init__(
        self,
        db: Optional[Database] = None,
        defaults: RoutingDefaults = DEFAULT_ROUTING
    ):
        self.config_repo = RoutingConfigRepository(db, defaults)
        self.resolver = RoutingResolver(defaults)

    def route_issue(
        self,
        issue_type: str,
        severity: Optional[str],
        coordinates: Optional[Coordinates] = None
    ) -> RoutingDecision:
        """Route an issue against the current configuration snapshot"""
        templates = self.config_repo.fetch_route_configs()
        severity_config = self.config_repo.fetch_severity_config(severity)

        decision = self.resolver.resolve(issue_type, severity_config, templates, coordinates)
        logger.info(
            f"Routed '{issue_type}' to {decision.department} ({decision.jurisdiction})",
            extra={"department": decision.department, "priority": decision.priority}
        )
        return decision

    def initialize_routing_configs(self) -> bool:
        """Seed the built-in routing tables (idempotent)"""
        return self.config_repo.initialize_routing_configs()

    def get_configuration(self) -> Dict[str, Any]:
        """Current route templates plus effective and built-in severity tables"""
        return {
            "route_configs": self.config_repo.fetch_route_configs(),
            "severity_configs": self.config_repo.fetch_severity_configs(),
            "severity_defaults": {
                config.level: config for config in self.config_repo.defaults.severity_configs
            },
        }

"""Routing Config Repository - Route templates and severity configuration"""
from typing import Dict, List, Optional
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pydantic import ValidationError

from .mongo_client import ROUTE_CONFIGS, SEVERITY_CONFIGS, get_collection
from ..domain.defaults import DEFAULT_ROUTING
from ..domain.enums import Severity
from ..domain.models import RouteTemplate, RoutingDefaults, SeverityConfig
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RoutingConfigRepository:
    """
    Repository for routing configuration

    Reads never dead-end: an empty, unreachable or corrupt store yields the
    built-in defaults this repository was constructed with.
    """

    def __init__(
        self,
        db: Optional[Database] = None,
        defaults: RoutingDefaults = DEFAULT_ROUTING
    ):
        self._routes: Collection = get_collection(ROUTE_CONFIGS, db)
        self._severities: Collection = get_collection(SEVERITY_CONFIGS, db)
        self.defaults = defaults

    # =========================================================================
    # Reads
    # =========================================================================

    def fetch_route_configs(self) -> List[RouteTemplate]:
        """All persisted route templates in configured order, or the defaults"""
        try:
            templates = []
            for doc in self._routes.find({}).sort("order", ASCENDING):
                doc["id"] = doc.pop("_id")
                templates.append(RouteTemplate.model_validate(doc))
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error fetching route configs, using defaults: {e}")
            return list(self.defaults.route_templates)

        if not templates:
            logger.info("No route configs persisted, using defaults")
            return list(self.defaults.route_templates)
        return templates

    def fetch_severity_config(self, level: Optional[str]) -> SeverityConfig:
        """
        Persisted config for a severity level, or the built-in one

        Unknown or empty levels resolve as Medium.
        """
        severity = Severity.normalize(level)
        try:
            doc = self._severities.find_one({"_id": severity.value})
            if doc:
                doc.pop("_id", None)
                doc.setdefault("level", severity.value)
                return SeverityConfig.model_validate(doc)
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error fetching severity config for {severity.value}, using defaults: {e}")

        return self.defaults.severity(severity)

    def fetch_severity_configs(self) -> Dict[str, SeverityConfig]:
        """Effective config for every severity level"""
        return {level.value: self.fetch_severity_config(level.value) for level in Severity}

    # =========================================================================
    # Seeding
    # =========================================================================

    def initialize_routing_configs(self) -> bool:
        """
        Merge-upsert the built-in severity configs and route templates

        Existing rows keep fields the defaults don't mention. A failing row
        is logged and skipped, the rest are still written.

        Returns:
            True if every row was written
        """
        failures = 0

        for config in self.defaults.severity_configs:
            try:
                self._severities.update_one(
                    {"_id": config.level},
                    {"$set": config.model_dump()},
                    upsert=True
                )
            except PyMongoError as e:
                failures += 1
                logger.error(f"Failed to seed severity config {config.level}: {e}")

        for position, template in enumerate(self.defaults.route_templates):
            doc = template.model_dump(exclude={"id"})
            if doc.get("order") is None:
                doc["order"] = position
            try:
                self._routes.update_one({"_id": template.id}, {"$set": doc}, upsert=True)
            except PyMongoError as e:
                failures += 1
                logger.error(f"Failed to seed route config {template.id}: {e}")

        if failures:
            logger.warning(f"Routing configurations seeded with {failures} failure(s)")
            return False

        logger.info("Routing configurations initialized successfully")
        return True

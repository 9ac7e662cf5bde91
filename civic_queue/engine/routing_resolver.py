"""Routing Resolver - Map issue type, severity and location to a routing decision"""
import math
import re
from typing import Optional, Sequence

from ..domain.defaults import DEFAULT_ROUTING
from ..domain.enums import Jurisdiction
from ..domain.models import (
    Coordinates, RouteTemplate, RoutingDecision, RoutingDefaults, SeverityConfig
)

# Zone thresholds, tested in this order
NORTH_LAT_MIN = 13.0
SOUTH_LAT_MAX = 12.9
EAST_LNG_MIN = 77.65
WEST_LNG_MAX = 77.55

SLA_PATTERN = re.compile(r"(\d+)\s+(hours?|days?)", re.IGNORECASE)


def derive_jurisdiction(coords: Optional[Coordinates]) -> Jurisdiction:
    """
    Bucket a point into a zone

    Latitude is checked before longitude, so a point in the lat band
    [12.9, 13.0) can only ever land in East, West or Central.
    """
    if coords is None:
        return Jurisdiction.CITYWIDE
    if coords.lat >= NORTH_LAT_MIN:
        return Jurisdiction.NORTH
    if coords.lat <= SOUTH_LAT_MAX:
        return Jurisdiction.SOUTH
    if coords.lng >= EAST_LNG_MIN:
        return Jurisdiction.EAST
    if coords.lng <= WEST_LNG_MAX:
        return Jurisdiction.WEST
    return Jurisdiction.CENTRAL


def calculate_sla_deadline(base_sla: str, severity_config: SeverityConfig) -> str:
    """
    Shorten a base SLA by the severity's multiplier

    "Within 24 hours" with multiplier 2 becomes "Within 12 hours". The
    adjusted amount is rounded up. Strings without a parseable
    "<N> <hours|days>" pass through unchanged.
    """
    match = SLA_PATTERN.search(base_sla or "")
    if not match:
        return base_sla

    amount = int(match.group(1))
    unit = "hours" if match.group(2).lower().startswith("hour") else "days"
    adjusted = math.ceil(amount / severity_config.sla_multiplier)

    return f"Within {adjusted} {unit}"


def select_template(
    issue_type: str,
    templates: Sequence[RouteTemplate],
    default_route: RouteTemplate
) -> RouteTemplate:
    """First template (in list order) with a keyword match wins"""
    for template in templates:
        if template.matches(issue_type):
            return template
    return default_route


class RoutingResolver:
    """
    Pure routing over a configuration snapshot

    The resolver holds no state beyond the built-in defaults it was
    constructed with; templates and severity config are passed per call.
    """

    def __init__(self, defaults: RoutingDefaults = DEFAULT_ROUTING):
        self.defaults = defaults

    def resolve(
        self,
        issue_type: str,
        severity_config: SeverityConfig,
        templates: Sequence[RouteTemplate],
        coordinates: Optional[Coordinates] = None
    ) -> RoutingDecision:
        """
        Build the routing decision for one issue

        Args:
            issue_type: Free-text issue type from classification
            severity_config: Config for the issue's (normalised) severity
            templates: Route templates in configured order
            coordinates: Optional report location

        Returns:
            RoutingDecision with priority and escalation from the severity config
        """
        template = select_template(issue_type, templates, self.defaults.default_route)
        jurisdiction = derive_jurisdiction(coordinates)

        return RoutingDecision(
            department=template.department,
            contact=template.contact,
            response_sla=calculate_sla_deadline(template.response_sla, severity_config),
            jurisdiction=jurisdiction,
            notes=(
                f"{template.notes} Jurisdiction: {jurisdiction.value}. "
                f"Priority Level: {severity_config.level}."
            ),
            priority=severity_config.priority,
            escalated=severity_config.auto_escalate,
        )

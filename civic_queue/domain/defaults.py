"""Built-in routing tables

These are the fallback when the config store is empty or unreachable and
the rows written by the seed operation. They are handed to the config
store and resolver at startup; nothing mutates them at runtime.
"""
from .enums import Severity
from .models import RouteTemplate, RoutingDefaults, SeverityConfig


DEFAULT_ROUTE = RouteTemplate(
    id="default",
    keywords=[],
    department="Civic Response Center",
    contact="support@civic.gov",
    response_sla="Within 48 hours",
    notes="Review and dispatch to relevant department.",
    severity_multiplier=1,
)

DEFAULT_ROUTE_TEMPLATES = (
    RouteTemplate(
        id="road-pothole",
        keywords=["road", "pothole", "traffic", "asphalt", "pavement"],
        department="Municipal Roads Department",
        contact="roads@civic.gov",
        response_sla="Within 24 hours",
        notes="Coordinate asphalt team and traffic police for diversions.",
        severity_multiplier=1.5,
        order=0,
    ),
    RouteTemplate(
        id="garbage-waste",
        keywords=["garbage", "waste", "sanitation", "litter", "dump"],
        department="Sanitation Department",
        contact="sanitation@civic.gov",
        response_sla="Within 18 hours",
        notes="Dispatch vacuum compactor and notify ward health officer.",
        severity_multiplier=1.2,
        order=1,
    ),
    RouteTemplate(
        id="streetlight-electric",
        keywords=["streetlight", "electric", "lamp", "light", "bulb"],
        department="Electricity Board",
        contact="electricity.board@civic.gov",
        response_sla="Within 12 hours",
        notes="Escalate to maintenance circle with feeder ID.",
        severity_multiplier=1.3,
        order=2,
    ),
    RouteTemplate(
        id="water-sewage",
        keywords=["water", "leak", "sewage", "drain", "pipeline"],
        department="Water Supply & Sewerage Board",
        contact="waterboard@civic.gov",
        response_sla="Within 24 hours",
        notes="Alert valve crew and quality lab for contamination risk.",
        severity_multiplier=2,
        order=3,
    ),
)

SEVERITY_DEFAULTS = (
    SeverityConfig(level=Severity.LOW, priority=3, auto_escalate=False, sla_multiplier=1),
    SeverityConfig(level=Severity.MEDIUM, priority=2, auto_escalate=False, sla_multiplier=1.5),
    SeverityConfig(level=Severity.HIGH, priority=1, auto_escalate=True, sla_multiplier=2),
)

DEFAULT_ROUTING = RoutingDefaults(
    route_templates=DEFAULT_ROUTE_TEMPLATES,
    severity_configs=SEVERITY_DEFAULTS,
    default_route=DEFAULT_ROUTE,
)

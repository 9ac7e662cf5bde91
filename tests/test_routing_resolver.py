"""
Tests for the routing rules.

1. Jurisdiction thresholds are tested latitude first
2. SLA shortening by severity multiplier, rounded up
3. First matching template wins, default route otherwise
4. End-to-end decisions for typical complaints
"""
import pytest

from civic_queue.domain.defaults import DEFAULT_ROUTING, DEFAULT_ROUTE_TEMPLATES
from civic_queue.domain.enums import Jurisdiction, Severity
from civic_queue.domain.models import Coordinates, RouteTemplate, SeverityConfig
from civic_queue.engine.routing_resolver import (
    RoutingResolver, calculate_sla_deadline, derive_jurisdiction, select_template
)


def severity(multiplier: float, level: str = "Medium", priority: int = 2) -> SeverityConfig:
    return SeverityConfig(level=level, priority=priority, sla_multiplier=multiplier)


# =============================================================================
# TEST: JURISDICTION
# =============================================================================

class TestDeriveJurisdiction:
    """Tests for derive_jurisdiction."""

    def test_no_coordinates_is_citywide(self):
        assert derive_jurisdiction(None) == Jurisdiction.CITYWIDE

    @pytest.mark.parametrize("lat,lng,expected", [
        (13.05, 77.60, Jurisdiction.NORTH),
        (13.0, 77.70, Jurisdiction.NORTH),
        (12.85, 77.60, Jurisdiction.SOUTH),
        (12.9, 77.50, Jurisdiction.SOUTH),
        (12.95, 77.70, Jurisdiction.EAST),
        (12.95, 77.65, Jurisdiction.EAST),
        (12.95, 77.50, Jurisdiction.WEST),
        (12.95, 77.55, Jurisdiction.WEST),
        (12.95, 77.60, Jurisdiction.CENTRAL),
    ])
    def test_thresholds(self, lat, lng, expected):
        assert derive_jurisdiction(Coordinates(lat=lat, lng=lng)) == expected

    def test_latitude_is_checked_before_longitude(self):
        """A far-east point north of 13.0 is still North."""
        assert derive_jurisdiction(Coordinates(lat=13.2, lng=78.5)) == Jurisdiction.NORTH
        assert derive_jurisdiction(Coordinates(lat=12.5, lng=76.0)) == Jurisdiction.SOUTH

    def test_middle_band_never_north_or_south(self):
        for lat in (12.91, 12.95, 12.99):
            for lng in (70.0, 77.55, 77.6, 77.65, 80.0):
                zone = derive_jurisdiction(Coordinates(lat=lat, lng=lng))
                assert zone in (Jurisdiction.EAST, Jurisdiction.WEST, Jurisdiction.CENTRAL)


# =============================================================================
# TEST: SLA
# =============================================================================

class TestCalculateSlaDeadline:
    """Tests for calculate_sla_deadline."""

    def test_multiplier_one_keeps_amount(self):
        assert calculate_sla_deadline("Within 48 hours", severity(1)) == "Within 48 hours"

    def test_multiplier_two_halves_hours(self):
        assert calculate_sla_deadline("Within 24 hours", severity(2)) == "Within 12 hours"

    def test_rounds_up(self):
        assert calculate_sla_deadline("Within 24 hours", severity(1.5)) == "Within 16 hours"
        assert calculate_sla_deadline("Within 18 hours", severity(1.5)) == "Within 12 hours"
        assert calculate_sla_deadline("Within 5 hours", severity(2)) == "Within 3 hours"

    def test_days_unit(self):
        assert calculate_sla_deadline("Within 3 days", severity(2)) == "Within 2 days"

    def test_unit_rendered_plural(self):
        assert calculate_sla_deadline("Within 1 hour", severity(1)) == "Within 1 hours"
        assert calculate_sla_deadline("Within 1 day", severity(1)) == "Within 1 days"

    def test_case_insensitive_unit(self):
        assert calculate_sla_deadline("within 10 HOURS", severity(2)) == "Within 5 hours"

    @pytest.mark.parametrize("sla", ["ASAP", "", "Within a day", "24h"])
    def test_unparseable_passes_through(self, sla):
        assert calculate_sla_deadline(sla, severity(2)) == sla


# =============================================================================
# TEST: TEMPLATE SELECTION
# =============================================================================

class TestSelectTemplate:
    """Tests for select_template."""

    def test_keyword_substring_case_insensitive(self):
        template = select_template("Broken STREETLIGHT", DEFAULT_ROUTE_TEMPLATES, DEFAULT_ROUTING.default_route)
        assert template.department == "Electricity Board"

    def test_first_match_in_list_order_wins(self):
        """'Water leak on road' matches roads before water."""
        template = select_template("Water leak on road", DEFAULT_ROUTE_TEMPLATES, DEFAULT_ROUTING.default_route)
        assert template.id == "road-pothole"

        reordered = list(reversed(DEFAULT_ROUTE_TEMPLATES))
        template = select_template("Water leak on road", reordered, DEFAULT_ROUTING.default_route)
        assert template.id == "water-sewage"

    def test_no_match_uses_default_route(self):
        template = select_template("Mystery Noise", DEFAULT_ROUTE_TEMPLATES, DEFAULT_ROUTING.default_route)
        assert template.department == "Civic Response Center"

    def test_empty_template_list(self):
        assert select_template("pothole", [], DEFAULT_ROUTING.default_route).id == "default"

    def test_empty_keyword_never_matches(self):
        template = RouteTemplate(
            id="blank", keywords=[""], department="Nowhere", contact="x@civic.gov",
            response_sla="Within 1 hours"
        )
        assert select_template("anything", [template], DEFAULT_ROUTING.default_route).id == "default"


# =============================================================================
# TEST: RESOLVER
# =============================================================================

class TestRoutingResolver:
    """Tests for RoutingResolver.resolve."""

    def setup_method(self):
        self.resolver = RoutingResolver(DEFAULT_ROUTING)

    def test_high_severity_pothole(self):
        decision = self.resolver.resolve(
            "Massive Pothole on 5th Ave",
            DEFAULT_ROUTING.severity(Severity.HIGH),
            DEFAULT_ROUTE_TEMPLATES,
            Coordinates(lat=12.95, lng=77.60),
        )

        assert decision.department == "Municipal Roads Department"
        assert decision.contact == "roads@civic.gov"
        assert decision.priority == 1
        assert decision.escalated is True
        assert decision.response_sla == "Within 12 hours"
        assert decision.jurisdiction == "Central Zone"
        assert decision.notes == (
            "Coordinate asphalt team and traffic police for diversions. "
            "Jurisdiction: Central Zone. Priority Level: High."
        )

    def test_low_severity_unmatched_issue(self):
        decision = self.resolver.resolve(
            "Mystery Noise Complaint",
            DEFAULT_ROUTING.severity(Severity.LOW),
            DEFAULT_ROUTE_TEMPLATES,
        )

        assert decision.department == "Civic Response Center"
        assert decision.priority == 3
        assert decision.escalated is False
        assert decision.response_sla == "Within 48 hours"
        assert decision.jurisdiction == "Citywide"

    def test_medium_severity_sanitation(self):
        decision = self.resolver.resolve(
            "Overflowing garbage bin",
            DEFAULT_ROUTING.severity(Severity.MEDIUM),
            DEFAULT_ROUTE_TEMPLATES,
            Coordinates(lat=13.1, lng=77.60),
        )

        assert decision.department == "Sanitation Department"
        assert decision.priority == 2
        assert decision.response_sla == "Within 12 hours"
        assert decision.jurisdiction == "North Zone"

    def test_unknown_level_uses_medium_defaults(self):
        assert DEFAULT_ROUTING.severity(Severity.normalize("critical")).priority == 2

    def test_notes_use_resolved_severity_level(self):
        """An unrecognised classifier severity is reported as the Medium level it routes under."""
        level = Severity.normalize("Critical")
        decision = self.resolver.resolve("pothole", DEFAULT_ROUTING.severity(level), DEFAULT_ROUTE_TEMPLATES)

        assert decision.priority == 2
        assert decision.notes.endswith("Priority Level: Medium.")

    def test_response_serializes_camel_case(self):
        decision = self.resolver.resolve(
            "pothole", DEFAULT_ROUTING.severity(Severity.HIGH), DEFAULT_ROUTE_TEMPLATES
        )
        dumped = decision.model_dump(by_alias=True)
        assert dumped["responseSLA"] == "Within 12 hours"
        assert "response_sla" not in dumped

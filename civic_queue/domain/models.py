"""Domain Models - Pydantic schemas for all entities"""
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import Severity, IssueStatus, QueueStatus, Jurisdiction
from ..utils.time import ensure_utc


class CivicModel(BaseModel):
    """
    Base model shared by all entities

    Documents are stored with snake_case field names; the HTTP boundary
    speaks camelCase, so every model accepts both and dumps by alias on
    the way out.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class Coordinates(CivicModel):
    """Point reported with the complaint"""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


# ============================================================================
# Routing Configuration
# ============================================================================

class RouteTemplate(CivicModel):
    """Keyword rule mapping issue types to a responsible department"""
    id: str = Field(..., description="Template identifier")
    keywords: List[str] = Field(default_factory=list)
    department: str
    contact: str
    response_sla: str = Field(..., alias="responseSLA", description="Base SLA, e.g. 'Within 24 hours'")
    notes: str = ""
    severity_multiplier: Optional[float] = Field(None, description="Priority weight for the department")
    order: Optional[int] = Field(None, description="Position in the first-match scan")

    def matches(self, issue_type: str) -> bool:
        """True when any keyword is a case-insensitive substring of the issue type"""
        normalized = (issue_type or "").lower()
        return any(keyword.lower() in normalized for keyword in self.keywords if keyword)


class SeverityConfig(CivicModel):
    """Priority and escalation policy for a severity level"""
    level: Severity
    priority: int = Field(..., ge=1, le=3)
    auto_escalate: bool = False
    sla_multiplier: float = Field(1.0, gt=0)


class RoutingDefaults(CivicModel):
    """Built-in routing tables used when the config store is empty or unreachable"""
    model_config = ConfigDict(frozen=True)

    route_templates: Tuple[RouteTemplate, ...]
    severity_configs: Tuple[SeverityConfig, ...]
    default_route: RouteTemplate

    def severity(self, level: Severity) -> SeverityConfig:
        """Built-in config for a level, Medium when the level is absent"""
        by_level: Dict[str, SeverityConfig] = {config.level: config for config in self.severity_configs}
        return by_level.get(Severity(level).value) or by_level[Severity.MEDIUM.value]


# ============================================================================
# Routing Decision
# ============================================================================

class RoutingDecision(CivicModel):
    """Routing attached to an issue at submission time"""
    department: str
    contact: str
    response_sla: str = Field(..., alias="responseSLA")
    jurisdiction: Jurisdiction
    notes: str
    priority: int = Field(..., ge=1, le=3)
    escalated: bool = False


# ============================================================================
# Issue
# ============================================================================

class HistoryEntry(CivicModel):
    """Status change event; timestamp is None while the milestone is pending"""
    status: IssueStatus
    timestamp: Optional[datetime] = None
    note: str = ""

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class IssueAnalysis(CivicModel):
    """Structured output of the external classification step"""
    issue_type: str = Field(..., min_length=1)
    severity: Severity = Severity.MEDIUM
    urgency: str = "Routine"
    title: str = Field(..., min_length=1)
    summary: str = ""
    keywords: List[str] = Field(default_factory=list)
    department: Optional[str] = Field(None, description="Department suggested by the classifier")

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value):
        return Severity.normalize(value)


class Issue(IssueAnalysis):
    """Canonical record of a civic complaint"""
    complaint_id: str
    routing: Optional[RoutingDecision] = None
    status: IssueStatus = IssueStatus.SUBMITTED
    history: List[HistoryEntry] = Field(default_factory=list)
    location: Optional[Coordinates] = None
    description: Optional[str] = None
    user_id: Optional[str] = None
    user_email: Optional[EmailStr] = None
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


# ============================================================================
# Priority Queue
# ============================================================================

class QueueEntry(CivicModel):
    """Queue tracking object for one lifecycle instance of an issue"""
    entry_id: str
    complaint_id: str
    severity: Severity
    priority: int = Field(..., ge=1, le=3)
    status: QueueStatus
    department_id: str
    enqueued_at: datetime
    coordinates: Optional[Coordinates] = None
    updated_at: Optional[datetime] = None

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, value):
        return Severity.normalize(value)

    @field_validator("enqueued_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    @property
    def is_escalated(self) -> bool:
        return self.status == QueueStatus.ESCALATED


class QueuedIssue(Issue):
    """Issue enriched with its position in the ordered queue"""
    queue_position: int = Field(..., ge=1)
    enqueued_at: str = Field(..., description="ISO-8601 enqueue time")
    priority: int
    escalated: bool


class PriorityBreakdown(CivicModel):
    high: int = 0
    medium: int = 0
    low: int = 0


class QueueStats(CivicModel):
    """Aggregate over all queue entries, whatever their status"""
    total: int = 0
    queued: int = 0
    in_progress: int = 0
    escalated: int = 0
    resolved: int = 0
    by_priority: PriorityBreakdown = Field(default_factory=PriorityBreakdown)

"""Domain Enumerations - All status and type definitions"""
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Severity assigned by classification"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def normalize(cls, value: Optional[str]) -> "Severity":
        """
        Case-insensitive lookup; unknown or empty values fall back to Medium
        """
        if isinstance(value, Severity):
            return value
        candidate = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == candidate:
                return member
        return cls.MEDIUM


class IssueStatus(str, Enum):
    """Lifecycle status of the issue record"""
    SUBMITTED = "Submitted"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"


class QueueStatus(str, Enum):
    """Status of a queue entry"""
    QUEUED = "Queued"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    ESCALATED = "Escalated"


# At most one entry per complaint may sit in one of these
ACTIVE_QUEUE_STATUSES = (QueueStatus.QUEUED, QueueStatus.IN_PROGRESS, QueueStatus.ESCALATED)

# Entries shown in the ordered queue listing
LISTED_QUEUE_STATUSES = (QueueStatus.QUEUED, QueueStatus.ESCALATED)


class QueueAction(str, Enum):
    """Operator actions accepted by the status controller"""
    START = "start"
    RESOLVE = "resolve"
    ESCALATE = "escalate"


class Jurisdiction(str, Enum):
    """Coarse geographic zones derived from coordinates"""
    NORTH = "North Zone"
    SOUTH = "South Zone"
    EAST = "East Zone"
    WEST = "West Zone"
    CENTRAL = "Central Zone"
    CITYWIDE = "Citywide"

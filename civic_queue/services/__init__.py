"""Services module - Business logic layer"""
from .routing_service import RoutingService
from .queue_service import PriorityQueueService
from .queue_status_service import QueueStatusController
from .issue_service import IssueService

__all__ = [
    "RoutingService",
    "PriorityQueueService",
    "QueueStatusController",
    "IssueService",
]

"""Repository modules - Data access layer"""
from .mongo_client import get_database, get_collection
from .issue_repo import IssueRepository
from .queue_repo import QueueRepository
from .routing_config_repo import RoutingConfigRepository

__all__ = [
    "get_database",
    "get_collection",
    "IssueRepository",
    "QueueRepository",
    "RoutingConfigRepository",
]

"""Routing and queue engine - pure functions over configuration and entries"""
from .routing_resolver import (
    RoutingResolver, calculate_sla_deadline, derive_jurisdiction, select_template
)
from .queue_ordering import dedupe_by_complaint, order_entries, queue_sort_key

__all__ = [
    "RoutingResolver",
    "calculate_sla_deadline",
    "derive_jurisdiction",
    "select_template",
    "dedupe_by_complaint",
    "order_entries",
    "queue_sort_key",
]

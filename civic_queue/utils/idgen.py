"""ID Generation Utilities"""
import random
import uuid
from datetime import datetime
from typing import Optional

from .time import utc_now


COMPLAINT_PREFIX = "CIR"


def generate_id(prefix: Optional[str] = None) -> str:
    """
    Generate a unique ID with optional prefix

    Args:
        prefix: Optional prefix for the ID (e.g., 'QUE')

    Returns:
        Unique ID string

    Examples:
        >>> generate_id('QUE')
        'QUE-a1b2c3d4e5f6'
    """
    unique_part = uuid.uuid4().hex[:12]

    if prefix:
        return f"{prefix}-{unique_part}"
    return unique_part


def generate_queue_entry_id() -> str:
    """Generate queue entry ID"""
    return generate_id("QUE")


def generate_complaint_id(now: Optional[datetime] = None) -> str:
    """
    Generate a human-readable complaint ID

    Format is CIR-<YYYYMMDD>-<NNNN>: the UTC submission date without
    separators and a random segment drawn uniformly from [1000, 9999].
    Uniqueness is not guaranteed here; callers check for collisions.

    Examples:
        >>> generate_complaint_id()
        'CIR-20261019-4821'
    """
    now = now or utc_now()
    random_segment = random.randint(1000, 9999)
    return f"{COMPLAINT_PREFIX}-{now.strftime('%Y%m%d')}-{random_segment}"


def generate_correlation_id() -> str:
    """
    Generate a correlation ID for request tracing

    Returns:
        Correlation ID string with timestamp prefix
    """
    timestamp = utc_now().strftime("%Y%m%d%H%M%S")
    unique_part = uuid.uuid4().hex[:8]
    return f"COR-{timestamp}-{unique_part}"

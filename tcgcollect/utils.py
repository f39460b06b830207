"""
Small helpers shared by models, services and routes
"""
from datetime import datetime, timezone
from decimal import Decimal


def utcnow():
    """Naive UTC timestamp, the form every column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value is not None else None


def to_float(value):
    """Decimal columns -> JSON numbers"""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return value
